from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from products_api.database import get_db
from products_api.services.product_service import ProductService
from products_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ValidationErrorResponse,
    Message,
)
from products_api.utils.validation import body, param, validate

router = APIRouter(tags=["Products"])

PRODUCT_NOT_FOUND = "Product not found"
PRODUCT_DELETED = "Product deleted"


def _id_rule():
    return param("id").is_int("Invalid ID.").to_int()


def _product_rules():
    return (
        body("name")
            .is_string("Product name must be text.")
            .not_empty("Product name cannot be empty."),
        body("price")
            .is_numeric("Invalid value.")
            .not_empty("Product price cannot be empty.")
            .custom(lambda value: float(value) > 0, "Invalid price.")
            .to_float(),
    )


def _id_parameter(description: str) -> dict:
    """OpenAPI metadata for the ``id`` path parameter."""
    return {
        "parameters": [{
            "in": "path",
            "name": "id",
            "description": description,
            "required": True,
            "schema": {"type": "integer"},
        }]
    }


def _request_body(schema) -> dict:
    """OpenAPI metadata for a JSON request body."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


BAD_REQUEST = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ValidationErrorResponse,
        "description": "Bad Request - Invalid ID or invalid input data",
    }
}
NOT_FOUND = {
    status.HTTP_404_NOT_FOUND: {"model": Message, "description": "Product not found"}
}


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="Get a list of products",
    description="Return a list of products"
)
def list_products(db: Session = Depends(get_db)):
    """Get all products."""
    service = ProductService(db)
    return service.get_all()


@router.get(
    "/{id}",
    response_model=ProductResponse,
    summary="Get a product by ID",
    description="Return a product based on its unique ID",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra=_id_parameter("The ID of the product to retrieve")
)
def get_product(
    data: dict = Depends(validate(_id_rule())),
    db: Session = Depends(get_db)
):
    """Get a product by ID."""
    service = ProductService(db)
    product = service.get_by_id(data["id"])

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=PRODUCT_NOT_FOUND
        )

    return product


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Creates a new product",
    description="Returns a new record in the database",
    responses=BAD_REQUEST,
    openapi_extra=_request_body(ProductCreate)
)
def create_product(
    data: dict = Depends(validate(*_product_rules())),
    db: Session = Depends(get_db)
):
    """
    Create a new product.

    - **name**: Product name (required, not empty)
    - **price**: Product price, must be positive (required)
    """
    service = ProductService(db)
    return service.create(data["name"], data["price"])


@router.put(
    "/{id}",
    response_model=ProductResponse,
    summary="Updates a product with user input",
    description="Replaces name, price and availability and returns the updated product",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra={
        **_id_parameter("The ID of the product to update"),
        **_request_body(ProductUpdate),
    }
)
def update_product(
    data: dict = Depends(validate(
        _id_rule(),
        *_product_rules(),
        body("availability")
            .is_boolean("Invalid availability value.")
            .to_boolean(),
    )),
    db: Session = Depends(get_db)
):
    """Replace a product."""
    service = ProductService(db)
    product = service.update(
        data["id"],
        name=data["name"],
        price=data["price"],
        availability=data["availability"]
    )

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=PRODUCT_NOT_FOUND
        )

    return product


@router.patch(
    "/{id}",
    response_model=ProductResponse,
    summary="Toggles the availability of a product",
    description="Returns the updated availability",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra=_id_parameter("The ID of the product to update")
)
def update_availability(
    data: dict = Depends(validate(_id_rule())),
    db: Session = Depends(get_db)
):
    """Flip the availability of a product."""
    service = ProductService(db)
    product = service.toggle_availability(data["id"])

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=PRODUCT_NOT_FOUND
        )

    return product


@router.delete(
    "/{id}",
    response_model=str,
    summary="Deletes a product by a given ID",
    description="Returns a confirmation message",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra=_id_parameter("The ID of the product to delete")
)
def delete_product(
    data: dict = Depends(validate(_id_rule())),
    db: Session = Depends(get_db)
):
    """Delete a product."""
    service = ProductService(db)
    deleted = service.delete(data["id"])

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=PRODUCT_NOT_FOUND
        )

    return PRODUCT_DELETED
