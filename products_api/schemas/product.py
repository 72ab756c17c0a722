from pydantic import BaseModel, Field, ConfigDict


class ProductCreate(BaseModel):
    """Request body for creating a product."""
    name: str = Field(..., min_length=1, description="The Product name", examples=["Curved 27 inch monitor"])
    price: float = Field(..., gt=0, description="The Product price", examples=[299])


class ProductUpdate(ProductCreate):
    """Request body for replacing a product."""
    availability: bool = Field(..., description="The Product availability", examples=[True])


class ProductResponse(BaseModel):
    """Schema for product responses."""
    id: int = Field(..., description="The Product ID", examples=[1])
    name: str = Field(..., description="The Product name", examples=["Curved 49 inch monitor"])
    price: float = Field(..., description="The Product price", examples=[300])
    availability: bool = Field(..., description="The Product availability", examples=[True])

    model_config = ConfigDict(from_attributes=True)


class FieldError(BaseModel):
    """A single rule violation on one input field."""
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Body of a 400 response."""
    errors: list[FieldError]


class Message(BaseModel):
    detail: str
