import logging
from typing import Optional, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from products_api.models.product import Product

logger = logging.getLogger(__name__)

# Range of the 32-bit Integer primary key column
MIN_PRODUCT_ID = -2**31
MAX_PRODUCT_ID = 2**31 - 1


class ProductService:
    """
    Service class for Product CRUD operations.

    Each method performs a single persistence operation and commits it
    before returning. Database errors roll the session back, are logged,
    and propagate to the caller.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Product]:
        """Get every product ordered by ID."""
        try:
            return self.db.query(Product).order_by(Product.id.asc()).all()
        except SQLAlchemyError as e:
            self._fail("listing products", e)

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """
        Get a product by ID.

        Returns:
            Product instance or None if not found
        """
        try:
            return self._find(product_id)
        except SQLAlchemyError as e:
            self._fail(f"fetching product {product_id}", e)

    def create(self, name: str, price: float) -> Product:
        """
        Create a new product. Availability defaults to True.

        Returns:
            Created product instance
        """
        product = Product(name=name, price=price)
        try:
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            self._fail("creating product", e)

        logger.info(f"Product #{product.id} created")
        return product

    def update(
        self,
        product_id: int,
        name: str,
        price: float,
        availability: bool
    ) -> Optional[Product]:
        """
        Replace name, price and availability of an existing product.

        Returns:
            Updated product or None if not found
        """
        try:
            product = self._find(product_id)
            if not product:
                return None

            product.name = name
            product.price = price
            product.availability = availability
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            self._fail(f"updating product {product_id}", e)

        logger.info(f"Product #{product_id} updated")
        return product

    def toggle_availability(self, product_id: int) -> Optional[Product]:
        """
        Flip the availability flag of a product.

        Returns:
            Updated product or None if not found
        """
        try:
            product = self._find(product_id)
            if not product:
                return None

            product.availability = not product.availability
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            self._fail(f"toggling availability of product {product_id}", e)

        logger.info(f"Product #{product_id} availability set to {product.availability}")
        return product

    def delete(self, product_id: int) -> bool:
        """
        Delete a product.

        Returns:
            True if deleted, False if not found
        """
        try:
            product = self._find(product_id)
            if not product:
                return False

            self.db.delete(product)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(f"deleting product {product_id}", e)

        logger.info(f"Product #{product_id} deleted")
        return True

    def _fail(self, action: str, error: SQLAlchemyError):
        """Roll back the session, log the error and re-raise it."""
        self.db.rollback()
        logger.error(f"Database error {action}: {error}")
        raise error

    def _find(self, product_id: int) -> Optional[Product]:
        """Look up a product; IDs the column cannot hold are never found."""
        if not MIN_PRODUCT_ID <= product_id <= MAX_PRODUCT_ID:
            return None
        return self.db.get(Product, product_id)
