from sqlalchemy import Column, Integer, String, Float, Boolean, CheckConstraint

from products_api.database import Base


class Product(Base):
    """
    Product model representing a catalog item.

    Attributes:
        id: Unique identifier for the product
        name: Product name (must not be empty)
        price: Product price (must be positive)
        availability: Whether the product can currently be sold
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    availability = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint('price > 0', name='check_price_positive'),
        CheckConstraint("name <> ''", name='check_name_not_empty'),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', availability={self.availability})>"
