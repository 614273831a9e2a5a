# product_api/models.py

"""
SQLAlchemy database models for the Products API.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from .db import Base


class Product(Base):
    """
    SQLAlchemy model for the 'products' table.
    Represents a catalog product with its price and availability flag.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(100), nullable=False)

    # Two decimal places; values come back from the driver as Decimal.
    price = Column(Numeric(10, 2), nullable=False)

    availability = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"availability={self.availability})>"
        )
