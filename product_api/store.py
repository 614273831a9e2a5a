# product_api/store.py

"""
Record store for products.

`ProductStore` wraps a SQLAlchemy session and exposes plain create / read /
update / delete calls. It only hands out `ProductResponse` records, so callers
never hold live ORM instances. Database failures are rolled back, logged and
re-raised as `StoreError`.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_db
from .exceptions import StoreError
from .models import Product
from .schemas import ProductResponse

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = ("name", "price", "availability")

# Bounds of the INTEGER primary key column
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


class ProductStore:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, exc: Exception) -> StoreError:
        self.db.rollback()
        logger.error(f"Error while trying to {action}: {exc}", exc_info=True)
        return StoreError(f"Could not {action}.")

    def _get(self, product_id: int) -> Optional[Product]:
        # No row can hold an id outside the column range
        if not MIN_ID <= product_id <= MAX_ID:
            return None
        return self.db.get(Product, product_id)

    def create(self, fields: Dict[str, Any]) -> ProductResponse:
        values = {k: v for k, v in fields.items() if k in WRITABLE_FIELDS}
        values.setdefault("availability", True)
        try:
            db_product = Product(**values)
            self.db.add(db_product)
            self.db.commit()
            self.db.refresh(db_product)
        except SQLAlchemyError as e:
            raise self._fail("create product", e) from e
        return ProductResponse.model_validate(db_product)

    def find_all(self) -> List[ProductResponse]:
        try:
            products = self.db.query(Product).order_by(Product.id).all()
        except SQLAlchemyError as e:
            raise self._fail("list products", e) from e
        return [ProductResponse.model_validate(p) for p in products]

    def find_by_id(self, product_id: int) -> Optional[ProductResponse]:
        try:
            product = self._get(product_id)
        except SQLAlchemyError as e:
            raise self._fail(f"fetch product {product_id}", e) from e
        if product is None:
            return None
        return ProductResponse.model_validate(product)

    def update(self, product_id: int, fields: Dict[str, Any]) -> Optional[ProductResponse]:
        """Overwrite the given fields; None when the product does not exist."""
        try:
            product = self._get(product_id)
            if product is None:
                return None
            for name, value in fields.items():
                if name in WRITABLE_FIELDS:
                    setattr(product, name, value)
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            raise self._fail(f"update product {product_id}", e) from e
        return ProductResponse.model_validate(product)

    def delete(self, product_id: int) -> bool:
        try:
            product = self._get(product_id)
            if product is None:
                return False
            self.db.delete(product)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(f"delete product {product_id}", e) from e
        return True


def get_store(db: Session = Depends(get_db)) -> ProductStore:
    """Dependency providing a request-scoped product store."""
    return ProductStore(db)
