# product_api/exceptions.py

"""
Exceptions raised by the Products API.
Each one is translated into an HTTP response by the handlers registered in
`product_api.main`.
"""

from typing import List

from .schemas import Violation


class ProductApiError(Exception):
    """Base class for errors raised by this service."""


class InputValidationError(ProductApiError):
    """The request failed one or more validation rules (HTTP 400)."""

    def __init__(self, violations: List[Violation]):
        super().__init__(f"{len(violations)} validation error(s)")
        self.violations = violations


class ProductNotFound(ProductApiError):
    """A well-formed id matched no product (HTTP 404)."""

    def __init__(self, product_id: int):
        super().__init__("Product not found")
        self.product_id = product_id


class StoreError(ProductApiError):
    """The database rejected or failed an operation (HTTP 500)."""
