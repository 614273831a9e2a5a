# product_api/schemas.py

"""
Pydantic schemas for the Products API.
These define the data structures for validated request payloads and outgoing
responses, and feed the generated OpenAPI documentation.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Payload for POST /api/productos, built only after the request rules passed.
class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Name of the product.")
    price: float = Field(..., gt=0, description="Price of the product. Must be greater than 0.")

    @field_validator("name", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # A numeric name is still a name
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


# Payload for PUT /api/productos/{id}. Every field is overwritten.
class ProductReplace(ProductCreate):
    availability: bool = Field(..., description="Whether the product can be sold.")


# Schema for representing a product in API responses.
class ProductResponse(BaseModel):
    id: int = Field(..., description="Unique identifier of the product.")
    name: str
    price: float
    availability: bool
    created_at: Optional[datetime] = Field(None, description="Timestamp when the product was created.")
    updated_at: Optional[datetime] = Field(None, description="Timestamp when the product was last updated.")

    model_config = ConfigDict(from_attributes=True)


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    data: List[ProductResponse]


class DeletedEnvelope(BaseModel):
    data: str = Field(..., examples=["Product deleted successfully"])


# A single failed rule. `value` is only set when the field was sent.
class Violation(BaseModel):
    type: str = "field"
    value: Any = None
    msg: str
    path: Optional[str] = None
    location: str


class ValidationErrorResponse(BaseModel):
    errors: List[Violation]


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Product not found"])


class ApiMessage(BaseModel):
    msg: str
