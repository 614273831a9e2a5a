# product_api/router.py

"""
CRUD endpoints mounted under /api/productos.

Each route first resolves its validation dependency, so a malformed request
never reaches the store. Handlers keep no state between requests.
"""
import logging

from fastapi import APIRouter, Depends, status

from .exceptions import ProductNotFound
from .schemas import (
    DeletedEnvelope,
    ErrorResponse,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductReplace,
    ValidationErrorResponse,
)
from .store import ProductStore, get_store
from .validation import ValidatedRequest, validate_create, validate_id, validate_replace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/productos", tags=["Products"])

# The id is validated by the pipeline rather than by FastAPI, so it is
# documented here instead of in a signature.
ID_PARAMETER = {
    "name": "id",
    "in": "path",
    "required": True,
    "description": "The ID of the product to retrieve",
    "schema": {"type": "integer"},
}

INVALID_REQUEST = {400: {"model": ValidationErrorResponse, "description": "Bad request - invalid input"}}
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}


def _json_body(schema):
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


@router.get(
    "",
    response_model=ProductListEnvelope,
    summary="Get a list of products",
)
@router.get("/", response_model=ProductListEnvelope, include_in_schema=False)
def list_products(store: ProductStore = Depends(get_store)):
    """
    Returns every product in the catalog, ordered by id.
    """
    products = store.find_all()
    logger.info(f"Retrieved {len(products)} products.")
    return {"data": products}


@router.get(
    "/{id}",
    response_model=ProductEnvelope,
    responses={**INVALID_REQUEST, **NOT_FOUND},
    summary="Get a product by ID",
    openapi_extra={"parameters": [ID_PARAMETER]},
)
def get_product(
    validated: ValidatedRequest = Depends(validate_id),
    store: ProductStore = Depends(get_store),
):
    """
    Returns a single product based on its unique ID.
    """
    product_id = validated.product_id
    logger.info(f"Fetching product with ID: {product_id}")
    product = store.find_by_id(product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return {"data": product}


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=INVALID_REQUEST,
    summary="Creates a new product",
    openapi_extra=_json_body(ProductCreate),
)
@router.post(
    "/",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def create_product(
    validated: ValidatedRequest = Depends(validate_create),
    store: ProductStore = Depends(get_store),
):
    """
    Stores a new product. Availability always starts as true.
    """
    payload = validated.payload
    logger.info(f"Creating product: {payload.name}")
    product = store.create({**payload.model_dump(), "availability": True})
    logger.info(f"Product '{product.name}' (ID: {product.id}) created successfully.")
    return {"data": product}


@router.put(
    "/{id}",
    response_model=ProductEnvelope,
    responses={**INVALID_REQUEST, **NOT_FOUND},
    summary="Updates a product with user input",
    openapi_extra={"parameters": [ID_PARAMETER], **_json_body(ProductReplace)},
)
def replace_product(
    validated: ValidatedRequest = Depends(validate_replace),
    store: ProductStore = Depends(get_store),
):
    """
    Overwrites name, price and availability of an existing product.
    """
    product_id = validated.product_id
    logger.info(f"Replacing product with ID: {product_id}")
    if store.find_by_id(product_id) is None:
        raise ProductNotFound(product_id)
    product = store.update(product_id, validated.payload.model_dump())
    if product is None:
        # Deleted between the lookup and the write
        raise ProductNotFound(product_id)
    logger.info(f"Product '{product.name}' (ID: {product_id}) updated successfully.")
    return {"data": product}


@router.patch(
    "/{id}",
    response_model=ProductEnvelope,
    responses={**INVALID_REQUEST, **NOT_FOUND},
    summary="Update product availability",
    openapi_extra={"parameters": [ID_PARAMETER]},
)
def toggle_availability(
    validated: ValidatedRequest = Depends(validate_id),
    store: ProductStore = Depends(get_store),
):
    """
    Flips the availability flag of a product. No request body is read.
    """
    product_id = validated.product_id
    current = store.find_by_id(product_id)
    if current is None:
        raise ProductNotFound(product_id)
    product = store.update(product_id, {"availability": not current.availability})
    if product is None:
        raise ProductNotFound(product_id)
    logger.info(
        f"Product (ID: {product_id}) availability set to {product.availability}."
    )
    return {"data": product}


@router.delete(
    "/{id}",
    response_model=DeletedEnvelope,
    responses={**INVALID_REQUEST, **NOT_FOUND},
    summary="Deletes a product by a given ID",
    openapi_extra={"parameters": [ID_PARAMETER]},
)
def delete_product(
    validated: ValidatedRequest = Depends(validate_id),
    store: ProductStore = Depends(get_store),
):
    """
    Removes a product permanently.
    """
    product_id = validated.product_id
    logger.info(f"Attempting to delete product with ID: {product_id}")
    if not store.delete(product_id):
        raise ProductNotFound(product_id)
    logger.info(f"Product (ID: {product_id}) deleted successfully.")
    return {"data": "Product deleted successfully"}
