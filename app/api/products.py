from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, List
from app.database import get_db
from app.exceptions import ProductNotFoundError
from app.logging_config import get_logger
from app.schemas import MAX_INT, ProductResponse, MessageResponse, ValidationErrorResponse
from app.services import product_store
from app.services.validation import validate_product_payload

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

_ERROR_RESPONSES = {
    404: {"model": MessageResponse, "description": "Product not found"},
    422: {"model": ValidationErrorResponse, "description": "Validation failed"},
}


def _parse_id(product_id: str) -> int:
    # Non-numeric or out-of-range ids can't match a row; never send them to the database
    try:
        parsed = int(product_id)
    except ValueError:
        raise ProductNotFoundError(product_id) from None
    if parsed < 1 or parsed > MAX_INT:
        raise ProductNotFoundError(product_id)
    return parsed


async def _get_or_404(db: AsyncSession, product_id: str):
    parsed = _parse_id(product_id)
    product = await product_store.get_product(db, parsed)
    if not product:
        raise ProductNotFoundError(parsed)
    return product


@router.get("", response_model=List[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)):
    """List live products ordered by id."""
    products = await product_store.list_products(db)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse, responses={404: _ERROR_RESPONSES[404]})
async def get_product(product_id: str, db: AsyncSession = Depends(get_db)):
    """Get a single product by ID."""
    product = await _get_or_404(db, product_id)
    return ProductResponse.model_validate(product)


@router.post("", response_model=ProductResponse, status_code=201, responses={422: _ERROR_RESPONSES[422]})
async def create_product(payload: Any = Body(None), db: AsyncSession = Depends(get_db)):
    """Create a new product. product_code is optional here."""
    validated = await validate_product_payload(db, payload)
    product = await product_store.create_product(db, validated.model_dump())
    logger.info("Created product %s", product.id)
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse, responses=_ERROR_RESPONSES)
async def update_product(product_id: str, payload: Any = Body(None), db: AsyncSession = Depends(get_db)):
    """Replace every field of an existing product."""
    product = await _get_or_404(db, product_id)
    validated = await validate_product_payload(db, payload, product_id=product.id)
    product = await product_store.update_product(db, product, validated.model_dump())
    logger.info("Updated product %s", product.id)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=MessageResponse, responses={404: _ERROR_RESPONSES[404]})
async def delete_product(product_id: str, db: AsyncSession = Depends(get_db)):
    """Soft-delete a product."""
    product = await _get_or_404(db, product_id)
    await product_store.soft_delete_product(db, product)
    logger.info("Soft-deleted product %s", product.id)
    return MessageResponse(message="Product deleted successfully")
