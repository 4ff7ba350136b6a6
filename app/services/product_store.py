"""
Product persistence.

Every read path filters out soft-deleted rows; deletes only stamp ``deleted_at``.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy import select, func, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.exceptions import ProductValidationError
from app.models.product import Product
from app.services.messages import taken_message

# Columns a payload may write; id and timestamps are server-owned
WRITABLE_FIELDS = ("product_code", "product_name", "description", "price", "quantity", "category")


def _live():
    return Product.deleted_at.is_(None)


async def list_products(db: AsyncSession) -> List[Product]:
    result = await db.execute(select(Product).where(_live()).order_by(Product.id.asc()))
    return list(result.scalars().all())


async def get_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    result = await db.execute(select(Product).where(and_(Product.id == product_id, _live())))
    return result.scalar_one_or_none()


async def product_code_taken(db: AsyncSession, product_code: str, exclude_id: Optional[int] = None) -> bool:
    conditions = [Product.product_code == product_code, _live()]
    if exclude_id is not None:
        conditions.append(Product.id != exclude_id)
    result = await db.execute(select(func.count()).select_from(Product).where(and_(*conditions)))
    return result.scalar() > 0


async def _commit(db: AsyncSession, product: Product) -> Product:
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race on the live product_code index
        await db.rollback()
        raise ProductValidationError({"product_code": [taken_message("product_code")]})
    await db.refresh(product)
    return product


async def create_product(db: AsyncSession, data: Dict[str, Any]) -> Product:
    product = Product(**{field: data.get(field) for field in WRITABLE_FIELDS})
    db.add(product)
    return await _commit(db, product)


async def update_product(db: AsyncSession, product: Product, data: Dict[str, Any]) -> Product:
    """Full replace: writable fields missing from ``data`` are cleared."""
    for field in WRITABLE_FIELDS:
        setattr(product, field, data.get(field))
    return await _commit(db, product)


async def soft_delete_product(db: AsyncSession, product: Product) -> Product:
    product.deleted_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(product)
    return product
