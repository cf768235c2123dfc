"""Products — catalogue CRUD with category filter and named sort orders.

Invariants:
    - Listing order resolved through core/listing_order.py (explicit table, no fallthrough)
    - PATCH writes only the fields present in the body
    - A product referenced by any order item cannot be deleted (orders are history)

Design Decisions:
    - get_product_or_404 exported for reuse by the users route (saved products)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import get_settings
from storefront.core.domain_types import ProductCategory, SortDirection
from storefront.core.errors import ResourceInUseError, ResourceNotFoundError
from storefront.core.listing_order import (
    PRODUCT_LISTING_ORDERS, resolve_listing_order,
)
from storefront.infrastructure.database import get_db
from storefront.models.order import OrderItem
from storefront.models.product import Product
from storefront.schemas.product import (
    ProductCreate, ProductPatch, ProductResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/products", tags=["products"])
settings = get_settings()


async def get_product_or_404(product_id: UUID, db: AsyncSession) -> Product:
    """Get product or raise ResourceNotFoundError. Exported for users routes."""
    result = await db.execute(select(Product).where(Product.id == product_id))
    product = result.scalar_one_or_none()
    if not product:
        raise ResourceNotFoundError("Product", str(product_id))
    return product


@router.get("", response_model=list[ProductResponse])
async def list_products(
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    category: ProductCategory | None = Query(None),
    order: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List products with pagination, optional category and named order."""
    field, direction = resolve_listing_order(order, PRODUCT_LISTING_ORDERS)
    column = getattr(Product, field)
    query = select(Product).order_by(
        column.asc() if direction == SortDirection.ASC else column.desc(),
        Product.id,
    )
    if category:
        query = query.where(Product.category == category.value)
    query = query.offset(offset).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID, db: AsyncSession = Depends(get_db),
):
    return await get_product_or_404(product_id, db)


@router.post(
    "", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate, db: AsyncSession = Depends(get_db),
):
    """Create a catalogue product."""
    product = Product(**body.model_dump(mode="json"))
    db.add(product)
    await db.commit()
    await db.refresh(product)
    logger.info("Product created", extra={"product_id": str(product.id)})
    return product


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID, body: ProductPatch, db: AsyncSession = Depends(get_db),
):
    """Update only the fields present in the body."""
    product = await get_product_or_404(product_id, db)
    for field, value in body.model_dump(exclude_unset=True, mode="json").items():
        setattr(product, field, value)
    await db.commit()
    await db.refresh(product)
    return product


@router.delete("/{product_id}")
async def delete_product(
    product_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Delete a product that no order references."""
    product = await get_product_or_404(product_id, db)
    references = await db.scalar(
        select(func.count()).select_from(OrderItem)
        .where(OrderItem.product_id == product_id),
    )
    if references:
        raise ResourceInUseError("Product", str(product_id), "orders")
    await db.delete(product)
    await db.commit()
    logger.info("Product deleted", extra={"product_id": str(product_id)})
    return {"message": "Product deleted"}
