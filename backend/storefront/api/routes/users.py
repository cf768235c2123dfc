"""Users — profile CRUD, saved-product toggling, and order history.

Invariants:
    - Email uniqueness checked before writing (409 instead of a storage error)
    - User and preference are created together and deleted together
    - Deleting a user deletes their orders and saved-product links, never products
    - Saved-products POST is a toggle: saves when absent, un-saves when present

Design Decisions:
    - Collections loaded explicitly with selectinload: the relationships are lazy="raise",
      so a missing option fails loudly instead of issuing async lazy loads
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.api.routes.orders import serialize_order
from storefront.api.routes.products import get_product_or_404
from storefront.config import get_settings
from storefront.core.domain_types import SortDirection
from storefront.core.errors import (
    DuplicateResourceError, ErrorContext, ResourceNotFoundError,
)
from storefront.core.listing_order import (
    USER_LISTING_ORDERS, resolve_listing_order,
)
from storefront.infrastructure.database import get_db
from storefront.models.order import Order
from storefront.models.user import User, UserPreference
from storefront.schemas.order import OrderResponse
from storefront.schemas.product import ProductResponse
from storefront.schemas.user import (
    SavedProductToggle, UserCreate, UserPatch, UserResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])
settings = get_settings()


async def get_user_or_404(
    user_id: UUID, db: AsyncSession, *options,
) -> User:
    """Get user (with optional loader options) or raise ResourceNotFoundError."""
    result = await db.execute(
        select(User).where(User.id == user_id).options(*options),
    )
    user = result.scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError(
            "User", str(user_id), ErrorContext(user_id=str(user_id)),
        )
    return user


async def _ensure_email_available(
    email: str, db: AsyncSession, exclude_user_id: UUID | None = None,
) -> None:
    query = select(User.id).where(User.email == email)
    if exclude_user_id:
        query = query.where(User.id != exclude_user_id)
    if await db.scalar(query):
        raise DuplicateResourceError("User", "email", email)


@router.get("", response_model=list[UserResponse])
async def list_users(
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    order: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List users with pagination and named order (oldest/newest)."""
    field, direction = resolve_listing_order(order, USER_LISTING_ORDERS)
    column = getattr(User, field)
    query = (
        select(User)
        .order_by(
            column.asc() if direction == SortDirection.ASC else column.desc(),
            User.id,
        )
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID, db: AsyncSession = Depends(get_db),
):
    return await get_user_or_404(user_id, db)


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, db: AsyncSession = Depends(get_db),
):
    """Create a user together with their preference."""
    await _ensure_email_available(body.email, db)
    user = User(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        address=body.address,
        preference=UserPreference(
            receive_email=body.preference.receive_email,
        ),
    )
    db.add(user)
    await db.commit()
    logger.info("User created", extra={"user_id": str(user.id)})
    return user


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID, body: UserPatch, db: AsyncSession = Depends(get_db),
):
    """Update only the fields present in the body (preference included)."""
    user = await get_user_or_404(user_id, db)
    changes = body.model_dump(exclude_unset=True, exclude={"preference"})
    if "email" in changes:
        await _ensure_email_available(changes["email"], db, exclude_user_id=user.id)
    for field, value in changes.items():
        setattr(user, field, value)

    if body.preference is not None:
        if user.preference is None:
            user.preference = UserPreference(
                receive_email=body.preference.receive_email,
            )
        else:
            user.preference.receive_email = body.preference.receive_email

    await db.commit()
    return user


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Delete a user, cascading preference, orders and saved-product links."""
    user = await get_user_or_404(
        user_id, db,
        selectinload(User.orders), selectinload(User.saved_products),
    )
    await db.delete(user)
    await db.commit()
    logger.info("User deleted", extra={"user_id": str(user_id)})
    return {"message": "User deleted"}


@router.get(
    "/{user_id}/saved-products", response_model=list[ProductResponse],
)
async def list_saved_products(
    user_id: UUID, db: AsyncSession = Depends(get_db),
):
    user = await get_user_or_404(
        user_id, db, selectinload(User.saved_products),
    )
    return user.saved_products


@router.post(
    "/{user_id}/saved-products", response_model=list[ProductResponse],
)
async def toggle_saved_product(
    user_id: UUID, body: SavedProductToggle, db: AsyncSession = Depends(get_db),
):
    """Save the product if not yet saved, otherwise un-save it."""
    user = await get_user_or_404(
        user_id, db, selectinload(User.saved_products),
    )
    product = await get_product_or_404(body.product_id, db)
    if product in user.saved_products:
        user.saved_products.remove(product)
    else:
        user.saved_products.append(product)
    await db.commit()
    return user.saved_products


@router.get("/{user_id}/orders", response_model=list[OrderResponse])
async def list_user_orders(
    user_id: UUID, db: AsyncSession = Depends(get_db),
):
    """A user's orders, newest first, each with its derived total."""
    await get_user_or_404(user_id, db)
    result = await db.execute(
        select(Order)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id),
    )
    return [serialize_order(order) for order in result.scalars().all()]
