"""Orders — transactional placement and read-back with derived totals.

Invariants:
    - POST /orders answers 201 only after the order and all stock decrements committed
    - Request body validated by Pydantic before reaching the route handler
    - total is computed on every read from the captured line items

Design Decisions:
    - serialize_order exported for reuse by the users route (GET /users/{id}/orders)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import UserId
from storefront.core.errors import ErrorContext, ResourceNotFoundError
from storefront.core.order_totals import compute_order_total
from storefront.infrastructure.database import get_db
from storefront.models.order import Order
from storefront.schemas.order import (
    OrderItemResponse, OrderResponse, PlaceOrderRequest,
)
from storefront.services.order_placement import OrderPlacementService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


def serialize_order(order: Order) -> OrderResponse:
    """Order read model with total derived from its own items."""
    return OrderResponse(
        id=order.id,
        buyer_id=order.user_id,
        created_at=order.created_at,
        line_items=[
            OrderItemResponse.model_validate(item) for item in order.items
        ],
        total=compute_order_total(order.items),
    )


@router.post(
    "", response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def place_order(
    body: PlaceOrderRequest, db: AsyncSession = Depends(get_db),
):
    """Place an order: stock check, decrements and insert in one transaction."""
    service = OrderPlacementService(db)
    order = await service.place_order(
        UserId(body.buyer_id),
        [item.to_domain() for item in body.line_items],
    )
    return serialize_order(order)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Get an order with its items and derived total."""
    result = await db.execute(select(Order).where(Order.id == order_id))
    order = result.scalar_one_or_none()
    if not order:
        raise ResourceNotFoundError(
            "Order", str(order_id), ErrorContext(order_id=str(order_id)),
        )
    return serialize_order(order)
