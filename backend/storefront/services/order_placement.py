"""Order Placement — validates stock, then decrements and inserts in one transaction.

Invariants:
    - Every failure rolls the session back before the error leaves this module:
      stock and order tables look exactly as they did before the request
    - The read-based stock check is a pre-filter; the conditional decrements decide
    - Decrements run in ascending product-id order (stable lock order across requests)
    - Nothing is retried here: TransactionConflictError is surfaced for the caller to retry

Design Decisions:
    - Service owns commit/rollback instead of the get_db dependency: the route must see
      a committed order before it answers 201
    - SQLAlchemy errors mapped to StorageError here, not in dependency teardown, so the
      mapping does not depend on FastAPI's cleanup ordering
"""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import LineItem, UserId
from storefront.core.errors import (
    ErrorContext,
    ResourceNotFoundError,
    StorefrontError,
    TransactionConflictError,
)
from storefront.core.repository_protocols import OrderStore
from storefront.core.stock_validator import (
    check_line_items,
    check_stock,
    collect_product_ids,
    resolve_quantity,
)
from storefront.infrastructure.database import map_storage_error
from storefront.models.order import Order
from storefront.services.order_store import SqlOrderStore

logger = logging.getLogger(__name__)


class OrderPlacementService:
    """Places one order atomically over the given session."""

    def __init__(self, db: AsyncSession, store: OrderStore | None = None):
        self.db = db
        self.store = store or SqlOrderStore(db)

    async def place_order(
        self, buyer_id: UserId, line_items: Sequence[LineItem],
    ) -> Order:
        """Check stock, then decrement and insert atomically. Returns the committed order."""
        try:
            order = await self._check_and_write(buyer_id, line_items)
            await self.db.commit()
        except StorefrontError as e:
            await self.db.rollback()
            logger.warning(
                f"Order rejected: {e.message}",
                extra={"user_id": str(buyer_id), "error_code": e.code},
            )
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise map_storage_error(e) from e

        logger.info(
            "Order placed",
            extra={
                "order_id": str(order.id),
                "user_id": str(buyer_id),
                "line_items": len(line_items),
            },
        )
        return order

    async def _check_and_write(
        self, buyer_id: UserId, line_items: Sequence[LineItem],
    ) -> Order:
        check_line_items(line_items)

        if await self.store.find_user(buyer_id) is None:
            raise ResourceNotFoundError(
                "User", str(buyer_id), ErrorContext(user_id=str(buyer_id)),
            )

        # Check phase (pre-filter)
        product_ids = collect_product_ids(line_items)
        products = await self.store.find_products_by_ids(product_ids)
        check_stock(line_items, products)

        # Write phase (atomic with the insert below)
        for product_id in sorted(product_ids, key=str):
            quantity = resolve_quantity(line_items, product_id)
            if not await self.store.decrement_stock(product_id, quantity):
                raise TransactionConflictError(
                    product_id, quantity, ErrorContext(user_id=str(buyer_id)),
                )

        return await self.store.insert_order_with_items(buyer_id, line_items)
