"""Order Store — SQLAlchemy implementation of the OrderStore protocol.

Invariants:
    - Never commits or rolls back: the caller owns the transaction boundary
    - decrement_stock is a single conditional UPDATE (stock >= qty in the WHERE clause);
      the affected row count is the only answer to "was there enough stock"
    - find_products_by_ids always re-reads stock (populate_existing), never the identity map
    - insert_order_with_items flushes so ids and created_at are populated before returning

Design Decisions:
    - Conditional write over SELECT ... FOR UPDATE: works identically on PostgreSQL and
      SQLite, and never lets stock go below zero even when the pre-filter read was stale
    - synchronize_session=False: the rowcount is what matters, in-session Product objects
      are not reused after the write phase
"""

import logging
from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import LineItem, ProductId, UserId
from storefront.models.order import Order, OrderItem
from storefront.models.product import Product
from storefront.models.user import User

logger = logging.getLogger(__name__)


class SqlOrderStore:
    """Order-placement persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_user(self, user_id: UserId) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_products_by_ids(
        self, product_ids: Sequence[ProductId],
    ) -> list[Product]:
        if not product_ids:
            return []
        result = await self.db.execute(
            select(Product)
            .where(Product.id.in_(product_ids))
            .execution_options(populate_existing=True),
        )
        return list(result.scalars().all())

    async def decrement_stock(self, product_id: ProductId, quantity: int) -> bool:
        """Decrement stock only if enough remains. False when the condition failed."""
        result = await self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .where(Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            logger.warning(
                f"Conditional stock decrement matched {result.rowcount} rows",
                extra={"product_id": str(product_id)},
            )
            return False
        return True

    async def insert_order_with_items(
        self, buyer_id: UserId, line_items: Sequence[LineItem],
    ) -> Order:
        order = Order(
            user_id=buyer_id,
            items=[
                OrderItem(
                    product_id=item.product_id,
                    line_number=position,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                )
                for position, item in enumerate(line_items, start=1)
            ],
        )
        self.db.add(order)
        await self.db.flush()
        return order
