"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell (services/order_store.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from storefront.core.domain_types import LineItem, ProductId, UserId


class ProductLike(Protocol):
    """Structural contract for products passed to the stock validator."""
    id: UUID
    stock: int


class OrderItemLike(Protocol):
    """Structural contract for persisted order items used by the total calculator."""
    product_id: UUID
    unit_price: float
    quantity: int


class OrderLike(Protocol):
    id: UUID
    user_id: UUID
    items: list


class OrderStore(Protocol):
    """Contract for order-placement persistence — implemented by shell.

    Every method runs inside the caller's transaction; none commits.
    """
    async def find_user(self, user_id: UserId) -> object | None: ...
    async def find_products_by_ids(
        self, product_ids: Sequence[ProductId],
    ) -> list[ProductLike]: ...
    async def decrement_stock(self, product_id: ProductId, quantity: int) -> bool: ...
    async def insert_order_with_items(
        self, buyer_id: UserId, line_items: Sequence[LineItem],
    ) -> OrderLike: ...
