"""Order Totals — derived read-path total from persisted line items.

Invariants:
    - total = sum(unit_price * quantity) over the order's own items
    - Never consults the product's current price (captured price only)
    - Pure and deterministic; native float arithmetic, no rounding
"""

from collections.abc import Iterable

from storefront.core.repository_protocols import OrderItemLike


def compute_order_total(items: Iterable[OrderItemLike]) -> float:
    """Sum of unit_price * quantity. Empty order totals 0."""
    total = 0.0
    for item in items:
        total += item.unit_price * item.quantity
    return total
