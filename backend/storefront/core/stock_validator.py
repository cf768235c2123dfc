"""Stock Validation — pure read-and-decide check before the atomic write phase.

Invariants:
    - Pure: takes already-fetched products, never touches the database
    - Missing products are reported before any stock comparison
    - Quantity per product resolved by first match in the request (no merging)
    - InsufficientStockError enumerates every understocked product, not just the first

Design Decisions:
    - Pre-filter only: conditional decrements in the write phase are the source of truth,
      this check exists so the common failure returns a precise message without a write
    - Duplicate product ids rejected outright (ADR: summing vs. rejecting is ambiguous,
      rejecting never mutates anything)
"""

from collections.abc import Iterable, Sequence

from storefront.core.domain_types import LineItem, ProductId
from storefront.core.errors import (
    ErrorContext,
    InsufficientStockError,
    ProductNotFoundError,
    StockShortfall,
    ValidationError,
)
from storefront.core.repository_protocols import ProductLike


def collect_product_ids(line_items: Sequence[LineItem]) -> list[ProductId]:
    """Distinct requested product ids, in first-seen order."""
    seen: dict[ProductId, None] = {}
    for item in line_items:
        seen.setdefault(item.product_id, None)
    return list(seen)


def resolve_quantity(line_items: Sequence[LineItem], product_id: ProductId) -> int:
    """Quantity of the first line item for product_id."""
    for item in line_items:
        if item.product_id == product_id:
            return item.quantity
    raise KeyError(product_id)


def check_line_items(line_items: Sequence[LineItem]) -> None:
    """Reject empty requests and requests that list a product more than once."""
    if not line_items:
        raise ValidationError("Order must contain at least one line item", "line_items")
    product_ids = [item.product_id for item in line_items]
    duplicates = sorted(
        {str(pid) for pid in product_ids if product_ids.count(pid) > 1},
    )
    if duplicates:
        raise ValidationError(
            f"Each product may appear only once per order: {', '.join(duplicates)}",
            field="line_items",
            context=ErrorContext(product_ids=duplicates),
        )


def check_stock(
    line_items: Sequence[LineItem], products: Iterable[ProductLike],
) -> None:
    """Raise if any requested product is missing or understocked."""
    check_line_items(line_items)

    by_id = {product.id: product for product in products}
    requested_ids = collect_product_ids(line_items)

    missing = [pid for pid in requested_ids if pid not in by_id]
    if missing:
        raise ProductNotFoundError(missing)

    shortfalls = [
        StockShortfall(pid, resolve_quantity(line_items, pid), by_id[pid].stock)
        for pid in requested_ids
        if by_id[pid].stock < resolve_quantity(line_items, pid)
    ]
    if shortfalls:
        raise InsufficientStockError(shortfalls)
