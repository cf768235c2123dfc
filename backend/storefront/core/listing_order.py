"""Listing Order Resolution — maps named sort orders to (field, direction) pairs.

Invariants:
    - Every resource has an explicit table; no fallthrough between entries
    - Unrecognized, missing, or "newest" values all resolve to created_at descending
    - Pure: returns field names only, the shell turns them into ORM columns

Design Decisions:
    - Per-resource tables: price orders only make sense for products, so users reject them
      by falling back to the default instead of sorting on a column they do not have
"""

from storefront.core.domain_types import SortDirection, SortOrder


ListingOrder = tuple[str, SortDirection]

DEFAULT_LISTING_ORDER: ListingOrder = ("created_at", SortDirection.DESC)

USER_LISTING_ORDERS: dict[SortOrder, ListingOrder] = {
    SortOrder.OLDEST: ("created_at", SortDirection.ASC),
    SortOrder.NEWEST: ("created_at", SortDirection.DESC),
}

PRODUCT_LISTING_ORDERS: dict[SortOrder, ListingOrder] = {
    SortOrder.OLDEST: ("created_at", SortDirection.ASC),
    SortOrder.NEWEST: ("created_at", SortDirection.DESC),
    SortOrder.PRICE_LOWEST: ("price", SortDirection.ASC),
    SortOrder.PRICE_HIGHEST: ("price", SortDirection.DESC),
}


def resolve_listing_order(
    requested: str | None, table: dict[SortOrder, ListingOrder],
) -> ListingOrder:
    """Resolve a raw `order` query value against a resource table."""
    if not requested:
        return DEFAULT_LISTING_ORDER
    try:
        key = SortOrder(requested)
    except ValueError:
        return DEFAULT_LISTING_ORDER
    return table.get(key, DEFAULT_LISTING_ORDER)
