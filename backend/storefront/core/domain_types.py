"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProductId, OrderId wrap UUIDs — never use bare UUID in domain logic
    - Product categories and sort orders encoded as Enums — no raw string matching
    - LineItem is immutable once built from a request

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ProductId = NewType("ProductId", UUID)
OrderId = NewType("OrderId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class LineItem:
    """One (product, quantity, unit price) tuple within an order request."""
    product_id: ProductId
    quantity: int        # >= 1
    unit_price: float    # >= 0, captured at order time


# ─── Enums ───────────────────────────────────────────────────────

class ProductCategory(str, Enum):
    """Fixed product catalogue categories — maps to DB `category` column."""
    FASHION = "FASHION"
    BEAUTY = "BEAUTY"
    SPORTS = "SPORTS"
    ELECTRONICS = "ELECTRONICS"
    HOME_INTERIOR = "HOME_INTERIOR"
    HOUSEHOLD_SUPPLIES = "HOUSEHOLD_SUPPLIES"
    KITCHENWARE = "KITCHENWARE"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(str, Enum):
    """Named listing orders accepted by the `order` query parameter."""
    OLDEST = "oldest"
    NEWEST = "newest"
    PRICE_LOWEST = "priceLowest"
    PRICE_HIGHEST = "priceHighest"
