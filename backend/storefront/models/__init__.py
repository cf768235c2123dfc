"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns its preference and orders; Order owns its items

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (standard SQLAlchemy pattern)
"""

from storefront.models.user import User, UserPreference  # noqa: F401
from storefront.models.product import Product  # noqa: F401
from storefront.models.order import Order, OrderItem  # noqa: F401
