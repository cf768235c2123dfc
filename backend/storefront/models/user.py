"""User ORM — buyer identity, e-mail preference, and saved products.

Invariants:
    - email is unique
    - Every user owns exactly one UserPreference (created together, deleted together)
    - Orders are cascade-deleted with their user
    - saved_products is a plain many-to-many link; deleting a user never deletes products

Design Decisions:
    - Preference in its own table: keeps the users row narrow, mirrors the public API shape
    - preference loaded with selectin: every user response includes it
    - orders/saved_products not eagerly loaded: routes ask for them with selectinload
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from storefront.db.base import Base


saved_products = Table(
    "saved_products",
    Base.metadata,
    Column(
        "user_id", UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "product_id", UUID(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class User(Base):
    """User aggregate root — owns its preference and orders."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(30), nullable=False)
    last_name: Mapped[str] = mapped_column(String(30), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    preference: Mapped["UserPreference"] = relationship(
        "UserPreference", back_populates="user", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
    orders: Mapped[list["Order"]] = relationship(
        "Order", back_populates="user",
        cascade="all, delete-orphan", lazy="raise",
    )
    saved_products: Mapped[list["Product"]] = relationship(
        "Product", secondary=saved_products, lazy="raise",
    )


class UserPreference(Base):
    """Per-user notification preference."""
    __tablename__ = "user_preferences"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    receive_email: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="preference")
