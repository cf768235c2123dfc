"""Product Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProductCreate.name: 1-60 chars, stripped, non-empty
    - price >= 0, stock is an integer >= 0
    - category must be one of ProductCategory
    - ProductPatch: every field optional, same bounds when present
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storefront.core.domain_types import ProductCategory


class ProductCreate(BaseModel):
    """Product creation — validates name, bounds and category."""
    name: str = Field(min_length=1, max_length=60)
    description: str | None = None
    category: ProductCategory
    price: float = Field(ge=0)
    stock: int = Field(ge=0, strict=True)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProductPatch(BaseModel):
    """Partial product update — only provided fields are written."""
    name: str | None = Field(None, min_length=1, max_length=60)
    description: str | None = None
    category: ProductCategory | None = None
    price: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0, strict=True)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in ("name", "category", "price", "stock"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ProductResponse(BaseModel):
    """Product response — public-facing product data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    category: ProductCategory
    price: float
    stock: int
    created_at: datetime
    updated_at: datetime
