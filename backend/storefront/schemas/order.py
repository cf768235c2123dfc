"""Order Schemas — request contract for placement and the order read model.

Invariants:
    - PlaceOrderRequest.line_items is non-empty
    - Each line item: quantity is an integer >= 1, unit_price >= 0
    - A product id appears at most once per request (never merged)
    - OrderResponse.total is derived from the captured items, never from current prices

Design Decisions:
    - Duplicate check lives here AND in core/stock_validator.py: the schema gives a
      field-level 400 at the boundary, the core guard protects direct service callers
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.core.domain_types import LineItem, ProductId


class LineItemIn(BaseModel):
    """One requested line: product, captured unit price, quantity."""
    product_id: UUID
    unit_price: float = Field(ge=0)
    quantity: int = Field(ge=1, strict=True)

    def to_domain(self) -> LineItem:
        return LineItem(
            product_id=ProductId(self.product_id),
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


class PlaceOrderRequest(BaseModel):
    """Order placement — buyer plus non-empty list of distinct line items."""
    buyer_id: UUID
    line_items: list[LineItemIn] = Field(min_length=1)

    @model_validator(mode="after")
    def reject_duplicate_products(self):
        seen: set[UUID] = set()
        for item in self.line_items:
            if item.product_id in seen:
                raise ValueError(
                    f"product {item.product_id} appears more than once; "
                    f"combine the quantities into one line item",
                )
            seen.add(item.product_id)
        return self


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: UUID
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    """Order read model — line items plus derived total."""
    id: UUID
    buyer_id: UUID
    created_at: datetime
    line_items: list[OrderItemResponse]
    total: float
