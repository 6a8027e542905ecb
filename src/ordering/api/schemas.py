"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the Protean aggregates and the
priced views the cart manager returns.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ordering.cart.pricing import PricedLine, PricedOrder
from ordering.catalogue.lookup import CatalogItem


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class SetQuantityRequest(BaseModel):
    """Body of ``PUT /cart/qty``: ``{"itemId": ..., "qty": ...}``; snake_case names are accepted too."""

    item_id: str = Field(min_length=1, alias="itemId")
    new_qty: int = Field(alias="qty")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"itemId": "0d9f6c1e-0000-4000-8000-000000000001", "qty": 3},
                {"itemId": "0d9f6c1e-0000-4000-8000-000000000001", "qty": 0},
            ]
        },
    }


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class LineItemResponse(BaseModel):
    item_id: str
    name: str | None = None
    price: float
    category: str | None = None
    glyph: str | None = None
    qty: int
    ext_price: float
    unresolved: bool = False

    @classmethod
    def from_line(cls, line: PricedLine) -> "LineItemResponse":
        return cls(
            item_id=line.item_id,
            name=line.name,
            price=line.price,
            category=line.category,
            glyph=line.glyph,
            qty=line.qty,
            ext_price=float(line.ext_price),
            unresolved=line.unresolved,
        )


class OrderResponse(BaseModel):
    id: str
    user_id: str
    is_paid: bool
    created_at: datetime | None = None
    checked_out_at: datetime | None = None
    items: list[LineItemResponse]
    total: float
    item_count: int

    @classmethod
    def from_order(cls, order: PricedOrder) -> "OrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            is_paid=order.is_paid,
            created_at=order.created_at,
            checked_out_at=order.checked_out_at,
            items=[LineItemResponse.from_line(line) for line in order.lines],
            total=float(order.total),
            item_count=order.item_count,
        )


class CatalogItemResponse(BaseModel):
    id: str
    name: str
    price: float
    category: str | None = None
    glyph: str | None = None

    @classmethod
    def from_item(cls, item: CatalogItem) -> "CatalogItemResponse":
        return cls(id=item.id, name=item.name, price=item.price, category=item.category, glyph=item.glyph)


class ErrorResponse(BaseModel):
    kind: str
    message: str
