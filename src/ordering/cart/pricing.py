"""Populating orders with catalog attributes and deriving their totals.

Totals are never stored. They are recomputed from the catalog's *current*
price every time an order is read, historical orders included, so a price
change after checkout changes the total shown for that order.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ordering.catalogue.lookup import CatalogLookup
from ordering.errors import ItemNotFound

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class PricedLine:
    item_id: str
    qty: int
    name: str | None = None
    price: float = 0.0
    category: str | None = None
    glyph: str | None = None
    unresolved: bool = False

    @property
    def ext_price(self) -> Decimal:
        return (Decimal(str(self.price)) * self.qty).quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricedOrder:
    id: str
    user_id: str
    is_paid: bool
    created_at: datetime | None = None
    checked_out_at: datetime | None = None
    lines: tuple[PricedLine, ...] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return compute_total(self)

    @property
    def item_count(self) -> int:
        return compute_item_count(self)


def compute_total(order: PricedOrder) -> Decimal:
    """Sum of price x quantity over every line, rounded to cents."""
    total = sum((Decimal(str(line.price)) * line.qty for line in order.lines), Decimal("0"))
    return total.quantize(_CENT, rounding=ROUND_HALF_UP)


def compute_item_count(order: PricedOrder) -> int:
    return sum(line.qty for line in order.lines)


def populate(order, catalog: CatalogLookup) -> PricedOrder:
    """Resolve every line item of a stored order against the catalog.

    An item that has since left the catalog is kept as an unresolved line
    priced at zero instead of failing the whole read.
    """
    lines = []
    for line in order.items:
        item_id = str(line.item_id)
        try:
            item = catalog.lookup(item_id)
        except ItemNotFound:
            lines.append(PricedLine(item_id=item_id, qty=line.quantity, unresolved=True))
            continue
        lines.append(
            PricedLine(
                item_id=item_id,
                qty=line.quantity,
                name=item.name,
                price=item.price,
                category=item.category,
                glyph=item.glyph,
            )
        )

    return PricedOrder(
        id=str(order.id),
        user_id=str(order.user_id),
        is_paid=bool(order.is_paid),
        created_at=order.created_at,
        checked_out_at=order.checked_out_at,
        lines=tuple(lines),
    )
