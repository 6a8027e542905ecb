"""Catalog reference data: menu items and the categories they are grouped by.

The ordering core only ever reads these. Line items hold an item id and
resolve name, price and glyph through the catalog lookup at read time.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.aggregate
class Category:
    name = String(required=True, max_length=100)
    sort_order = Integer(default=0)

    @classmethod
    def create(cls, name, sort_order=0):
        return cls(name=name, sort_order=sort_order)


@ordering.aggregate
class Item:
    name = String(required=True, max_length=100)
    emoji = String(max_length=16)
    category_id = Identifier()
    price = Float(default=0.0, min_value=0.0)
    created_at = DateTime()

    @classmethod
    def create(cls, name, price=0.0, category_id=None, emoji=None):
        return cls(
            name=name,
            price=price,
            category_id=category_id,
            emoji=emoji,
            created_at=datetime.now(UTC),
        )
