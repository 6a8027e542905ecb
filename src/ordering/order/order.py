"""Order aggregate: a user's cart while unpaid, an order history entry once paid.

Lifecycle:
    ACTIVE (is_paid=False) --check_out--> PAID (is_paid=True)

PAID is terminal. Every line-item mutation is rejected on a paid order; the
next mutation for the same user goes to a freshly opened cart instead.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer

from ordering.domain import ordering
from ordering.order.events import (
    CartCreated,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    OrderCheckedOut,
)


@ordering.entity(part_of="Order")
class LineItem:
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(LineItem)
    is_paid = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()
    checked_out_at = DateTime()

    @invariant.post
    def paid_order_must_have_items(self):
        if self.is_paid and not self.items:
            raise ValidationError({"items": ["A paid order must contain at least one item"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, user_id):
        """Open an empty cart for a user."""
        now = datetime.now(UTC)
        order = cls(user_id=user_id, is_paid=False, created_at=now, updated_at=now)
        order.raise_(CartCreated(order_id=str(order.id), user_id=str(user_id)))
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, item_id):
        return next((line for line in self.items if str(line.item_id) == str(item_id)), None)

    @property
    def item_count(self):
        return sum(line.quantity for line in self.items)

    # -------------------------------------------------------------------
    # Line-item mutation
    # -------------------------------------------------------------------
    def _ensure_mutable(self):
        if self.is_paid:
            raise ValidationError({"is_paid": ["A paid order can no longer be changed"]})

    def add_item(self, item_id, quantity=1):
        """Add ``quantity`` units of an item, merging into an existing line."""
        self._ensure_mutable()
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        line = self.line_for(item_id)
        if line:
            line.quantity += quantity
        else:
            line = LineItem(item_id=item_id, quantity=quantity)
            self.add_items(line)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdded(
                order_id=str(self.id),
                item_id=str(item_id),
                quantity=quantity,
                line_quantity=line.quantity,
            )
        )

    def set_item_quantity(self, item_id, new_quantity):
        """Overwrite a line's quantity. Zero or less drops the line; the order stays."""
        self._ensure_mutable()

        line = self.line_for(item_id)
        if line is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})

        if new_quantity <= 0:
            self.remove_items(line)
            event = CartItemRemoved(order_id=str(self.id), item_id=str(item_id))
        else:
            previous_quantity = line.quantity
            line.quantity = new_quantity
            event = CartItemQuantityChanged(
                order_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )

        self.updated_at = datetime.now(UTC)
        self.raise_(event)

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def check_out(self):
        """Mark the cart as paid. Irreversible."""
        self._ensure_mutable()
        if not self.items:
            raise ValidationError({"items": ["Cannot check out an empty cart"]})

        now = datetime.now(UTC)
        self.is_paid = True
        self.checked_out_at = now
        self.updated_at = now

        self.raise_(
            OrderCheckedOut(
                order_id=str(self.id),
                user_id=str(self.user_id),
                item_count=self.item_count,
                checked_out_at=now,
            )
        )
