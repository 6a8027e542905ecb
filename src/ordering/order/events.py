"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="Order")
class CartCreated:
    """A new, empty cart was opened for a user."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@ordering.event(part_of="Order")
class CartItemAdded:
    """An item was added to the cart, or its line quantity was increased."""

    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@ordering.event(part_of="Order")
class CartItemQuantityChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Order")
class CartItemRemoved:
    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.event(part_of="Order")
class OrderCheckedOut:
    """A cart was paid for and is now part of the user's order history."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    checked_out_at = DateTime(required=True)
