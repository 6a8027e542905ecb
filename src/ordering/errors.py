"""Error taxonomy for cart and order operations.

Every error carries a stable machine-readable ``kind`` and the HTTP status
the API layer answers with. Storage failures never expose their detail.
"""


class CartError(Exception):
    kind = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class NotFound(CartError):
    kind = "not_found"
    status_code = 404


class ItemNotFound(NotFound):
    """The catalog has no item with the given id."""

    def __init__(self, item_id: str):
        super().__init__(f"Item '{item_id}' does not exist")
        self.item_id = item_id


class ItemNotInCart(NotFound):
    """The user's cart has no line item for the given item."""

    def __init__(self, item_id: str):
        super().__init__(f"Item '{item_id}' is not in the cart")
        self.item_id = item_id


class InvalidInput(CartError):
    kind = "invalid_input"
    status_code = 400


class EmptyCartCheckout(CartError):
    kind = "empty_cart_checkout"
    status_code = 400

    def __init__(self, user_id: str):
        super().__init__("Cannot check out an empty cart")
        self.user_id = user_id


class ConcurrentCartUpdate(CartError):
    """The stored order changed between read and write."""

    kind = "conflict"
    status_code = 409

    def __init__(self, order_id: str):
        super().__init__("The cart was modified by another request, please retry")
        self.order_id = order_id


class UpstreamUnavailable(CartError):
    kind = "upstream_unavailable"
    status_code = 503

    def __init__(self, message: str = "A backing service is unavailable"):
        super().__init__(message)
