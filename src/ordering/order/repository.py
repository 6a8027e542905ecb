"""Cart repository: persistence contract behind the cart manager.

"The active cart" is a query predicate (owner + ``is_paid=False``), never an
in-process singleton. Stale writes are caught by the DAO's ``_version`` check
on the aggregate root and surface as ``ConcurrentCartUpdate``. Find-or-create
is the one critical section, so two requests cannot open two carts for one
user.
"""

import threading

import structlog
from protean.exceptions import ExpectedVersionError

from ordering.domain import ordering
from ordering.errors import ConcurrentCartUpdate
from ordering.order.order import Order

logger = structlog.get_logger(__name__)

# Serializes the active-cart query with the create that may follow it.
_cart_creation_lock = threading.RLock()


@ordering.repository(part_of=Order)
class CartRepository:
    def find_active_cart_by_user(self, user_id) -> Order | None:
        carts = self._dao.query.filter(user_id=str(user_id), is_paid=False).all().items
        if not carts:
            return None
        if len(carts) > 1:
            logger.error(
                "More than one active cart found for user",
                user_id=str(user_id),
                cart_ids=[str(c.id) for c in carts],
            )
            carts = sorted(carts, key=lambda c: c.created_at)
        return carts[0]

    def create_cart(self, user_id) -> Order:
        cart = Order.open(user_id=str(user_id))
        self.add(cart)
        logger.info("Opened cart", user_id=str(user_id), order_id=str(cart.id))
        return cart

    def find_or_create_active_cart(self, user_id) -> Order:
        with _cart_creation_lock:
            cart = self.find_active_cart_by_user(user_id)
            if cart is None:
                cart = self.create_cart(user_id)
            return cart

    def save(self, order: Order) -> Order:
        """Persist ``order`` if nobody else wrote it since it was loaded."""
        try:
            self.add(order)
        except ExpectedVersionError as exc:
            raise ConcurrentCartUpdate(str(order.id)) from exc
        return order

    def find_paid_orders_by_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id), is_paid=True).all().items
