"""Cart manager: the only component allowed to mutate an order.

Every mutation is a read-modify-write against the store. The whole sequence
is re-run when the repository reports that another request wrote the same
cart in between, up to ``settings.cart_conflict_retries`` times. A re-run
starts from a fresh read, so a mutation racing a checkout lands on a newly
opened cart rather than on the paid order.
"""

from collections.abc import Callable

import structlog
from protean.utils.globals import current_domain

from ordering.cart.pricing import PricedOrder, populate
from ordering.catalogue.lookup import CatalogLookup, RepositoryCatalog
from ordering.config import settings
from ordering.errors import ConcurrentCartUpdate, EmptyCartCheckout, InvalidInput, ItemNotInCart
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_id(value, name: str) -> str:
    value = str(value or "").strip()
    if not value:
        raise InvalidInput(f"{name} must not be empty")
    return value


class CartManager:
    def __init__(self, catalog: CatalogLookup | None = None, conflict_retries: int | None = None):
        self.catalog = catalog or RepositoryCatalog()
        self.conflict_retries = settings.cart_conflict_retries if conflict_retries is None else conflict_retries

    @property
    def repository(self):
        return current_domain.repository_for(Order)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def get_cart(self, user_id) -> PricedOrder:
        """Return the user's active cart, opening an empty one if needed."""
        user_id = _require_id(user_id, "user_id")
        cart = self.repository.find_or_create_active_cart(user_id)
        return populate(cart, self.catalog)

    def add_item(self, user_id, item_id, qty=1) -> PricedOrder:
        """Add ``qty`` units of a catalog item. Repeated calls accumulate."""
        user_id = _require_id(user_id, "user_id")
        item_id = _require_id(item_id, "item_id")
        if not _is_int(qty) or qty < 1:
            raise InvalidInput("qty must be a positive integer")

        # Raises ItemNotFound before any cart is touched
        self.catalog.lookup(item_id)

        def mutation(cart):
            cart.add_item(item_id, qty)

        cart = self._mutate(user_id, mutation, create_missing=True)
        logger.info(
            "Item added to cart",
            user_id=user_id,
            order_id=str(cart.id),
            item_id=item_id,
            qty=qty,
        )
        return populate(cart, self.catalog)

    def set_item_quantity(self, user_id, item_id, new_qty) -> PricedOrder:
        """Overwrite the quantity of an item already in the cart; ``new_qty <= 0`` removes it."""
        user_id = _require_id(user_id, "user_id")
        item_id = _require_id(item_id, "item_id")
        if not _is_int(new_qty):
            raise InvalidInput("new_qty must be an integer")

        def mutation(cart):
            if cart is None or cart.line_for(item_id) is None:
                raise ItemNotInCart(item_id)
            cart.set_item_quantity(item_id, new_qty)

        cart = self._mutate(user_id, mutation, create_missing=False)
        logger.info(
            "Cart quantity set",
            user_id=user_id,
            order_id=str(cart.id),
            item_id=item_id,
            new_qty=new_qty,
        )
        return populate(cart, self.catalog)

    def checkout(self, user_id) -> PricedOrder:
        """Finalize the active cart. It becomes read-only order history."""
        user_id = _require_id(user_id, "user_id")

        def mutation(cart):
            if cart is None or not cart.items:
                raise EmptyCartCheckout(user_id)
            cart.check_out()

        order = self._mutate(user_id, mutation, create_missing=False)
        logger.info(
            "Cart checked out",
            user_id=user_id,
            order_id=str(order.id),
            item_count=order.item_count,
        )
        return populate(order, self.catalog)

    # -------------------------------------------------------------------
    # Read-modify-write
    # -------------------------------------------------------------------
    def _mutate(self, user_id: str, mutation: Callable[[Order | None], None], create_missing: bool) -> Order:
        attempt = 0
        while True:
            repo = self.repository
            if create_missing:
                cart = repo.find_or_create_active_cart(user_id)
            else:
                cart = repo.find_active_cart_by_user(user_id)

            mutation(cart)

            try:
                return repo.save(cart)
            except ConcurrentCartUpdate as exc:
                if attempt >= self.conflict_retries:
                    logger.warning(
                        "Giving up on cart write after repeated conflicts",
                        user_id=user_id,
                        order_id=exc.order_id,
                        attempts=attempt + 1,
                    )
                    raise
                attempt += 1
                logger.info(
                    "Concurrent cart write detected, re-running mutation",
                    user_id=user_id,
                    order_id=exc.order_id,
                    attempt=attempt,
                )
