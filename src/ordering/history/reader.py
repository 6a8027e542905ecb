"""Order history: read-only listing of a user's finalized orders."""

from protean.utils.globals import current_domain

from ordering.cart.pricing import PricedOrder, populate
from ordering.catalogue.lookup import CatalogLookup, RepositoryCatalog
from ordering.order.order import Order


class OrderHistoryReader:
    def __init__(self, catalog: CatalogLookup | None = None):
        self.catalog = catalog or RepositoryCatalog()

    def list_orders(self, user_id) -> list[PricedOrder]:
        """Paid orders for ``user_id``, most recently checked out first."""
        orders = current_domain.repository_for(Order).find_paid_orders_by_user(str(user_id))
        orders = sorted(
            orders,
            key=lambda o: (o.checked_out_at or o.created_at, o.created_at),
            reverse=True,
        )
        return [populate(order, self.catalog) for order in orders]
