"""Ordering bounded context: shopping cart and order history.

Holds the single mutable cart per user, the checkout transition that turns
it into an immutable order, and the read side over finalized orders.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
