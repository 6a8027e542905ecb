"""Catalog lookup: the read-only collaborator cart logic resolves items through."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.catalogue.item import Category, Item
from ordering.errors import ItemNotFound, UpstreamUnavailable

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    price: float
    category: str | None = None
    glyph: str | None = None


class CatalogLookup(ABC):
    """Resolves an item id to its current catalog attributes."""

    @abstractmethod
    def lookup(self, item_id: str) -> CatalogItem:
        """Return the item or raise ``ItemNotFound``."""

    @abstractmethod
    def list_items(self) -> list[CatalogItem]:
        """Return every item, grouped by category order then by name."""


class RepositoryCatalog(CatalogLookup):
    """Catalog backed by the ``Item`` and ``Category`` aggregates."""

    def lookup(self, item_id: str) -> CatalogItem:
        try:
            item = current_domain.repository_for(Item).get(item_id)
        except ObjectNotFoundError:
            raise ItemNotFound(item_id) from None
        except Exception as exc:
            logger.error("Catalog lookup failed", item_id=item_id, error=str(exc))
            raise UpstreamUnavailable("Catalog is unavailable") from exc

        category = self._category(item.category_id)
        return self._to_catalog_item(item, category)

    def list_items(self) -> list[CatalogItem]:
        try:
            items = current_domain.repository_for(Item)._dao.query.all().items
            categories = current_domain.repository_for(Category)._dao.query.all().items
        except Exception as exc:
            logger.error("Catalog listing failed", error=str(exc))
            raise UpstreamUnavailable("Catalog is unavailable") from exc

        by_id = {str(c.id): c for c in categories}

        def sort_key(item):
            category = by_id.get(str(item.category_id)) if item.category_id else None
            return (category.sort_order if category else float("inf"), item.name)

        return [
            self._to_catalog_item(item, by_id.get(str(item.category_id)) if item.category_id else None)
            for item in sorted(items, key=sort_key)
        ]

    @staticmethod
    def _category(category_id):
        if not category_id:
            return None
        try:
            return current_domain.repository_for(Category).get(category_id)
        except ObjectNotFoundError:
            return None

    @staticmethod
    def _to_catalog_item(item, category) -> CatalogItem:
        return CatalogItem(
            id=str(item.id),
            name=item.name,
            price=float(item.price or 0.0),
            category=category.name if category else None,
            glyph=item.emoji,
        )
