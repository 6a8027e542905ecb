"""Shared fixtures for Ordering tests: a small menu in the catalog."""

from types import SimpleNamespace

import pytest
from ordering.cart.manager import CartManager
from ordering.catalogue.item import Category, Item
from ordering.history.reader import OrderHistoryReader
from protean import current_domain


def _add_item(name, price, category, emoji):
    item = Item.create(name=name, price=price, category_id=category.id, emoji=emoji)
    current_domain.repository_for(Item).add(item)
    return str(item.id)


@pytest.fixture()
def menu():
    category_repo = current_domain.repository_for(Category)
    mains = Category.create("Mains", sort_order=1)
    drinks = Category.create("Drinks", sort_order=2)
    category_repo.add(mains)
    category_repo.add(drinks)

    return SimpleNamespace(
        pizza=_add_item("Pizza", 10.0, mains, "🍕"),
        burger=_add_item("Burger", 8.75, mains, "🍔"),
        soda=_add_item("Soda", 2.5, drinks, "🥤"),
    )


@pytest.fixture()
def manager():
    return CartManager()


@pytest.fixture()
def history_reader():
    return OrderHistoryReader()
