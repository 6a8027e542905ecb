"""Shared BDD fixtures and step definitions for the Ordering domain."""

from decimal import Decimal

import pytest
from ordering.errors import CartError
from pytest_bdd import given, parsers, then, when


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured cart errors."""
    return {"exc": None}


@pytest.fixture()
def state():
    """Last cart/order returned to the user, plus the cart they started with."""
    return {"cart": None, "order": None, "first_cart_id": None}


def _item_id(menu, name):
    return getattr(menu, name)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a user "{user_id}"'), target_fixture="user_id")
def a_user(user_id):
    return user_id


def _add_to_cart(manager, menu, user_id, state, name):
    state["cart"] = manager.add_item(user_id, _item_id(menu, name))
    state["first_cart_id"] = state["first_cart_id"] or state["cart"].id


@given(parsers.cfparse('the user added "{name}" to the cart'))
def user_added(manager, menu, user_id, state, name):
    _add_to_cart(manager, menu, user_id, state, name)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the user adds "{name}" to the cart'))
def user_adds(manager, menu, user_id, state, name):
    _add_to_cart(manager, menu, user_id, state, name)


@when(parsers.cfparse('the user sets the quantity of "{name}" to {qty:d}'))
def user_sets_quantity(manager, menu, user_id, state, error, name, qty):
    try:
        state["cart"] = manager.set_item_quantity(user_id, _item_id(menu, name), qty)
    except CartError as exc:
        error["exc"] = exc
        state["cart"] = manager.get_cart(user_id)


@when("the user checks out")
def user_checks_out(manager, user_id, state, error):
    try:
        state["order"] = manager.checkout(user_id)
    except CartError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines_singular(state, count):
    assert len(state["cart"].lines) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(state, count):
    assert len(state["cart"].lines) == count


@then(parsers.cfparse('the cart line for "{name}" has quantity {qty:d}'))
def cart_line_quantity(menu, state, name, qty):
    line = next(line for line in state["cart"].lines if line.item_id == _item_id(menu, name))
    assert line.qty == qty


@then("the user still has the same cart")
def same_cart(manager, user_id, state):
    assert manager.get_cart(user_id).id == state["first_cart_id"]


@then(parsers.cfparse('the cart action fails with "{kind}"'))
def cart_action_fails(error, kind):
    assert error["exc"] is not None, "Expected a cart error but none was raised"
    assert error["exc"].kind == kind


@then(parsers.cfparse('the cart total is "{total}"'))
def cart_total(state, total):
    assert state["cart"].total == Decimal(total)


@then(parsers.cfparse("the cart item count is {count:d}"))
def cart_item_count(state, count):
    assert state["cart"].item_count == count


@then("the order is paid")
def order_is_paid(state):
    assert state["order"].is_paid is True


@then("the user's next cart is new and empty")
def next_cart_is_new(manager, user_id, state):
    cart = manager.get_cart(user_id)
    assert cart.id != state["order"].id
    assert cart.is_paid is False
    assert cart.lines == ()


@then(parsers.cfparse("the order history lists {count:d} order"))
def history_lists_one(history_reader, user_id, count):
    assert len(history_reader.list_orders(user_id)) == count


@then(parsers.cfparse("the order history lists {count:d} orders"))
def history_lists_n(history_reader, user_id, count):
    assert len(history_reader.list_orders(user_id)) == count
