"""Shared BDD fixtures and step definitions for the canteen."""

import pytest
from canteen.cart.cart import find_cart
from canteen.cart.checkout import Checkout
from canteen.cart.items import AddItemToCart
from canteen.exceptions import error_kind
from canteen.order.fulfillment import AdvanceOrderStatus
from canteen.order.payment import ResolvePayment
from canteen.order.queries import get_order, list_user_orders, staff_queue
from protean import current_domain
from protean.exceptions import ProteanException
from pytest_bdd import given, parsers, then, when


@pytest.fixture(autouse=True)
def menu(catalog):
    """Every scenario runs against a freshly seeded menu."""
    return catalog


@pytest.fixture()
def context():
    """Scenario state: the order under test and the last captured error."""
    return {"order_id": None, "error": None}


def attempt(context, command):
    """Process ``command``, capturing a domain error instead of raising it."""
    context["error"] = None
    try:
        return current_domain.process(command, asynchronous=False)
    except ProteanException as exc:
        context["error"] = exc
        return None


def _add_items(user_id, items):
    for item_id in items.split(","):
        current_domain.process(AddItemToCart(user_id=user_id, item_id=item_id.strip()), asynchronous=False)


def _resolve(context, outcome, method):
    current_domain.process(
        ResolvePayment(order_id=context["order_id"], payment_method=method, outcome=outcome),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Given
# ---------------------------------------------------------------------------
@given(parsers.cfparse('customer "{user_id}" has an empty cart'))
def _(user_id):
    assert find_cart(user_id) is None


@given(parsers.cfparse('customer "{user_id}" has added items "{items}"'))
def _(user_id, items):
    _add_items(user_id, items)


@given(parsers.cfparse('customer "{user_id}" has placed an order for items "{items}"'))
def _(context, user_id, items):
    _add_items(user_id, items)
    context["order_id"] = current_domain.process(Checkout(user_id=user_id), asynchronous=False)


@given(parsers.cfparse('the payment was resolved as "{outcome}" by "{method}"'))
def _(context, outcome, method):
    _resolve(context, outcome, method)


@given(parsers.cfparse('item "{item_id}" is sold out'))
def _(menu, item_id):
    menu.set_availability(item_id, False)


# ---------------------------------------------------------------------------
# When
# ---------------------------------------------------------------------------
@when(parsers.cfparse('customer "{user_id}" checks out'))
def _(context, user_id):
    context["order_id"] = current_domain.process(Checkout(user_id=user_id), asynchronous=False)


@when(parsers.cfparse('customer "{user_id}" tries to add item "{item_id}" to the cart'))
def _(context, user_id, item_id):
    attempt(context, AddItemToCart(user_id=user_id, item_id=item_id))


@when(parsers.cfparse('customer "{user_id}" tries to check out'))
def _(context, user_id):
    context["order_id"] = attempt(context, Checkout(user_id=user_id))


@when(parsers.cfparse('the payment is resolved as "{outcome}" by "{method}"'))
def _(context, outcome, method):
    _resolve(context, outcome, method)


@when(parsers.cfparse('the payment is resolved again as "{outcome}" by "{method}"'))
def _(context, outcome, method):
    attempt(context, ResolvePayment(order_id=context["order_id"], payment_method=method, outcome=outcome))


@when(parsers.cfparse('the price of item "{item_id}" changes to {cents:d} cents'))
def _(menu, item_id, cents):
    menu.set_price(item_id, cents)


@when(parsers.cfparse('staff moves the order to "{status}"'))
def _(context, status):
    current_domain.process(
        AdvanceOrderStatus(order_id=context["order_id"], target_status=status, actor_role="staff", actor_id="s-1"),
        asynchronous=False,
    )


@when(parsers.cfparse('customer "{user_id}" tries to move the order to "{status}"'))
def _(context, user_id, status):
    attempt(
        context,
        AdvanceOrderStatus(
            order_id=context["order_id"], target_status=status, actor_role="customer", actor_id=user_id
        ),
    )


@when(parsers.cfparse('staff tries to move the order to "{status}"'))
def _(context, status):
    attempt(
        context,
        AdvanceOrderStatus(order_id=context["order_id"], target_status=status, actor_role="staff", actor_id="s-1"),
    )


# ---------------------------------------------------------------------------
# Then
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the action fails with "{kind}"'))
def _(context, kind):
    assert context["error"] is not None
    assert error_kind(context["error"]) == kind


@then(parsers.cfparse("the order total is {cents:d} cents"))
def _(context, cents):
    assert get_order(context["order_id"]).total_amount_cents == cents


@then(parsers.cfparse('the order is "{status}" with payment "{payment_status}"'))
def _(context, status, payment_status):
    order = get_order(context["order_id"])
    assert order.status == status
    assert order.payment_status == payment_status


@then(parsers.cfparse('the cart of customer "{user_id}" has {count:d} line'))
@then(parsers.cfparse('the cart of customer "{user_id}" has {count:d} lines'))
def _(user_id, count):
    cart = find_cart(user_id)
    assert (len(cart.lines) if cart else 0) == count


@then(parsers.cfparse('customer "{user_id}" has {count:d} orders'))
def _(user_id, count):
    assert len(list_user_orders(user_id)) == count


@then("the order is in the staff queue")
def _(context):
    assert context["order_id"] in [entry.order_id for entry in staff_queue()]


@then("the staff queue is empty")
def _():
    assert staff_queue() == []
