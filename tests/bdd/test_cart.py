"""BDD tests for the shopping cart."""

from canteen.cart.cart import find_cart
from canteen.cart.items import AddItemToCart, RemoveCartItem, SetCartItemQuantity
from canteen.cart.snapshot import cart_snapshot
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('customer "{user_id}" adds item "{item_id}" to the cart'))
def _(user_id, item_id):
    current_domain.process(AddItemToCart(user_id=user_id, item_id=item_id), asynchronous=False)


@when(parsers.cfparse('customer "{user_id}" sets the quantity of item "{item_id}" to {quantity:d}'))
def _(user_id, item_id, quantity):
    current_domain.process(
        SetCartItemQuantity(user_id=user_id, item_id=item_id, quantity=quantity), asynchronous=False
    )


@when(parsers.cfparse('customer "{user_id}" removes item "{item_id}" from the cart'))
def _(user_id, item_id):
    current_domain.process(RemoveCartItem(user_id=user_id, item_id=item_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart of customer "{user_id}" holds {quantity:d} of item "{item_id}"'))
def _(user_id, quantity, item_id):
    assert find_cart(user_id).line_for(item_id).quantity == quantity


@then(parsers.cfparse('the cart amount of customer "{user_id}" is {cents:d} cents'))
def _(user_id, cents):
    assert cart_snapshot(user_id).amount_cents == cents
