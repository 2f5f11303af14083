"""Cart line management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from canteen.cart.cart import ShoppingCart, cart_for, find_cart
from canteen.catalog import get_catalog
from canteen.domain import canteen
from canteen.exceptions import ItemUnavailable

logger = structlog.get_logger(__name__)


@canteen.command(part_of="ShoppingCart")
class AddItemToCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@canteen.command(part_of="ShoppingCart")
class SetCartItemQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)  # zero or negative removes the line


@canteen.command(part_of="ShoppingCart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


def ensure_orderable(item_id):
    """Reject items the catalog does not know or reports as sold out."""
    item = get_catalog().get_item(str(item_id))
    if not item.available:
        raise ItemUnavailable({"item_id": [f"{item.name} is not available right now"]})
    return item


@canteen.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddItemToCart)
    def add_item_to_cart(self, command):
        ensure_orderable(command.item_id)

        cart = cart_for(command.user_id)
        cart.add_item(command.item_id)
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info("Item added to cart", user_id=str(command.user_id), item_id=str(command.item_id))

    @handle(SetCartItemQuantity)
    def set_cart_item_quantity(self, command):
        cart = cart_for(command.user_id)
        if command.quantity > 0 and cart.line_for(command.item_id) is None:
            ensure_orderable(command.item_id)

        cart.set_quantity(command.item_id, command.quantity)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        cart = find_cart(command.user_id)
        if cart is None:
            return

        cart.remove_item(command.item_id)
        current_domain.repository_for(ShoppingCart).add(cart)
