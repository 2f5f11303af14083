"""Cart management: clearing a cart."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from canteen.cart.cart import ShoppingCart, cart_for
from canteen.domain import canteen


@canteen.command(part_of="ShoppingCart")
class ClearCart:
    """Empty a user's cart."""

    user_id = Identifier(required=True)


@canteen.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        cart = cart_for(command.user_id)
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)
