"""Checkout: turning a cart into an order.

The cart is re-priced against the catalog at the moment of checkout with the
same ``price_cart`` used for cart snapshots. The new order and the emptied
cart are persisted in a single unit of work, so a failure anywhere leaves
the cart untouched and no order behind.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from canteen.cart.cart import ShoppingCart, find_cart
from canteen.cart.snapshot import price_cart
from canteen.catalog import get_catalog
from canteen.domain import canteen
from canteen.exceptions import EmptyCart, ItemUnavailable
from canteen.order.order import Order
from canteen.order.pickup import unique_pickup_code
from canteen.projections.order_summary import OrderSummary

logger = structlog.get_logger(__name__)


@canteen.command(part_of="ShoppingCart")
class Checkout:
    user_id = Identifier(required=True)


def pickup_code_taken(code):
    return bool(current_domain.repository_for(OrderSummary)._dao.query.filter(pickup_code=code).all().items)


@canteen.command_handler(part_of=ShoppingCart)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        cart = find_cart(command.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCart({"cart": ["Cannot check out an empty cart"]})

        snapshot = price_cart(cart, get_catalog())
        unavailable = snapshot.unavailable_item_ids
        if unavailable:
            raise ItemUnavailable({"item_id": [f"Item {item_id} is not available right now" for item_id in unavailable]})

        lines_data = [
            {
                "item_id": line.item_id,
                "name": line.name,
                "unit_price_cents": line.unit_price_cents,
                "quantity": line.quantity,
                "prep_time_minutes": line.prep_time_minutes,
            }
            for line in snapshot.lines
        ]

        order = Order.place(
            user_id=command.user_id,
            lines_data=lines_data,
            expected_total_cents=snapshot.amount_cents,
            pickup_code=unique_pickup_code(pickup_code_taken),
        )
        cart.check_out(order.id)

        current_domain.repository_for(Order).add(order)
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "Cart checked out",
            user_id=str(command.user_id),
            order_id=str(order.id),
            total_amount_cents=order.total_amount_cents,
            item_count=order.item_count,
        )
        return str(order.id)
