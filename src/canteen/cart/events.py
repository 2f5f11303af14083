"""Domain events for the ShoppingCart aggregate.

Together they form the ordered log of every action applied to a cart.
"""

from protean.fields import DateTime, Identifier, Integer, Text

from canteen.domain import canteen


@canteen.event(part_of="ShoppingCart")
class CartItemAdded:
    """One unit of a menu item was added to the cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)  # line quantity after the add


@canteen.event(part_of="ShoppingCart")
class CartItemQuantitySet:
    """A cart line's quantity was replaced."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)  # 0 when the line is new
    new_quantity = Integer(required=True)


@canteen.event(part_of="ShoppingCart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@canteen.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed on request."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    removed_line_count = Integer(required=True)
    cleared_at = DateTime(required=True)


@canteen.event(part_of="ShoppingCart")
class CartCheckedOut:
    """The cart's lines were turned into an order and the cart emptied."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of {item_id, quantity}
    checked_out_at = DateTime(required=True)
