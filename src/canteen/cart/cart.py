"""Shopping cart aggregate (CQRS): one mutable basket per user.

The cart only records which items a user wants and how many. It never stores
prices or totals; those are derived from the catalog whenever the cart is
read (see ``canteen.cart.snapshot``), so there is nothing that can drift out
of step with the lines.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer
from protean.utils.globals import current_domain

from canteen.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartItemAdded,
    CartItemQuantitySet,
    CartItemRemoved,
)
from canteen.domain import canteen
from canteen.exceptions import EmptyCart


@canteen.entity(part_of="ShoppingCart")
class CartLine:
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@canteen.aggregate
class ShoppingCart:
    user_id = Identifier(required=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def at_most_one_line_per_item(self):
        item_ids = [str(line.item_id) for line in self.lines]
        if len(item_ids) != len(set(item_ids)):
            raise ValidationError({"lines": ["A cart holds at most one line per menu item"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, item_id):
        return next((line for line in self.lines if str(line.item_id) == str(item_id)), None)

    @property
    def is_empty(self):
        return not self.lines

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, item_id):
        """Add one unit of an item, creating the line if needed."""
        now = datetime.now(UTC)
        existing = self.line_for(item_id)

        if existing:
            existing.quantity += 1
            quantity = existing.quantity
        else:
            self.add_lines(CartLine(item_id=item_id, quantity=1, added_at=now))
            quantity = 1

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item_id),
                quantity=quantity,
            )
        )

    def set_quantity(self, item_id, quantity):
        """Replace a line's quantity. Zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(item_id)
            return

        now = datetime.now(UTC)
        existing = self.line_for(item_id)

        if existing:
            previous_quantity = existing.quantity
            existing.quantity = quantity
        else:
            previous_quantity = 0
            self.add_lines(CartLine(item_id=item_id, quantity=quantity, added_at=now))

        self.updated_at = now

        self.raise_(
            CartItemQuantitySet(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        """Remove a line. Removing an item that is not in the cart is a no-op."""
        line = self.line_for(item_id)
        if line is None:
            return

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item_id),
            )
        )

    def clear(self):
        """Empty the cart unconditionally."""
        now = datetime.now(UTC)
        removed = self._remove_all_lines()
        self.updated_at = now

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                removed_line_count=removed,
                cleared_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def check_out(self, order_id):
        """Empty the cart after its lines became order ``order_id``."""
        if self.is_empty:
            raise EmptyCart({"cart": ["Cannot check out an empty cart"]})

        lines_snapshot = [{"item_id": str(line.item_id), "quantity": line.quantity} for line in self.lines]

        now = datetime.now(UTC)
        self._remove_all_lines()
        self.updated_at = now

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                order_id=str(order_id),
                lines=json.dumps(lines_snapshot),
                checked_out_at=now,
            )
        )

    def _remove_all_lines(self):
        lines = list(self.lines)
        for line in lines:
            self.remove_lines(line)
        return len(lines)


# ---------------------------------------------------------------------------
# Lookup by owner
# ---------------------------------------------------------------------------
def find_cart(user_id):
    """Return ``user_id``'s cart, or None if they never had one."""
    repo = current_domain.repository_for(ShoppingCart)
    carts = repo._dao.query.filter(user_id=str(user_id)).all().items
    if not carts:
        return None
    return repo.get(carts[0].id)


def cart_for(user_id):
    """Return ``user_id``'s cart, starting an empty one on first reference."""
    return find_cart(user_id) or ShoppingCart.create(user_id=user_id)
