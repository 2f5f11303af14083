"""Cart snapshot: the cart's lines priced against the live catalog.

Carts are live-priced, orders are frozen-priced. Checkout prices the cart
with the same ``price_cart`` function, so the order total always equals the
amount the customer saw at that instant.
"""

from dataclasses import dataclass, field

from canteen.catalog import Catalog, get_catalog
from canteen.cart.cart import find_cart
from canteen.exceptions import NotFound


@dataclass(frozen=True)
class SnapshotLine:
    item_id: str
    quantity: int
    name: str | None = None
    unit_price_cents: int = 0
    prep_time_minutes: int = 0
    available: bool = False  # False when the item is sold out or no longer on the menu

    @property
    def subtotal_cents(self) -> int:
        return self.quantity * self.unit_price_cents


@dataclass(frozen=True)
class CartSnapshot:
    user_id: str
    lines: list[SnapshotLine] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def amount_cents(self) -> int:
        return sum(line.subtotal_cents for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def unavailable_item_ids(self) -> list[str]:
        return [line.item_id for line in self.lines if not line.available]


def price_cart(cart, catalog: Catalog) -> CartSnapshot:
    """Price every line of ``cart`` at the catalog's current prices.

    Items the catalog no longer knows are kept as unavailable lines priced
    at zero. Catalog outages propagate as ``DependencyUnavailable``.
    """
    lines = []
    for line in cart.lines:
        try:
            item = catalog.get_item(str(line.item_id))
        except NotFound:
            lines.append(SnapshotLine(item_id=str(line.item_id), quantity=line.quantity))
            continue

        lines.append(
            SnapshotLine(
                item_id=item.item_id,
                quantity=line.quantity,
                name=item.name,
                unit_price_cents=item.unit_price_cents,
                prep_time_minutes=item.prep_time_minutes,
                available=item.available,
            )
        )

    return CartSnapshot(user_id=str(cart.user_id), lines=lines)


def cart_snapshot(user_id) -> CartSnapshot:
    """Return the current, live-priced view of ``user_id``'s cart."""
    cart = find_cart(user_id)
    if cart is None:
        return CartSnapshot(user_id=str(user_id))
    return price_cart(cart, get_catalog())
