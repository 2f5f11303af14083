"""In-memory catalog for development and testing.

Seeded with the canteen's standard menu. Prices, availability and
reachability can be changed at runtime so tests can simulate a dish selling
out, a price change, or a catalog outage.
"""

from dataclasses import replace

from canteen.catalog.port import Catalog, CatalogItem
from canteen.exceptions import DependencyUnavailable, NotFound
from canteen.shared.money import to_cents

DEFAULT_MENU = (
    CatalogItem("1", "Veggie Burger", to_cents("7.99"), True, 10, True, "burgers"),
    CatalogItem("2", "Chicken Burger", to_cents("8.99"), True, 12, False, "burgers"),
    CatalogItem("3", "Margherita Pizza", to_cents("11.99"), True, 15, True, "pizza"),
    CatalogItem("4", "Pepperoni Pizza", to_cents("13.99"), True, 15, False, "pizza"),
    CatalogItem("5", "French Fries", to_cents("3.99"), True, 8, True, "sides"),
    CatalogItem("6", "Chocolate Milkshake", to_cents("4.99"), True, 5, True, "beverages"),
    CatalogItem("7", "Choco Lava Cake", to_cents("5.99"), True, 10, True, "desserts"),
    CatalogItem("8", "Chicken Wrap", to_cents("7.49"), True, 8, False, "wraps"),
)


class InMemoryCatalog(Catalog):
    """Configurable in-memory catalog."""

    def __init__(self, items=DEFAULT_MENU) -> None:
        self._items: dict[str, CatalogItem] = {item.item_id: item for item in items}
        self.reachable: bool = True

    def configure(self, reachable: bool) -> None:
        """Simulate the catalog going down (or coming back)."""
        self.reachable = reachable

    def set_price(self, item_id: str, unit_price_cents: int) -> None:
        self._items[item_id] = replace(self._items[item_id], unit_price_cents=unit_price_cents)

    def set_availability(self, item_id: str, available: bool) -> None:
        self._items[item_id] = replace(self._items[item_id], available=available)

    def get_item(self, item_id: str) -> CatalogItem:
        self._ensure_reachable()
        try:
            return self._items[str(item_id)]
        except KeyError:
            raise NotFound({"item_id": [f"Menu item {item_id} does not exist"]}) from None

    def list_items(self) -> list[CatalogItem]:
        self._ensure_reachable()
        return list(self._items.values())

    def _ensure_reachable(self) -> None:
        if not self.reachable:
            raise DependencyUnavailable({"catalog": ["Catalog service is unreachable"]})
