"""Catalog port (abstract interface).

The ordering core only needs to look items up by id. Adapters decide where
the menu lives; the core never writes to it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogItem:
    """A menu item as seen by the ordering core."""

    item_id: str
    name: str
    unit_price_cents: int
    available: bool = True
    prep_time_minutes: int = 0
    is_vegetarian: bool = False
    category: str | None = None

    def __post_init__(self) -> None:
        if self.unit_price_cents < 0:
            raise ValueError(f"Catalog item {self.item_id} has a negative price")
        if self.prep_time_minutes < 0:
            raise ValueError(f"Catalog item {self.item_id} has a negative prep time")


class Catalog(ABC):
    """Abstract catalog lookup."""

    @abstractmethod
    def get_item(self, item_id: str) -> CatalogItem:
        """Return the item with ``item_id``.

        Raises:
            NotFound: the id is not on the menu.
            DependencyUnavailable: the catalog could not be reached.
        """
        ...

    @abstractmethod
    def list_items(self) -> list[CatalogItem]:
        """Return every item on the menu."""
        ...
