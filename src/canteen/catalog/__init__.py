"""Catalog factory.

Provides get_catalog() / set_catalog() to swap implementations. Defaults to
the seeded InMemoryCatalog.
"""

from canteen.catalog.memory_adapter import InMemoryCatalog
from canteen.catalog.port import Catalog, CatalogItem

__all__ = ["Catalog", "CatalogItem", "InMemoryCatalog", "get_catalog", "reset_catalog", "set_catalog"]

_current_catalog: Catalog | None = None


def get_catalog() -> Catalog:
    """Return the current catalog. Defaults to InMemoryCatalog."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = InMemoryCatalog()
    return _current_catalog


def set_catalog(catalog: Catalog) -> None:
    """Override the active catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to the default catalog."""
    global _current_catalog
    _current_catalog = None
