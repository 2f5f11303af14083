"""Read side of favorites."""

from canteen.catalog import CatalogItem, get_catalog
from canteen.exceptions import NotFound
from canteen.favorites.favorites import find_favorites


def list_favorites(user_id) -> list[CatalogItem]:
    """The user's favorite menu items, oldest first.

    Items that have since left the menu are skipped.
    """
    favorites = find_favorites(user_id)
    if favorites is None:
        return []

    catalog = get_catalog()
    items = []
    for item_id in favorites.item_ids:
        try:
            items.append(catalog.get_item(item_id))
        except NotFound:
            continue
    return items


def is_favorite(user_id, item_id) -> bool:
    favorites = find_favorites(user_id)
    return favorites is not None and favorites.favorite_for(item_id) is not None
