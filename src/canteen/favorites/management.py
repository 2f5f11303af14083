"""Favorites management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from canteen.catalog import get_catalog
from canteen.domain import canteen
from canteen.exceptions import NotFound
from canteen.favorites.favorites import FavoriteList, favorites_for, find_favorites

logger = structlog.get_logger(__name__)


@canteen.command(part_of="FavoriteList")
class AddFavorite:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@canteen.command(part_of="FavoriteList")
class RemoveFavorite:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@canteen.command_handler(part_of=FavoriteList)
class ManageFavoritesHandler:
    @handle(AddFavorite)
    def add_favorite(self, command):
        # Sold-out items can still be favorites; unknown ones cannot
        get_catalog().get_item(str(command.item_id))

        favorites = favorites_for(command.user_id)
        favorites.add(command.item_id)
        current_domain.repository_for(FavoriteList).add(favorites)

        logger.info("Favorite added", user_id=str(command.user_id), item_id=str(command.item_id))

    @handle(RemoveFavorite)
    def remove_favorite(self, command):
        favorites = find_favorites(command.user_id)
        if favorites is None:
            raise NotFound({"item_id": [f"Item {command.item_id} is not a favorite"]})

        favorites.remove(command.item_id)
        current_domain.repository_for(FavoriteList).add(favorites)

        logger.info("Favorite removed", user_id=str(command.user_id), item_id=str(command.item_id))
