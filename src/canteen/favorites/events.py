"""Domain events for the FavoriteList aggregate."""

from protean.fields import DateTime, Identifier

from canteen.domain import canteen


@canteen.event(part_of="FavoriteList")
class FavoriteAdded:
    """A menu item was marked as a favorite."""

    __version__ = "v1"

    favorite_list_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    added_at = DateTime(required=True)


@canteen.event(part_of="FavoriteList")
class FavoriteRemoved:
    """A menu item is no longer a favorite."""

    __version__ = "v1"

    favorite_list_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
