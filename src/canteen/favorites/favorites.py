"""Favorites (CQRS): the menu items a user has marked, one list per user.

Like the cart, the list only records item ids. Names, prices and
availability are read from the catalog when the list is shown.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.exceptions import NotFound
from canteen.favorites.events import FavoriteAdded, FavoriteRemoved


@canteen.entity(part_of="FavoriteList")
class Favorite:
    item_id = Identifier(required=True)
    added_at = DateTime()


@canteen.aggregate
class FavoriteList:
    user_id = Identifier(required=True)
    favorites = HasMany(Favorite)
    updated_at = DateTime()

    @invariant.post
    def each_item_marked_once(self):
        item_ids = [str(favorite.item_id) for favorite in self.favorites]
        if len(item_ids) != len(set(item_ids)):
            raise ValidationError({"favorites": ["An item can be a favorite only once"]})

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, updated_at=datetime.now(UTC))

    def favorite_for(self, item_id):
        return next((favorite for favorite in self.favorites if str(favorite.item_id) == str(item_id)), None)

    @property
    def item_ids(self):
        """Favorite item ids, oldest first."""
        ordered = sorted(self.favorites, key=lambda favorite: favorite.added_at)
        return [str(favorite.item_id) for favorite in ordered]

    def add(self, item_id):
        """Mark ``item_id``. Marking an item twice changes nothing."""
        if self.favorite_for(item_id) is not None:
            return

        now = datetime.now(UTC)
        self.add_favorites(Favorite(item_id=item_id, added_at=now))
        self.updated_at = now

        self.raise_(
            FavoriteAdded(
                favorite_list_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item_id),
                added_at=now,
            )
        )

    def remove(self, item_id):
        favorite = self.favorite_for(item_id)
        if favorite is None:
            raise NotFound({"item_id": [f"Item {item_id} is not a favorite"]})

        self.remove_favorites(favorite)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            FavoriteRemoved(
                favorite_list_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item_id),
            )
        )


def find_favorites(user_id):
    """Return ``user_id``'s favorite list, or None if they never marked anything."""
    repo = current_domain.repository_for(FavoriteList)
    lists = repo._dao.query.filter(user_id=str(user_id)).all().items
    if not lists:
        return None
    return repo.get(lists[0].id)


def favorites_for(user_id):
    return find_favorites(user_id) or FavoriteList.create(user_id=user_id)
