"""
Business logic for favorites.

A user can favorite a location at most once.  Adding an existing
favorite returns the stored record, and removing a missing one is a
no-op, so clients can retry either call safely.
"""

import logging
from typing import List

from ..core.store import EntityKind, EntityStore
from ..schemas.favorite import Favorite, FavoriteCreate
from ..schemas.location import Location
from .validation import coerce, require_id


logger = logging.getLogger(__name__)


class FavoriteService:
    """Service for user favorites."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    async def _find(self, user_id: int, location_id: int):
        for favorite in await self.store.list_all(EntityKind.FAVORITE):
            if favorite.user_id == user_id and favorite.location_id == location_id:
                return favorite
        return None

    async def create_favorite(self, data) -> Favorite:
        favorite_data = coerce(FavoriteCreate, data, "favorite")
        async with self.store.transaction(EntityKind.FAVORITE):
            existing = await self._find(favorite_data.user_id, favorite_data.location_id)
            if existing is not None:
                return existing
            favorite = await self.store.insert(EntityKind.FAVORITE, favorite_data.model_dump())
        logger.info("User %s favorited location %s", favorite.user_id, favorite.location_id)
        return favorite

    async def delete_favorite(self, user_id: int, location_id: int) -> None:
        require_id(user_id, "user_id")
        require_id(location_id, "location_id")
        async with self.store.transaction(EntityKind.FAVORITE):
            existing = await self._find(user_id, location_id)
            if existing is None:
                return
            await self.store.delete(EntityKind.FAVORITE, existing.id)
        logger.info("User %s removed location %s from favorites", user_id, location_id)

    async def get_favorites_by_user(self, user_id: int) -> List[Favorite]:
        require_id(user_id, "user_id")
        favorites = await self.store.list_all(EntityKind.FAVORITE)
        return sorted((f for f in favorites if f.user_id == user_id), key=lambda f: f.id)

    async def get_favorite_locations(self, user_id: int) -> List[Location]:
        """Return the user's favorite locations in the order they were added.

        Favorites pointing at an unknown location are skipped.
        """
        locations: List[Location] = []
        for favorite in await self.get_favorites_by_user(user_id):
            location = await self.store.get(EntityKind.LOCATION, favorite.location_id)
            if location is None:
                logger.debug("Favorite %s points at missing location %s", favorite.id, favorite.location_id)
                continue
            locations.append(location)
        return locations
