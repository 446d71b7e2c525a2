"""
The storage facade consumed by the request layer.

``Storage`` lists every operation the API handlers may call.
``CrowdStorage`` implements it by composing the domain services over
one injected ``EntityStore``; construct one per application (or per
test) rather than sharing a module-level instance.

Errors: ``ValidationError`` propagates unchanged.  Any other failure
is logged with the operation name and arguments and re-raised as
``StorageError``.  Missing records are never errors; reads return
``None`` or an empty list.
"""

import functools
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..core.exceptions import CrowdCheckError, StorageError
from ..core.store import EntityStore
from ..schemas.check_in import CheckIn, CheckInResult
from ..schemas.crowd_level import CrowdLevel, CrowdSummary
from ..schemas.favorite import Favorite
from ..schemas.location import Location
from ..schemas.review import Review, ReviewWithAuthor
from ..schemas.user import User
from .check_in_service import CheckInService
from .crowd_service import DEFAULT_HISTORY_LIMIT, CrowdService
from .favorite_service import FavoriteService
from .location_service import DEFAULT_DEDUP_TOLERANCE, LocationService
from .review_service import ReviewService
from .user_service import UserService


logger = logging.getLogger(__name__)


def _guarded(method):
    """Log unexpected failures of a facade method and wrap them in ``StorageError``."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except CrowdCheckError:
            raise
        except Exception as exc:
            logger.exception("%s failed (args=%r, kwargs=%r)", method.__name__, args, kwargs)
            raise StorageError(method.__name__, str(exc), {"args": repr(args)}) from exc

    return wrapper


class Storage(ABC):
    """Operations available to the request layer."""

    # Users
    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data) -> User: ...

    # Locations
    @abstractmethod
    async def get_location(self, location_id: int) -> Optional[Location]: ...

    @abstractmethod
    async def get_locations(self) -> List[Location]: ...

    @abstractmethod
    async def get_locations_by_category(self, category: str) -> List[Location]: ...

    @abstractmethod
    async def create_location(self, data) -> Location: ...

    @abstractmethod
    async def resolve_location(self, data) -> Tuple[Location, bool]: ...

    # Crowd levels
    @abstractmethod
    async def get_current_crowd_level(self, location_id: int) -> Optional[CrowdLevel]: ...

    @abstractmethod
    async def get_crowd_level_history(self, location_id: int, limit: Optional[int] = None) -> List[CrowdLevel]: ...

    @abstractmethod
    async def get_crowd_summary(self, location_id: int, limit: Optional[int] = None) -> CrowdSummary: ...

    @abstractmethod
    async def create_crowd_level(self, data) -> CrowdLevel: ...

    # Check-ins
    @abstractmethod
    async def get_check_ins_by_location(self, location_id: int) -> List[CheckIn]: ...

    @abstractmethod
    async def get_check_ins_by_user(self, user_id: int) -> List[CheckIn]: ...

    @abstractmethod
    async def create_check_in(self, data) -> CheckInResult: ...

    # Reviews
    @abstractmethod
    async def get_reviews_by_location(self, location_id: int) -> List[Review]: ...

    @abstractmethod
    async def get_reviews_with_authors(self, location_id: int) -> List[ReviewWithAuthor]: ...

    @abstractmethod
    async def create_review(self, data) -> Review: ...

    # Favorites
    @abstractmethod
    async def get_favorites_by_user(self, user_id: int) -> List[Favorite]: ...

    @abstractmethod
    async def get_favorite_locations(self, user_id: int) -> List[Location]: ...

    @abstractmethod
    async def create_favorite(self, data) -> Favorite: ...

    @abstractmethod
    async def delete_favorite(self, user_id: int, location_id: int) -> None: ...


class CrowdStorage(Storage):
    """``Storage`` backed by the domain services and an ``EntityStore``."""

    def __init__(
        self,
        store: EntityStore,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        dedup_tolerance: float = DEFAULT_DEDUP_TOLERANCE,
        check_in_service: Optional[CheckInService] = None,
    ) -> None:
        self.store = store
        self.users = UserService(store)
        self.locations = LocationService(store, dedup_tolerance=dedup_tolerance)
        self.crowd = CrowdService(store, history_limit=history_limit)
        self.check_ins = check_in_service or CheckInService(store)
        self.reviews = ReviewService(store)
        self.favorites = FavoriteService(store)

    @_guarded
    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.users.get_user(user_id)

    @_guarded
    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.users.get_user_by_username(username)

    @_guarded
    async def create_user(self, data) -> User:
        return await self.users.create_user(data)

    @_guarded
    async def get_location(self, location_id: int) -> Optional[Location]:
        return await self.locations.get_location(location_id)

    @_guarded
    async def get_locations(self) -> List[Location]:
        return await self.locations.get_locations()

    @_guarded
    async def get_locations_by_category(self, category: str) -> List[Location]:
        return await self.locations.get_locations_by_category(category)

    @_guarded
    async def create_location(self, data) -> Location:
        return await self.locations.create_location(data)

    @_guarded
    async def resolve_location(self, data) -> Tuple[Location, bool]:
        return await self.locations.resolve_location(data)

    @_guarded
    async def get_current_crowd_level(self, location_id: int) -> Optional[CrowdLevel]:
        return await self.crowd.get_current_crowd_level(location_id)

    @_guarded
    async def get_crowd_level_history(self, location_id: int, limit: Optional[int] = None) -> List[CrowdLevel]:
        return await self.crowd.get_crowd_level_history(location_id, limit)

    @_guarded
    async def get_crowd_summary(self, location_id: int, limit: Optional[int] = None) -> CrowdSummary:
        return await self.crowd.get_crowd_summary(location_id, limit)

    @_guarded
    async def create_crowd_level(self, data) -> CrowdLevel:
        return await self.crowd.create_crowd_level(data)

    @_guarded
    async def get_check_ins_by_location(self, location_id: int) -> List[CheckIn]:
        return await self.check_ins.get_check_ins_by_location(location_id)

    @_guarded
    async def get_check_ins_by_user(self, user_id: int) -> List[CheckIn]:
        return await self.check_ins.get_check_ins_by_user(user_id)

    @_guarded
    async def create_check_in(self, data) -> CheckInResult:
        return await self.check_ins.create_check_in(data)

    @_guarded
    async def get_reviews_by_location(self, location_id: int) -> List[Review]:
        return await self.reviews.get_reviews_by_location(location_id)

    @_guarded
    async def get_reviews_with_authors(self, location_id: int) -> List[ReviewWithAuthor]:
        return await self.reviews.get_reviews_with_authors(location_id)

    @_guarded
    async def create_review(self, data) -> Review:
        return await self.reviews.create_review(data)

    @_guarded
    async def get_favorites_by_user(self, user_id: int) -> List[Favorite]:
        return await self.favorites.get_favorites_by_user(user_id)

    @_guarded
    async def get_favorite_locations(self, user_id: int) -> List[Location]:
        return await self.favorites.get_favorite_locations(user_id)

    @_guarded
    async def create_favorite(self, data) -> Favorite:
        return await self.favorites.create_favorite(data)

    @_guarded
    async def delete_favorite(self, user_id: int, location_id: int) -> None:
        await self.favorites.delete_favorite(user_id, location_id)
