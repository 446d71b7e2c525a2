"""
Business logic for users.

Users are created explicitly and never changed afterwards.  The
password is kept as an opaque string; this service performs no
authentication.
"""

import logging
from typing import Optional

from ..core.exceptions import ValidationError
from ..core.store import EntityKind, EntityStore
from ..schemas.user import User, UserCreate
from .validation import coerce, require_id


logger = logging.getLogger(__name__)


class UserService:
    """Service for user accounts."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    async def get_user(self, user_id: int) -> Optional[User]:
        require_id(user_id, "user_id")
        return await self.store.get(EntityKind.USER, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in await self.store.list_all(EntityKind.USER):
            if user.username == username:
                return user
        return None

    async def create_user(self, data) -> User:
        """Create a user; the username must not be taken."""
        user_data = coerce(UserCreate, data, "user")
        async with self.store.transaction(EntityKind.USER):
            if await self.get_user_by_username(user_data.username) is not None:
                logger.warning("Username %s is already taken", user_data.username)
                raise ValidationError("Username already exists", {"username": user_data.username})
            user = await self.store.insert(EntityKind.USER, user_data.model_dump())
        logger.info("Registered user %s (%s)", user.id, user.username)
        return user
