"""
Business logic for check-ins.

Every accepted check-in is stored together with exactly one crowd
level sample derived from it (see ``crowd_service``).  Both writes run
inside one check-ins transaction.  The in-memory store cannot roll
back, so a durable backend should map that transaction to a real one.
"""

import logging
from datetime import datetime
from typing import Callable, List

from ..core.store import EntityKind, EntityStore
from ..schemas.base import utc_now
from ..schemas.check_in import CheckIn, CheckInCreate, CheckInResult
from .crowd_service import derive_sample_from_check_in
from .validation import coerce, require_id


logger = logging.getLogger(__name__)


class CheckInService:
    """Service for user check-ins."""

    def __init__(self, store: EntityStore, clock: Callable[[], datetime] = utc_now) -> None:
        self.store = store
        self.clock = clock

    async def create_check_in(self, data) -> CheckInResult:
        """Store a check-in and the crowd level sample it produces."""
        check_in_data = coerce(CheckInCreate, data, "check-in")
        async with self.store.transaction(EntityKind.CHECK_IN):
            check_in = await self.store.insert(EntityKind.CHECK_IN, check_in_data.model_dump())
            sample = derive_sample_from_check_in(check_in, now=self.clock())
            crowd_level = await self.store.insert(EntityKind.CROWD_LEVEL, sample.model_dump())
        logger.info(
            "User %s checked in at location %s reporting %s (check-in %s, sample %s)",
            check_in.user_id,
            check_in.location_id,
            check_in.crowd_perception.label,
            check_in.id,
            crowd_level.id,
        )
        return CheckInResult(check_in=check_in, crowd_level=crowd_level)

    async def get_check_ins_by_location(self, location_id: int) -> List[CheckIn]:
        require_id(location_id, "location_id")
        check_ins = await self.store.list_all(EntityKind.CHECK_IN)
        return sorted((c for c in check_ins if c.location_id == location_id), key=lambda c: c.id)

    async def get_check_ins_by_user(self, user_id: int) -> List[CheckIn]:
        require_id(user_id, "user_id")
        check_ins = await self.store.list_all(EntityKind.CHECK_IN)
        return sorted((c for c in check_ins if c.user_id == user_id), key=lambda c: c.id)
