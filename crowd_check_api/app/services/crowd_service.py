"""
Business logic for crowd levels.

Turns the raw, append-only sample collection into the two views every
client needs: the current crowd level of a location (its most recent
sample) and a bounded, newest-first history.  It also maps a check-in
to the sample it produces.

"Current" is simply the latest sample, whatever its source.  Check-ins
are not averaged or weighted against each other: each one yields its
own sample.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.store import EntityKind, EntityStore
from ..schemas.base import utc_now
from ..schemas.check_in import CheckIn
from ..schemas.crowd_level import (
    CrowdLevel,
    CrowdLevelCreate,
    CrowdLevelValue,
    CrowdSummary,
)
from .validation import coerce, require_id, require_limit


logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 24

# perceived level -> (percentage, wait time in minutes)
CHECK_IN_SAMPLES: Dict[CrowdLevelValue, Tuple[int, int]] = {
    CrowdLevelValue.LOW: (30, 0),
    CrowdLevelValue.MEDIUM: (60, 15),
    CrowdLevelValue.HIGH: (90, 30),
}


def _recency(sample: CrowdLevel) -> Tuple[datetime, int]:
    # Equal timestamps are broken by id: the later insert wins.
    return sample.timestamp, sample.id


def select_current(samples: Iterable[CrowdLevel]) -> Optional[CrowdLevel]:
    """Return the most recent sample, or ``None`` for no samples."""
    return max(samples, key=_recency, default=None)


def most_recent(samples: Iterable[CrowdLevel], limit: int) -> List[CrowdLevel]:
    """Return up to ``limit`` samples, newest first."""
    return sorted(samples, key=_recency, reverse=True)[:limit]


def derive_sample_from_check_in(check_in: CheckIn, now: Optional[datetime] = None) -> CrowdLevelCreate:
    """Build the sample a check-in contributes.

    The sample is stamped with ``now`` (the moment of derivation), not
    with the check-in's own timestamp.
    """
    level = CrowdLevelValue(check_in.crowd_perception)
    percentage, wait_time = CHECK_IN_SAMPLES[level]
    return CrowdLevelCreate(
        location_id=check_in.location_id,
        level=level,
        percentage=percentage,
        timestamp=now or utc_now(),
        wait_time=wait_time,
    )


def summarize_history(location_id: int, samples: List[CrowdLevel]) -> CrowdSummary:
    """Summarise a newest-first slice of history for charting."""
    if not samples:
        return CrowdSummary(location_id=location_id, count=0)
    counts = {level.label: 0 for level in CrowdLevelValue}
    for sample in samples:
        counts[CrowdLevelValue(sample.level).label] += 1
    average = round(sum(s.percentage for s in samples) / len(samples))
    peak = max(samples, key=lambda s: (s.percentage, _recency(s)))
    return CrowdSummary(
        location_id=location_id,
        count=len(samples),
        average_percentage=average,
        peak=peak,
        latest_label=CrowdLevelValue(samples[0].level).label,
        level_counts=counts,
    )


class CrowdService:
    """Service for crowd-level samples of a single store."""

    def __init__(self, store: EntityStore, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self.store = store
        self.history_limit = require_limit(history_limit)

    async def _samples_for(self, location_id: int) -> List[CrowdLevel]:
        require_id(location_id, "location_id")
        samples = await self.store.list_all(EntityKind.CROWD_LEVEL)
        return [s for s in samples if s.location_id == location_id]

    async def get_current_crowd_level(self, location_id: int) -> Optional[CrowdLevel]:
        """Return the latest sample for a location, ``None`` if it has none."""
        return select_current(await self._samples_for(location_id))

    async def get_crowd_level_history(
        self,
        location_id: int,
        limit: Optional[int] = None,
    ) -> List[CrowdLevel]:
        """Return the newest ``limit`` samples for a location, newest first.

        ``limit`` defaults to the configured history length.
        """
        limit = self.history_limit if limit is None else require_limit(limit)
        return most_recent(await self._samples_for(location_id), limit)

    async def get_crowd_summary(self, location_id: int, limit: Optional[int] = None) -> CrowdSummary:
        history = await self.get_crowd_level_history(location_id, limit)
        return summarize_history(location_id, history)

    async def create_crowd_level(self, data) -> CrowdLevel:
        """Validate and store a directly reported sample."""
        sample = coerce(CrowdLevelCreate, data, "crowd level")
        crowd_level = await self.store.insert(EntityKind.CROWD_LEVEL, sample.model_dump())
        logger.info(
            "Recorded crowd level %s (level %s, %s%%) for location %s",
            crowd_level.id,
            int(crowd_level.level),
            crowd_level.percentage,
            crowd_level.location_id,
        )
        return crowd_level
