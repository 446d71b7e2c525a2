"""
Pydantic schemas for crowd-level samples.

A sample is an immutable point-in-time observation of how busy a
location is.  ``level`` is a closed three-value enumeration and
``percentage`` a bounded integer, so out-of-range values never reach
the store.
"""

from datetime import datetime
from enum import IntEnum
from typing import Annotated, Dict, Optional

from pydantic import Field, Strict, field_validator

from .base import CamelModel, EntityId, NotBool, ensure_utc, utc_now


class CrowdLevelValue(IntEnum):
    """Perceived crowd level: 1 low, 2 medium, 3 high."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


def label_for(level: int) -> str:
    """Return the display label for a raw level, ``"Unknown"`` if invalid."""
    try:
        return CrowdLevelValue(level).label
    except ValueError:
        return "Unknown"


Percentage = Annotated[int, Field(ge=0, le=100, strict=True, description="Occupancy estimate, 0-100")]


class CrowdLevelCreate(CamelModel):
    """Schema for recording a new crowd-level sample."""

    location_id: EntityId
    level: Annotated[CrowdLevelValue, NotBool] = Field(..., description="1 = Low, 2 = Medium, 3 = High")
    percentage: Percentage
    timestamp: datetime = Field(default_factory=utc_now)
    wait_time: Optional[Annotated[int, Strict()]] = Field(None, ge=0, description="Expected wait in minutes")

    @field_validator("timestamp")
    @classmethod
    def normalise_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class CrowdLevel(CrowdLevelCreate):
    """Stored crowd-level sample."""

    id: int

    model_config = {"frozen": True}


class CrowdSummary(CamelModel):
    """Aggregate view over a slice of crowd history."""

    location_id: int
    count: int
    average_percentage: Optional[int] = None
    peak: Optional[CrowdLevel] = None
    latest_label: Optional[str] = None
    level_counts: Dict[str, int] = Field(default_factory=dict)
