"""
Pydantic schemas for check-ins.

A check-in is one user's report of the crowd level they perceive at a
location.  The timestamp may be sent as an ISO string or omitted, in
which case the moment of validation is used.
"""

from datetime import datetime
from typing import Annotated

from pydantic import Field, field_validator

from .base import CamelModel, EntityId, NotBool, ensure_utc, utc_now
from .crowd_level import CrowdLevel, CrowdLevelValue


class CheckInCreate(CamelModel):
    """Schema for submitting a check-in."""

    user_id: EntityId
    location_id: EntityId
    timestamp: datetime = Field(default_factory=utc_now)
    crowd_perception: Annotated[CrowdLevelValue, NotBool] = Field(..., description="1 = Low, 2 = Medium, 3 = High")

    @field_validator("timestamp")
    @classmethod
    def normalise_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class CheckIn(CheckInCreate):
    """Stored check-in."""

    id: int

    model_config = {"frozen": True}


class CheckInResult(CamelModel):
    """A stored check-in together with the sample derived from it."""

    check_in: CheckIn
    crowd_level: CrowdLevel
