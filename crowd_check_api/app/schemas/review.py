"""
Pydantic schemas for location reviews.

Reviews are free-text notes users leave about a place.  When listed
over the API each review carries a short author summary so clients do
not need a second round trip per review.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, EntityId, ensure_utc, utc_now


class ReviewCreate(CamelModel):
    """Schema for creating a new review."""

    user_id: EntityId
    location_id: EntityId
    content: str = Field(..., min_length=1, description="Review text")
    timestamp: datetime = Field(default_factory=utc_now)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        """Trim whitespace; a review of only whitespace is rejected."""
        v = v.strip()
        if not v:
            raise ValueError("Review content must not be empty")
        return v

    @field_validator("timestamp")
    @classmethod
    def normalise_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class Review(ReviewCreate):
    """Stored review."""

    id: int

    model_config = {"frozen": True}


class ReviewAuthor(CamelModel):
    id: int
    display_name: str
    initials: str


class ReviewWithAuthor(Review):
    """Review enriched with its author, ``None`` when the user is unknown."""

    user: Optional[ReviewAuthor] = None
