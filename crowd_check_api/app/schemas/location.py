"""
Pydantic models for location data.

``LocationCreate`` is the full insertable shape.  ``LocationResolve`` is
the looser payload sent by map clients when a user picks a place: it
only needs a name, an address and coordinates, and the service fills in
category, description, image and icon when it has to create a new
record.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel
from .crowd_level import CrowdLevel


class LocationBase(CamelModel):
    name: str = Field(..., min_length=1, examples=["Skyline Café"])
    address: str = Field(..., min_length=1, examples=["123 Coffee Street, Cityville"])
    latitude: float = Field(..., ge=-90, le=90, examples=[40.7128])
    longitude: float = Field(..., ge=-180, le=180, examples=[-74.0060])
    description: Optional[str] = None
    image_url: Optional[str] = None
    distance: Optional[float] = Field(None, ge=0, description="Client-supplied distance, not recomputed")
    place_id: Optional[str] = Field(None, description="External map-provider identifier")


class LocationCreate(LocationBase):
    """Schema for creating a location with every field spelled out."""

    category: str = Field(..., min_length=1, examples=["Coffee shop"])
    icon: str = Field(..., min_length=1, examples=["fa-coffee"])


class LocationResolve(LocationBase):
    """Schema for resolving a picked place to a stored location."""

    category: Optional[str] = None


class Location(LocationCreate):
    """Stored location."""

    id: int

    model_config = {"frozen": True}


class LocationWithCrowd(Location):
    """Location together with its current crowd level (``None`` if no sample)."""

    crowd_level: Optional[CrowdLevel] = None
