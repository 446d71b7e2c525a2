"""
Business logic for locations.

Besides plain lookups this service resolves places picked on the map
to stored locations.  A picked place is the same location as a stored
one when it carries the same provider ``place_id`` or lies within
``dedup_tolerance`` degrees on both axes.  Resolution scans every
location (O(n)); a large catalog would want an index on ``place_id``
and a spatial grid instead.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..core.store import EntityKind, EntityStore
from ..schemas.location import Location, LocationCreate, LocationResolve
from .validation import coerce, require_id


logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Other"
DEFAULT_ICON = "fa-map-marker-alt"
DEFAULT_DEDUP_TOLERANCE = 0.0001
PLACEHOLDER_IMAGE_URL = "https://source.unsplash.com/random/800x600/?place"

CATEGORY_ICONS = {
    "Restaurant": "fa-utensils",
    "Coffee shop": "fa-coffee",
    "Bar": "fa-cocktail",
    "Shopping center": "fa-shopping-bag",
    "Gym": "fa-dumbbell",
    "Park": "fa-tree",
    "Museum": "fa-landmark",
    "Library": "fa-book",
    "Beach": "fa-umbrella-beach",
    "Airport": "fa-plane-departure",
    "Movie theater": "fa-film",
    "Train station": "fa-train",
    "Hospital": "fa-hospital",
    "School": "fa-school",
    "University": "fa-university",
    "Other": DEFAULT_ICON,
}


def icon_for_category(category: Optional[str]) -> str:
    return CATEGORY_ICONS.get(category or "", DEFAULT_ICON)


def is_nearby(location: Location, latitude: float, longitude: float, tolerance: float) -> bool:
    return (
        abs(location.latitude - latitude) < tolerance
        and abs(location.longitude - longitude) < tolerance
    )


def find_match(
    locations: Iterable[Location],
    place: LocationResolve,
    tolerance: float,
) -> Optional[Location]:
    """Return the stored location ``place`` refers to, if any.

    A ``place_id`` match takes precedence over a proximity match.
    Among several candidates the oldest (lowest id) wins.
    """
    candidates = sorted(locations, key=lambda loc: loc.id)
    if place.place_id:
        for location in candidates:
            if location.place_id == place.place_id:
                return location
    for location in candidates:
        if is_nearby(location, place.latitude, place.longitude, tolerance):
            return location
    return None


class LocationService:
    """Service for the location catalog."""

    def __init__(self, store: EntityStore, dedup_tolerance: float = DEFAULT_DEDUP_TOLERANCE) -> None:
        self.store = store
        self.dedup_tolerance = dedup_tolerance

    async def get_location(self, location_id: int) -> Optional[Location]:
        require_id(location_id, "location_id")
        return await self.store.get(EntityKind.LOCATION, location_id)

    async def get_locations(self) -> List[Location]:
        locations = await self.store.list_all(EntityKind.LOCATION)
        return sorted(locations, key=lambda loc: loc.id)

    async def get_locations_by_category(self, category: str) -> List[Location]:
        return [loc for loc in await self.get_locations() if loc.category == category]

    async def create_location(self, data) -> Location:
        """Create a location exactly as given, without de-duplication."""
        location_data = coerce(LocationCreate, data, "location")
        location = await self.store.insert(EntityKind.LOCATION, location_data.model_dump())
        logger.info("Created location %s '%s'", location.id, location.name)
        return location

    async def resolve_location(self, data) -> Tuple[Location, bool]:
        """Return the stored location for a picked place, creating it if new.

        Returns a ``(location, created)`` pair.  An existing match is
        returned unchanged: fields of the incoming place are not merged.
        """
        place = coerce(LocationResolve, data, "location")
        async with self.store.transaction(EntityKind.LOCATION):
            existing = find_match(
                await self.store.list_all(EntityKind.LOCATION),
                place,
                self.dedup_tolerance,
            )
            if existing is not None:
                logger.debug("Place '%s' resolved to existing location %s", place.name, existing.id)
                return existing, False
            category = place.category or DEFAULT_CATEGORY
            new_location = LocationCreate(
                name=place.name,
                category=category,
                address=place.address,
                description=place.description or f"Location at {place.address}",
                image_url=place.image_url or PLACEHOLDER_IMAGE_URL,
                latitude=place.latitude,
                longitude=place.longitude,
                distance=place.distance,
                icon=icon_for_category(category),
                place_id=place.place_id or None,
            )
            location = await self.store.insert(EntityKind.LOCATION, new_location.model_dump())
        logger.info("Created location %s '%s' from picked place", location.id, location.name)
        return location, True
