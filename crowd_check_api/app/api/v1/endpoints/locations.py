"""
Location endpoints for API v1.

Locations are returned together with their current crowd level
(``crowdLevel``, ``null`` when the place has no samples yet).  Crowd
history, the chart summary, reviews and check-ins of a location hang
off ``/locations/{location_id}``.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from crowd_check_api.app.api.dependencies import get_storage
from crowd_check_api.app.api.errors import validation_response
from crowd_check_api.app.core.exceptions import ValidationError
from crowd_check_api.app.schemas.check_in import CheckIn
from crowd_check_api.app.schemas.crowd_level import CrowdLevel, CrowdSummary
from crowd_check_api.app.schemas.location import Location, LocationResolve, LocationWithCrowd
from crowd_check_api.app.schemas.review import ReviewWithAuthor
from crowd_check_api.app.services.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter()


async def with_crowd_level(storage: Storage, location: Location) -> LocationWithCrowd:
    """Attach the current crowd level to a location."""
    crowd_level = await storage.get_current_crowd_level(location.id)
    return LocationWithCrowd(**location.model_dump(), crowd_level=crowd_level)


async def with_crowd_levels(storage: Storage, locations: List[Location]) -> List[LocationWithCrowd]:
    return [await with_crowd_level(storage, location) for location in locations]


@router.get("", response_model=List[LocationWithCrowd], summary="List locations")
async def list_locations(storage: Storage = Depends(get_storage)) -> List[LocationWithCrowd]:
    """Return every location with its current crowd level."""
    try:
        return await with_crowd_levels(storage, await storage.get_locations())
    except Exception:
        logger.exception("Failed to fetch locations")
        raise HTTPException(status_code=500, detail="Failed to fetch locations")


@router.get(
    "/category/{category}",
    response_model=List[LocationWithCrowd],
    summary="List locations in a category",
)
async def list_locations_by_category(
    category: str,
    storage: Storage = Depends(get_storage),
) -> List[LocationWithCrowd]:
    """Return the locations whose category matches exactly."""
    try:
        return await with_crowd_levels(storage, await storage.get_locations_by_category(category))
    except Exception:
        logger.exception("Failed to fetch locations for category %s", category)
        raise HTTPException(status_code=500, detail="Failed to fetch locations by category")


@router.post(
    "",
    response_model=Location,
    status_code=status.HTTP_201_CREATED,
    summary="Find or create a location",
)
async def resolve_location(
    data: LocationResolve,
    response: Response,
    storage: Storage = Depends(get_storage),
) -> Location:
    """Return the stored location for a place picked on the map.

    Answers 200 with the existing record when the place is already
    known (same ``placeId`` or nearly identical coordinates) and 201
    with the new record otherwise.
    """
    try:
        location, created = await storage.resolve_location(data)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to resolve location '%s'", data.name)
        raise HTTPException(status_code=500, detail="Failed to create location")
    if not created:
        response.status_code = status.HTTP_200_OK
    return location


@router.get("/{location_id}", response_model=LocationWithCrowd, summary="Get a location")
async def get_location(
    location_id: int = Path(..., gt=0),
    storage: Storage = Depends(get_storage),
) -> LocationWithCrowd:
    """Return one location with its current crowd level, 404 if unknown."""
    try:
        location = await storage.get_location(location_id)
        result = await with_crowd_level(storage, location) if location else None
    except Exception:
        logger.exception("Failed to fetch location %s", location_id)
        raise HTTPException(status_code=500, detail="Failed to fetch location")
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return result


@router.get(
    "/{location_id}/crowd-history",
    response_model=List[CrowdLevel],
    summary="Crowd level history",
)
async def get_crowd_history(
    location_id: int = Path(..., gt=0),
    limit: Optional[int] = Query(None, ge=1, description="Number of samples, newest first"),
    storage: Storage = Depends(get_storage),
) -> List[CrowdLevel]:
    """Return the most recent samples of a location, newest first."""
    try:
        return await storage.get_crowd_level_history(location_id, limit)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to fetch crowd history for location %s", location_id)
        raise HTTPException(status_code=500, detail="Failed to fetch crowd history")


@router.get(
    "/{location_id}/crowd-summary",
    response_model=CrowdSummary,
    summary="Crowd history summary",
)
async def get_crowd_summary(
    location_id: int = Path(..., gt=0),
    limit: Optional[int] = Query(None, ge=1),
    storage: Storage = Depends(get_storage),
) -> CrowdSummary:
    """Return average, peak and per-level counts over the recent history."""
    try:
        return await storage.get_crowd_summary(location_id, limit)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to summarise crowd history for location %s", location_id)
        raise HTTPException(status_code=500, detail="Failed to fetch crowd summary")


@router.get(
    "/{location_id}/reviews",
    response_model=List[ReviewWithAuthor],
    summary="Reviews of a location",
)
async def get_location_reviews(
    location_id: int = Path(..., gt=0),
    storage: Storage = Depends(get_storage),
) -> List[ReviewWithAuthor]:
    """Return reviews newest first, each with a short author summary."""
    try:
        return await storage.get_reviews_with_authors(location_id)
    except Exception:
        logger.exception("Failed to fetch reviews for location %s", location_id)
        raise HTTPException(status_code=500, detail="Failed to fetch reviews")


@router.get(
    "/{location_id}/check-ins",
    response_model=List[CheckIn],
    summary="Check-ins at a location",
)
async def get_location_check_ins(
    location_id: int = Path(..., gt=0),
    storage: Storage = Depends(get_storage),
) -> List[CheckIn]:
    try:
        return await storage.get_check_ins_by_location(location_id)
    except Exception:
        logger.exception("Failed to fetch check-ins for location %s", location_id)
        raise HTTPException(status_code=500, detail="Failed to fetch check-ins")
