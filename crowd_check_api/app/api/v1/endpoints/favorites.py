"""
Favorite endpoints for API v1.

Both calls are idempotent: adding a favorite twice returns the same
record and removing a missing favorite still answers 204.  A user's
favorite locations are listed under ``/users/{user_id}/favorites``.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from crowd_check_api.app.api.dependencies import get_storage
from crowd_check_api.app.api.errors import validation_response
from crowd_check_api.app.core.exceptions import ValidationError
from crowd_check_api.app.schemas.favorite import Favorite, FavoriteCreate
from crowd_check_api.app.services.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=Favorite,
    status_code=status.HTTP_201_CREATED,
    summary="Add a location to favorites",
)
async def create_favorite(
    data: FavoriteCreate,
    storage: Storage = Depends(get_storage),
) -> Favorite:
    try:
        return await storage.create_favorite(data)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to add location %s to favorites of user %s", data.location_id, data.user_id)
        raise HTTPException(status_code=500, detail="Failed to add to favorites")


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a location from favorites",
)
async def delete_favorite(
    data: FavoriteCreate,
    storage: Storage = Depends(get_storage),
) -> None:
    """Remove a favorite given ``userId`` and ``locationId`` in the body."""
    try:
        await storage.delete_favorite(data.user_id, data.location_id)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to remove location %s from favorites of user %s", data.location_id, data.user_id)
        raise HTTPException(status_code=500, detail="Failed to remove from favorites")
    return None
