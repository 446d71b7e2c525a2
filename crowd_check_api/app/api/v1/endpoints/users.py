"""
User endpoints for API v1.

Registration and lookup of users, plus the per-user views (favorite
locations and check-ins).  Passwords are accepted on registration but
never returned.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from crowd_check_api.app.api.dependencies import get_storage
from crowd_check_api.app.api.errors import validation_response
from crowd_check_api.app.api.v1.endpoints.locations import with_crowd_levels
from crowd_check_api.app.core.exceptions import ValidationError
from crowd_check_api.app.schemas.check_in import CheckIn
from crowd_check_api.app.schemas.location import LocationWithCrowd
from crowd_check_api.app.schemas.user import UserCreate, UserRead
from crowd_check_api.app.services.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED, summary="Register a user")
async def register_user(
    data: UserCreate,
    storage: Storage = Depends(get_storage),
) -> UserRead:
    """Create a user.  A taken username answers 400."""
    try:
        user = await storage.create_user(data)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to register user %s", data.username)
        raise HTTPException(status_code=500, detail="Failed to create user")
    return UserRead.model_validate(user)


@router.get("/{user_id}", response_model=UserRead, summary="Get a user")
async def get_user(
    user_id: int = Path(..., gt=0),
    storage: Storage = Depends(get_storage),
) -> UserRead:
    try:
        user = await storage.get_user(user_id)
    except Exception:
        logger.exception("Failed to fetch user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch user")
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.model_validate(user)


@router.get(
    "/{user_id}/favorites",
    response_model=List[LocationWithCrowd],
    summary="Favorite locations of a user",
)
async def get_user_favorites(
    user_id: int = Path(..., gt=0),
    storage: Storage = Depends(get_storage),
) -> List[LocationWithCrowd]:
    """Return the user's favorite locations with their current crowd level."""
    try:
        return await with_crowd_levels(storage, await storage.get_favorite_locations(user_id))
    except Exception:
        logger.exception("Failed to fetch favorite locations of user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch favorite locations")


@router.get(
    "/{user_id}/check-ins",
    response_model=List[CheckIn],
    summary="Check-ins of a user",
)
async def get_user_check_ins(
    user_id: int = Path(..., gt=0),
    storage: Storage = Depends(get_storage),
) -> List[CheckIn]:
    try:
        return await storage.get_check_ins_by_user(user_id)
    except Exception:
        logger.exception("Failed to fetch check-ins of user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch check-ins")
