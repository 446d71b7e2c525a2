"""
Crowd level endpoints for API v1.

Allows clients (or staff at a venue) to report a crowd level sample
directly, without going through a user check-in.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from crowd_check_api.app.api.dependencies import get_storage
from crowd_check_api.app.api.errors import validation_response
from crowd_check_api.app.core.exceptions import ValidationError
from crowd_check_api.app.schemas.crowd_level import CrowdLevel, CrowdLevelCreate
from crowd_check_api.app.services.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=CrowdLevel,
    status_code=status.HTTP_201_CREATED,
    summary="Report a crowd level",
)
async def create_crowd_level(
    data: CrowdLevelCreate,
    storage: Storage = Depends(get_storage),
) -> CrowdLevel:
    """Record a crowd level sample; it becomes current if it is the newest."""
    try:
        return await storage.create_crowd_level(data)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to create crowd level for location %s", data.location_id)
        raise HTTPException(status_code=500, detail="Failed to create crowd level")
