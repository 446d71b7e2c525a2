"""
Check-in endpoints for API v1.

A check-in records the crowd level a user perceives at a location.
The response carries both the stored check-in and the crowd level
sample derived from it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from crowd_check_api.app.api.dependencies import get_storage
from crowd_check_api.app.api.errors import validation_response
from crowd_check_api.app.core.exceptions import ValidationError
from crowd_check_api.app.schemas.check_in import CheckInCreate, CheckInResult
from crowd_check_api.app.services.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=CheckInResult,
    status_code=status.HTTP_201_CREATED,
    summary="Check in at a location",
)
async def create_check_in(
    data: CheckInCreate,
    storage: Storage = Depends(get_storage),
) -> CheckInResult:
    """Store a check-in and return it with its derived crowd level."""
    logger.debug("Received check-in from user %s for location %s", data.user_id, data.location_id)
    try:
        return await storage.create_check_in(data)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to create check-in for location %s", data.location_id)
        raise HTTPException(status_code=500, detail="Failed to create check-in")
