"""
Review endpoints for API v1.

Reviews are submitted here and listed per location under
``/locations/{location_id}/reviews``.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from crowd_check_api.app.api.dependencies import get_storage
from crowd_check_api.app.api.errors import validation_response
from crowd_check_api.app.core.exceptions import ValidationError
from crowd_check_api.app.schemas.review import Review, ReviewCreate
from crowd_check_api.app.services.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=Review,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a review",
)
async def create_review(
    data: ReviewCreate,
    storage: Storage = Depends(get_storage),
) -> Review:
    """Create a review; the timestamp defaults to now when omitted."""
    try:
        return await storage.create_review(data)
    except ValidationError as e:
        return validation_response(e)
    except Exception:
        logger.exception("Failed to create review for location %s", data.location_id)
        raise HTTPException(status_code=500, detail="Failed to create review")
