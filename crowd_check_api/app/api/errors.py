"""
Error responses shared by the v1 endpoints.

Invalid input answers 400 with a flat body::

    {"message": "Invalid crowd level data", "errors": [...]}
"""

from typing import Any, List

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..core.exceptions import ValidationError


def validation_body(message: str, errors: List[Any]) -> dict:
    return {"message": message, "errors": jsonable_encoder(errors)}


def validation_response(exc: ValidationError) -> JSONResponse:
    """Turn a rejected write or query into a 400 response."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=validation_body(exc.message, exc.details.get("errors", [])),
    )
