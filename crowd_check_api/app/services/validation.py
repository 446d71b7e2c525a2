"""
Input checks shared by the services.

Everything here runs before the store is touched.  Failures raise
``ValidationError`` so callers see one exception type whether the
problem was a pydantic shape error or a bad scalar argument.
"""

import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def coerce(model: Type[M], data: Any, what: str) -> M:
    """Return ``data`` as an instance of ``model``, validating mappings.

    Instances of ``model`` (or its subclasses) are passed through
    unchanged; anything else is validated.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning("Rejected %s data: %d validation error(s)", what, exc.error_count())
        raise ValidationError.from_pydantic(f"Invalid {what} data", exc) from exc


def require_id(value: Any, name: str) -> int:
    """Check that ``value`` is a positive integer identifier."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"Invalid {name}", {name: value})
    return value


def require_limit(value: Any) -> int:
    """Check that a result ``limit`` is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("Limit must be a positive integer", {"limit": value})
    return value
