"""
Shared building blocks for the schema modules.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field
from pydantic.alias_generators import to_camel


# Identifiers supplied by callers.  Store-assigned ids start at 1.
# Strict so that JSON ``true`` is not read as id 1.
EntityId = Annotated[int, Field(gt=0, strict=True, description="Store-assigned identifier")]


def reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid value")
    return value


# For enum fields, which strict mode would limit to enum instances.
NotBool = BeforeValidator(reject_bool)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Read naive datetimes as UTC so every stored instant is comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CamelModel(BaseModel):
    """Base model serialising to camelCase while accepting snake_case too."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
