"""
Pydantic schemas for favorites.

A favorite links one user to one location.  The pair is unique, so the
same shape is used both to add and to remove a favorite.
"""

from .base import CamelModel, EntityId


class FavoriteCreate(CamelModel):
    """Schema for adding (or removing) a favorite."""

    user_id: EntityId
    location_id: EntityId


class Favorite(FavoriteCreate):
    """Stored favorite."""

    id: int

    model_config = {"frozen": True}
