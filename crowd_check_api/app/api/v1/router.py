"""
Top‑level router for version 1 of the API.

Aggregates the resource routers under a unified prefix.  When new
resources are introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import (
    check_ins,
    crowd_levels,
    favorites,
    locations,
    reviews,
    users,
)

router = APIRouter()

router.include_router(locations.router, prefix="/locations", tags=["locations"])
router.include_router(crowd_levels.router, prefix="/crowd-levels", tags=["crowd-levels"])
router.include_router(check_ins.router, prefix="/check-ins", tags=["check-ins"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
router.include_router(users.router, prefix="/users", tags=["users"])
