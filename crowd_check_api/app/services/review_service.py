"""
Business logic for reviews.

Reviews are append-only free-text notes about a location.  They are
listed newest first, optionally paired with a short summary of their
author for display.
"""

import logging
from typing import List, Optional

from ..core.store import EntityKind, EntityStore
from ..schemas.review import Review, ReviewAuthor, ReviewCreate, ReviewWithAuthor
from ..schemas.user import User
from .validation import coerce, require_id


logger = logging.getLogger(__name__)


def author_summary(user: Optional[User]) -> Optional[ReviewAuthor]:
    """Display name and initials, falling back to the username."""
    if user is None:
        return None
    return ReviewAuthor(
        id=user.id,
        display_name=user.display_name or user.username,
        initials=user.initials or user.username[:2].upper(),
    )


class ReviewService:
    """Service for location reviews."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    async def create_review(self, data) -> Review:
        review_data = coerce(ReviewCreate, data, "review")
        review = await self.store.insert(EntityKind.REVIEW, review_data.model_dump())
        logger.info("User %s submitted review %s for location %s", review.user_id, review.id, review.location_id)
        return review

    async def get_reviews_by_location(self, location_id: int) -> List[Review]:
        require_id(location_id, "location_id")
        reviews = await self.store.list_all(EntityKind.REVIEW)
        return sorted(
            (r for r in reviews if r.location_id == location_id),
            key=lambda r: (r.timestamp, r.id),
            reverse=True,
        )

    async def get_reviews_with_authors(self, location_id: int) -> List[ReviewWithAuthor]:
        results: List[ReviewWithAuthor] = []
        for review in await self.get_reviews_by_location(location_id):
            user = await self.store.get(EntityKind.USER, review.user_id)
            results.append(ReviewWithAuthor(**review.model_dump(), user=author_summary(user)))
        return results
