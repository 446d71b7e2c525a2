"""
Demo data for development.

``seed_sample_data`` fills an empty storage with three places, a
current crowd level and a day of hourly history for each, two users
and a couple of reviews.  History percentages come from a seeded RNG so
repeated runs produce the same data.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Optional

from ..schemas.base import utc_now
from ..schemas.crowd_level import CrowdLevelValue
from .storage import Storage


logger = logging.getLogger(__name__)

SAMPLE_LOCATIONS = [
    {
        "name": "Skyline Café",
        "category": "Coffee shop",
        "address": "123 Coffee Street, Cityville",
        "description": "A cozy café with a great view of the city skyline.",
        "image_url": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=600&h=300",
        "latitude": 40.7128,
        "longitude": -74.0060,
        "distance": 0.3,
        "icon": "fa-coffee",
    },
    {
        "name": "Garden Park",
        "category": "Park",
        "address": "123 Park Avenue, Cityville",
        "description": "A beautiful park with gardens and playgrounds.",
        "image_url": "https://images.unsplash.com/photo-1527518120952-a02b3a8bf9c4?w=600&h=300",
        "latitude": 40.7200,
        "longitude": -74.0000,
        "distance": 0.5,
        "icon": "fa-tree",
    },
    {
        "name": "Central Mall",
        "category": "Shopping center",
        "address": "456 Shopping Blvd, Cityville",
        "description": "The largest shopping mall in the city with over 100 stores.",
        "image_url": "https://images.unsplash.com/photo-1555396273-367ea4eb4db5?w=600&h=300",
        "latitude": 40.7150,
        "longitude": -74.0080,
        "distance": 1.2,
        "icon": "fa-shopping-bag",
    },
]

# (percentage, level) of the "current" sample of each sample location
CURRENT_SAMPLES = [(35, CrowdLevelValue.LOW), (65, CrowdLevelValue.MEDIUM), (85, CrowdLevelValue.HIGH)]

WAIT_TIMES = {CrowdLevelValue.LOW: 0, CrowdLevelValue.MEDIUM: 15, CrowdLevelValue.HIGH: 30}

SAMPLE_USERS = [
    {"username": "john.doe", "password": "password123", "display_name": "John Doe", "initials": "JD"},
    {"username": "alice.smith", "password": "password123", "display_name": "Alice Smith", "initials": "AS"},
]


def level_for_percentage(percentage: int) -> CrowdLevelValue:
    if percentage > 70:
        return CrowdLevelValue.HIGH
    if percentage > 40:
        return CrowdLevelValue.MEDIUM
    return CrowdLevelValue.LOW


async def seed_sample_data(storage: Storage, seed: int = 42, now: Optional[datetime] = None) -> None:
    """Populate ``storage`` with demo records.

    Does nothing if the storage already holds locations.
    """
    if await storage.get_locations():
        logger.info("Storage already has locations; skipping sample data")
        return
    now = now or utc_now()
    rng = random.Random(seed)

    locations = [await storage.create_location(data) for data in SAMPLE_LOCATIONS]

    for location, (percentage, level) in zip(locations, CURRENT_SAMPLES):
        await storage.create_crowd_level(
            {
                "location_id": location.id,
                "level": level,
                "percentage": percentage,
                "timestamp": now,
                "wait_time": WAIT_TIMES[level],
            }
        )

    for location in locations:
        for hours_ago in range(1, 25):
            percentage = rng.randint(1, 100)
            level = level_for_percentage(percentage)
            await storage.create_crowd_level(
                {
                    "location_id": location.id,
                    "level": level,
                    "percentage": percentage,
                    "timestamp": now - timedelta(hours=hours_ago),
                    "wait_time": WAIT_TIMES[level],
                }
            )

    users = [await storage.create_user(data) for data in SAMPLE_USERS]

    park = locations[1]
    await storage.create_review(
        {
            "user_id": users[0].id,
            "location_id": park.id,
            "content": (
                "Great park! It was moderately busy but still plenty of space to relax. "
                "The playground area was more crowded though."
            ),
            "timestamp": now - timedelta(hours=2),
        }
    )
    await storage.create_review(
        {
            "user_id": users[1].id,
            "location_id": park.id,
            "content": "Visited in the morning and it was nice and quiet. By noon it got much busier. Best to come early!",
            "timestamp": now - timedelta(days=1),
        }
    )
    logger.info("Seeded %d sample locations and %d users", len(locations), len(users))
