"""Unit tests for the storage facade: error handling and demo data."""

import logging

import pytest

from crowd_check_api.app.core.exceptions import StorageError, ValidationError
from crowd_check_api.app.core.store import EntityKind, MemoryEntityStore
from crowd_check_api.app.services.sample_data import level_for_percentage, seed_sample_data
from crowd_check_api.app.services.storage import CrowdStorage, Storage


class BrokenStore(MemoryEntityStore):
    """Store whose listings always fail."""

    async def list_all(self, kind):
        raise RuntimeError("disk on fire")


class TestErrorHandling:
    def test_facade_implements_contract(self, storage):
        assert isinstance(storage, Storage)

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_logged_and_wrapped(self, caplog):
        storage = CrowdStorage(BrokenStore())

        with caplog.at_level(logging.ERROR):
            with pytest.raises(StorageError) as exc_info:
                await storage.get_current_crowd_level(7)

        assert exc_info.value.operation == "get_current_crowd_level"
        assert "disk on fire" in str(exc_info.value)
        assert "get_current_crowd_level failed" in caplog.text
        assert "7" in caplog.text

    @pytest.mark.asyncio
    async def test_validation_errors_pass_through(self, storage):
        with pytest.raises(ValidationError):
            await storage.create_crowd_level({"location_id": 7, "level": 5, "percentage": 50})

    @pytest.mark.asyncio
    async def test_rejected_sample_leaves_count_unchanged(self, storage, store):
        await storage.create_crowd_level({"location_id": 7, "level": 2, "percentage": 50})

        with pytest.raises(ValidationError):
            await storage.create_crowd_level({"location_id": 7, "level": 5, "percentage": 50})

        assert len(await storage.get_crowd_level_history(7)) == 1
        assert await store.count(EntityKind.CROWD_LEVEL) == 1

    @pytest.mark.asyncio
    async def test_malformed_identifier_rejected(self, storage):
        with pytest.raises(ValidationError):
            await storage.get_location("7")


class TestSampleData:
    @pytest.mark.asyncio
    async def test_seed_creates_demo_records(self, storage, store, base_time):
        await seed_sample_data(storage, seed=1, now=base_time)

        locations = await storage.get_locations()
        assert [loc.name for loc in locations] == ["Skyline Café", "Garden Park", "Central Mall"]
        assert await store.count(EntityKind.CROWD_LEVEL) == 3 + 3 * 24
        assert await store.count(EntityKind.USER) == 2
        assert len(await storage.get_reviews_by_location(2)) == 2

        current = await storage.get_current_crowd_level(3)
        assert current.timestamp == base_time
        assert current.percentage == 85
        assert len(await storage.get_crowd_level_history(1)) == 24

    @pytest.mark.asyncio
    async def test_seed_skips_populated_storage(self, storage, store, sample_location):
        await storage.create_location(sample_location)

        await seed_sample_data(storage)

        assert await store.count(EntityKind.LOCATION) == 1

    @pytest.mark.parametrize("percentage, level", [(10, 1), (41, 2), (70, 2), (71, 3)])
    def test_level_thresholds(self, percentage, level):
        assert int(level_for_percentage(percentage)) == level
