"""Unit tests for crowd level selection, history and check-in derivation."""

import random
from datetime import timedelta

import pytest

from crowd_check_api.app.core.exceptions import ValidationError
from crowd_check_api.app.core.store import EntityKind
from crowd_check_api.app.schemas.check_in import CheckIn
from crowd_check_api.app.schemas.crowd_level import CrowdLevelValue, label_for
from crowd_check_api.app.services.crowd_service import (
    CrowdService,
    derive_sample_from_check_in,
    summarize_history,
)


def sample(location_id, timestamp, level=2, percentage=50):
    return {
        "location_id": location_id,
        "level": level,
        "percentage": percentage,
        "timestamp": timestamp,
    }


@pytest.fixture
def crowd(store) -> CrowdService:
    return CrowdService(store)


class TestCurrentCrowdLevel:
    @pytest.mark.asyncio
    async def test_latest_timestamp_wins_regardless_of_creation_order(self, crowd, base_time):
        t1, t2, t3 = base_time, base_time + timedelta(minutes=5), base_time + timedelta(minutes=10)
        await crowd.create_crowd_level(sample(7, t2, level=2))
        newest = await crowd.create_crowd_level(sample(7, t3, level=3))
        await crowd.create_crowd_level(sample(7, t1, level=1))

        current = await crowd.get_current_crowd_level(7)

        assert current.id == newest.id
        assert current.timestamp == t3

    @pytest.mark.asyncio
    async def test_equal_timestamps_prefer_highest_id(self, crowd, base_time):
        await crowd.create_crowd_level(sample(7, base_time, level=1))
        later = await crowd.create_crowd_level(sample(7, base_time, level=3))

        current = await crowd.get_current_crowd_level(7)

        assert current.id == later.id

    @pytest.mark.asyncio
    async def test_other_locations_are_ignored(self, crowd, base_time):
        await crowd.create_crowd_level(sample(7, base_time))
        await crowd.create_crowd_level(sample(8, base_time + timedelta(hours=1)))

        current = await crowd.get_current_crowd_level(7)

        assert current.location_id == 7

    @pytest.mark.asyncio
    async def test_no_samples_returns_none(self, crowd):
        assert await crowd.get_current_crowd_level(42) is None


class TestCrowdHistory:
    @pytest.mark.asyncio
    async def test_returns_24_most_recent_descending(self, crowd, base_time):
        offsets = list(range(30))
        random.Random(3).shuffle(offsets)
        for hours in offsets:
            await crowd.create_crowd_level(sample(7, base_time - timedelta(hours=hours)))

        history = await crowd.get_crowd_level_history(7, 24)

        assert len(history) == 24
        timestamps = [s.timestamp for s in history]
        assert timestamps == sorted(timestamps, reverse=True)
        assert len(set(timestamps)) == 24
        assert timestamps[0] == base_time
        assert timestamps[-1] == base_time - timedelta(hours=23)

    @pytest.mark.asyncio
    async def test_default_limit_is_24(self, crowd, base_time):
        for hours in range(30):
            await crowd.create_crowd_level(sample(7, base_time - timedelta(hours=hours)))

        assert len(await crowd.get_crowd_level_history(7)) == 24

    @pytest.mark.asyncio
    async def test_configured_default_limit(self, store, base_time):
        crowd = CrowdService(store, history_limit=5)
        for hours in range(10):
            await crowd.create_crowd_level(sample(7, base_time - timedelta(hours=hours)))

        assert len(await crowd.get_crowd_level_history(7)) == 5

    @pytest.mark.asyncio
    async def test_fewer_samples_than_limit(self, crowd, base_time):
        await crowd.create_crowd_level(sample(7, base_time))

        assert len(await crowd.get_crowd_level_history(7, 24)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -3, True, 2.5])
    async def test_invalid_limit_rejected(self, crowd, limit):
        with pytest.raises(ValidationError):
            await crowd.get_crowd_level_history(7, limit)

    @pytest.mark.asyncio
    async def test_invalid_location_id_rejected(self, crowd):
        with pytest.raises(ValidationError):
            await crowd.get_crowd_level_history(0)


class TestCreateCrowdLevel:
    @pytest.mark.asyncio
    async def test_level_out_of_range_rejected_without_writing(self, crowd, store, base_time):
        await crowd.create_crowd_level(sample(7, base_time))

        with pytest.raises(ValidationError) as exc_info:
            await crowd.create_crowd_level(sample(7, base_time, level=5))

        assert exc_info.value.details["errors"]
        assert len(await crowd.get_crowd_level_history(7)) == 1
        assert await store.count(EntityKind.CROWD_LEVEL) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("percentage", [-1, 101])
    async def test_percentage_out_of_range_rejected(self, crowd, base_time, percentage):
        with pytest.raises(ValidationError):
            await crowd.create_crowd_level(sample(7, base_time, percentage=percentage))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [("level", True), ("percentage", True), ("location_id", True), ("wait_time", False), ("location_id", "7")],
    )
    async def test_booleans_and_strings_are_not_numbers(self, crowd, store, base_time, field, value):
        data = {**sample(7, base_time), field: value}

        with pytest.raises(ValidationError):
            await crowd.create_crowd_level(data)

        assert await store.count(EntityKind.CROWD_LEVEL) == 0

    @pytest.mark.asyncio
    async def test_negative_wait_time_rejected(self, crowd, base_time):
        data = {**sample(7, base_time), "wait_time": -5}

        with pytest.raises(ValidationError):
            await crowd.create_crowd_level(data)

    @pytest.mark.asyncio
    async def test_accepts_camel_case_and_naive_timestamp(self, crowd):
        created = await crowd.create_crowd_level(
            {"locationId": 3, "level": 1, "percentage": 10, "timestamp": "2024-01-15T08:00:00", "waitTime": 0}
        )

        assert created.location_id == 3
        assert created.level is CrowdLevelValue.LOW
        assert created.timestamp.tzinfo is not None


class TestDeriveSample:
    @pytest.mark.parametrize(
        "perception, percentage, wait_time",
        [(1, 30, 0), (2, 60, 15), (3, 90, 30)],
    )
    def test_mapping_table(self, base_time, perception, percentage, wait_time):
        check_in = CheckIn(id=1, user_id=1, location_id=5, timestamp=base_time, crowd_perception=perception)

        derived = derive_sample_from_check_in(check_in, now=base_time)

        assert derived.location_id == 5
        assert int(derived.level) == perception
        assert derived.percentage == percentage
        assert derived.wait_time == wait_time

    def test_uses_derivation_time_not_check_in_time(self, base_time):
        check_in = CheckIn(id=1, user_id=1, location_id=5, timestamp=base_time, crowd_perception=2)
        later = base_time + timedelta(minutes=30)

        derived = derive_sample_from_check_in(check_in, now=later)

        assert derived.timestamp == later


class TestSummary:
    def test_empty_history(self):
        summary = summarize_history(4, [])

        assert summary.count == 0
        assert summary.peak is None
        assert summary.average_percentage is None

    @pytest.mark.asyncio
    async def test_summary_of_history(self, crowd, base_time):
        await crowd.create_crowd_level(sample(4, base_time - timedelta(hours=2), level=1, percentage=20))
        peak = await crowd.create_crowd_level(sample(4, base_time - timedelta(hours=1), level=3, percentage=90))
        await crowd.create_crowd_level(sample(4, base_time, level=2, percentage=55))

        summary = await crowd.get_crowd_summary(4)

        assert summary.count == 3
        assert summary.average_percentage == 55
        assert summary.peak.id == peak.id
        assert summary.latest_label == "Medium"
        assert summary.level_counts == {"Low": 1, "Medium": 1, "High": 1}


def test_labels():
    assert CrowdLevelValue.HIGH.label == "High"
    assert label_for(1) == "Low"
    assert label_for(9) == "Unknown"
