"""Unit tests for the in-memory entity store."""

import asyncio

import pytest
from pydantic import ValidationError as PydanticValidationError

from crowd_check_api.app.core.store import EntityKind, MemoryEntityStore
from crowd_check_api.app.schemas.favorite import Favorite


class TestIdentifierAssignment:
    """Identifiers are positive, strictly increasing and never reused."""

    @pytest.mark.asyncio
    async def test_ids_start_at_one_and_increase(self, store):
        first = await store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 1})
        second = await store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 2})
        await store.get(EntityKind.FAVORITE, first.id)
        await store.list_all(EntityKind.FAVORITE)
        third = await store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 3})

        assert [first.id, second.id, third.id] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, store):
        await store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 1})
        second = await store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 2})

        assert await store.delete(EntityKind.FAVORITE, second.id) is True
        third = await store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 3})

        assert third.id == 3

    @pytest.mark.asyncio
    async def test_kinds_have_independent_counters(self, store):
        favorite = await store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 1})
        review = await store.insert(
            EntityKind.REVIEW,
            {"user_id": 1, "location_id": 1, "content": "Quiet in the morning"},
        )

        assert favorite.id == 1
        assert review.id == 1

    @pytest.mark.asyncio
    async def test_supplied_id_is_ignored(self, store):
        favorite = await store.insert(EntityKind.FAVORITE, {"id": 99, "user_id": 1, "location_id": 1})

        assert favorite.id == 1

    @pytest.mark.asyncio
    async def test_invalid_record_does_not_consume_id(self, store):
        with pytest.raises(PydanticValidationError):
            await store.insert(
                EntityKind.CROWD_LEVEL,
                {"location_id": 1, "level": 5, "percentage": 50},
            )

        sample = await store.insert(
            EntityKind.CROWD_LEVEL,
            {"location_id": 1, "level": 2, "percentage": 50},
        )
        assert sample.id == 1

    @pytest.mark.asyncio
    async def test_concurrent_inserts_get_distinct_ids(self, store):
        records = await asyncio.gather(
            *(
                store.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": n})
                for n in range(1, 51)
            )
        )

        assert sorted(r.id for r in records) == list(range(1, 51))


class TestLookups:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, store):
        assert await store.get(EntityKind.LOCATION, 1) is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, store):
        assert await store.delete(EntityKind.FAVORITE, 7) is False

    @pytest.mark.asyncio
    async def test_records_are_typed_and_counted(self, store):
        await store.insert(EntityKind.FAVORITE, {"user_id": 2, "location_id": 3})

        records = await store.list_all(EntityKind.FAVORITE)

        assert isinstance(records[0], Favorite)
        assert await store.count(EntityKind.FAVORITE) == 1

    @pytest.mark.asyncio
    async def test_list_all_returns_a_copy(self, store):
        await store.insert(EntityKind.FAVORITE, {"user_id": 2, "location_id": 3})

        records = await store.list_all(EntityKind.FAVORITE)
        records.clear()

        assert await store.count(EntityKind.FAVORITE) == 1

    def test_stores_are_isolated(self):
        first = MemoryEntityStore()
        second = MemoryEntityStore()

        asyncio.run(first.insert(EntityKind.FAVORITE, {"user_id": 1, "location_id": 1}))

        assert asyncio.run(second.count(EntityKind.FAVORITE)) == 0
