"""Unit tests for the MongoDB gain plan repositories (motor mocked)."""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import DuplicateKeyError

from domain.gain_plan.core.entities.body_stats_record import BodyStatsRecord
from domain.gain_plan.core.exceptions.domain_errors import (
    DuplicateRecordError,
    SnapshotConflictError,
)
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot
from domain.gain_plan.core.value_objects.macro_targets import MacroTargets
from infrastructure.persistence.mongodb import (
    MongoAdaptationRepository,
    MongoBodyStatsRepository,
    MongoProfileRepository,
    MongoSnapshotRepository,
)
from infrastructure.persistence.mongodb.indexes import INDEXES, ensure_indexes


@pytest.fixture
def collection():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.replace_one = AsyncMock(return_value=MagicMock(matched_count=1))
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.count_documents = AsyncMock(return_value=0)
    return collection


@pytest.fixture
def client(collection):
    db = MagicMock()
    db.__getitem__.return_value = collection
    client = MagicMock()
    client.__getitem__.return_value = db
    return client


def _cursor(docs):
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


def _snapshot() -> CalculationSnapshot:
    return CalculationSnapshot(
        user_id="user123",
        bmr=1730,
        tdee=2682,
        surplus=550,
        target_calories=3232,
        macro_targets=MacroTargets(protein_g=202.0, carbs_g=404.0, fat_g=89.8),
        last_calculated=datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc),
    )


class TestMongoSnapshotRepository:
    @pytest.mark.asyncio
    async def test_first_save_inserts_version_one(self, client, collection):
        saved = await MongoSnapshotRepository(client).save(_snapshot(), expected_version=None)

        document = collection.insert_one.await_args.args[0]
        assert saved.version == 1
        assert document["_id"] == "user123"
        assert document["version"] == 1

    @pytest.mark.asyncio
    async def test_concurrent_insert_conflicts(self, client, collection):
        collection.insert_one.side_effect = DuplicateKeyError("duplicate _id")

        with pytest.raises(SnapshotConflictError):
            await MongoSnapshotRepository(client).save(_snapshot(), expected_version=None)

    @pytest.mark.asyncio
    async def test_replace_filters_on_expected_version(self, client, collection):
        saved = await MongoSnapshotRepository(client).save(_snapshot(), expected_version=4)

        filter_dict, document = collection.replace_one.await_args.args
        assert filter_dict == {"_id": "user123", "version": 4}
        assert document["version"] == 5
        assert saved.version == 5

    @pytest.mark.asyncio
    async def test_no_match_conflicts(self, client, collection):
        collection.replace_one.return_value = MagicMock(matched_count=0)

        with pytest.raises(SnapshotConflictError):
            await MongoSnapshotRepository(client).save(_snapshot(), expected_version=4)

    @pytest.mark.asyncio
    async def test_get_maps_document(self, client, collection):
        document = _snapshot().with_version(3).to_dict()
        document["_id"] = "user123"
        collection.find_one.return_value = document

        snapshot = await MongoSnapshotRepository(client).get("user123")

        assert snapshot.version == 3
        assert snapshot.macro_targets.carbs_g == 404.0

    @pytest.mark.asyncio
    async def test_invalidate_bumps_version(self, client, collection):
        await MongoSnapshotRepository(client).invalidate("user123")

        collection.update_one.assert_awaited_once_with(
            {"_id": "user123"}, {"$set": {"invalidated": True}, "$inc": {"version": 1}}
        )


class TestMongoProfileRepository:
    @pytest.mark.asyncio
    async def test_save_upserts_by_user(self, client, collection, gain_profile):
        await MongoProfileRepository(client).save(gain_profile)

        filter_dict, document = collection.replace_one.await_args.args
        assert filter_dict == {"_id": "user123"}
        assert document["biometrics"]["current_weight_kg"] == 75.0
        assert collection.replace_one.await_args.kwargs["upsert"] is True

    @pytest.mark.asyncio
    async def test_round_trip_through_document(self, client, collection, gain_profile):
        repository = MongoProfileRepository(client)
        collection.find_one.return_value = repository.to_document(gain_profile)

        loaded = await repository.find_by_user_id("user123")

        assert loaded.biometrics == gain_profile.biometrics
        assert loaded.goal == gain_profile.goal


class TestMongoBodyStatsRepository:
    @pytest.mark.asyncio
    async def test_duplicate_append(self, client, collection):
        collection.insert_one.side_effect = DuplicateKeyError("duplicate _id")
        record = BodyStatsRecord(user_id="user123", date=date(2026, 3, 15), weight_kg=75.0)

        with pytest.raises(DuplicateRecordError):
            await MongoBodyStatsRepository(client).append(record)

    @pytest.mark.asyncio
    async def test_date_range_query(self, client, collection):
        record = BodyStatsRecord(user_id="user123", date=date(2026, 3, 15), weight_kg=75.0)
        collection.find.return_value = _cursor([record.to_dict()])

        found = await MongoBodyStatsRepository(client).find_by_date_range(
            "user123", date(2026, 3, 1), date(2026, 3, 15)
        )

        collection.find.assert_called_once_with(
            {"user_id": "user123", "date": {"$gte": "2026-03-01", "$lte": "2026-03-15"}}
        )
        assert found == [record]


class TestMongoAdaptationRepository:
    @pytest.mark.asyncio
    async def test_find_pending_filter(self, client, collection):
        collection.find.return_value = _cursor([])

        await MongoAdaptationRepository(client).find_pending("user123", date(2026, 3, 16))

        collection.find.assert_called_once_with(
            {"user_id": "user123", "applied": False, "effective_date": {"$lte": "2026-03-16"}}
        )

    @pytest.mark.asyncio
    async def test_mark_applied_is_conditional(self, client, collection):
        applied_at = datetime(2026, 3, 16, 9, 0, tzinfo=timezone.utc)

        flipped = await MongoAdaptationRepository(client).mark_applied("a-1", applied_at)

        assert flipped is True
        collection.update_one.assert_awaited_once_with(
            {"_id": "a-1", "applied": False},
            {"$set": {"applied": True, "applied_at": "2026-03-16T09:00:00+00:00"}},
        )

    @pytest.mark.asyncio
    async def test_mark_applied_loses_when_nothing_matches(self, client, collection):
        collection.update_one.return_value = MagicMock(matched_count=0)

        flipped = await MongoAdaptationRepository(client).mark_applied(
            "a-1", datetime(2026, 3, 16, tzinfo=timezone.utc)
        )

        assert flipped is False


@pytest.mark.asyncio
async def test_ensure_indexes():
    collection = MagicMock()
    collection.create_index = AsyncMock()
    db = MagicMock()
    db.__getitem__.return_value = collection

    created = await ensure_indexes(db)

    assert created == 4
    assert created == sum(len(specs) for specs in INDEXES.values())
    assert collection.create_index.await_count == 4
