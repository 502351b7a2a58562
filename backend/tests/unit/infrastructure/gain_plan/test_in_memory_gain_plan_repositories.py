"""Unit tests for the in-memory gain plan repositories."""

from datetime import date, datetime, timezone

import pytest

from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.entities.body_stats_record import BodyStatsRecord
from domain.gain_plan.core.exceptions.domain_errors import (
    DuplicateRecordError,
    SnapshotConflictError,
)
from domain.gain_plan.core.value_objects.adjustments import MacroAdjustments, WorkoutAdjustments
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot
from domain.gain_plan.core.value_objects.macro_targets import MacroTargets
from infrastructure.persistence.in_memory import (
    InMemoryAdaptationRepository,
    InMemoryBodyStatsRepository,
    InMemoryProfileRepository,
    InMemorySnapshotRepository,
)


def _snapshot(target_calories: int = 3232) -> CalculationSnapshot:
    return CalculationSnapshot(
        user_id="user123",
        bmr=1730,
        tdee=2682,
        surplus=target_calories - 2682,
        target_calories=target_calories,
        macro_targets=MacroTargets(protein_g=202.0, carbs_g=404.0, fat_g=89.8),
        last_calculated=datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc),
    )


class TestInMemorySnapshotRepository:
    def setup_method(self):
        self.repository = InMemorySnapshotRepository()

    @pytest.mark.asyncio
    async def test_insert_then_replace(self):
        first = await self.repository.save(_snapshot(), expected_version=None)
        second = await self.repository.save(_snapshot(3300), expected_version=1)

        assert (first.version, second.version) == (1, 2)
        assert (await self.repository.get("user123")).target_calories == 3300
        assert self.repository.write_count == 2

    @pytest.mark.asyncio
    async def test_stale_version_conflicts(self):
        await self.repository.save(_snapshot(), expected_version=None)

        with pytest.raises(SnapshotConflictError) as exc_info:
            await self.repository.save(_snapshot(3300), expected_version=None)

        assert exc_info.value.expected_version is None
        assert (await self.repository.get("user123")).target_calories == 3232

    @pytest.mark.asyncio
    async def test_invalidate_bumps_version(self):
        await self.repository.save(_snapshot(), expected_version=None)

        await self.repository.invalidate("user123")

        stored = await self.repository.get("user123")
        assert stored.invalidated is True
        assert stored.version == 2
        with pytest.raises(SnapshotConflictError):
            await self.repository.save(_snapshot(), expected_version=1)

    @pytest.mark.asyncio
    async def test_invalidate_and_delete_missing_are_no_ops(self):
        await self.repository.invalidate("ghost")
        await self.repository.delete("ghost")

        assert await self.repository.get("ghost") is None


class TestInMemoryProfileRepository:
    @pytest.mark.asyncio
    async def test_returns_copies(self, gain_profile):
        repository = InMemoryProfileRepository()
        await repository.save(gain_profile)

        loaded = await repository.find_by_user_id("user123")
        loaded.update_protein_preference("high")

        reloaded = await repository.find_by_user_id("user123")
        assert reloaded.protein_preference.value == "moderate"


class TestInMemoryBodyStatsRepository:
    @pytest.mark.asyncio
    async def test_records_are_append_only(self):
        repository = InMemoryBodyStatsRepository()
        record = BodyStatsRecord(user_id="user123", date=date(2026, 3, 15), weight_kg=75.0)
        await repository.append(record)

        with pytest.raises(DuplicateRecordError):
            await repository.append(record)

        assert repository.count() == 1

    @pytest.mark.asyncio
    async def test_date_range_is_inclusive_and_per_user(self, weigh_ins):
        repository = InMemoryBodyStatsRepository()
        for record in weigh_ins([75.0, 75.1, 75.2, 75.3], end=date(2026, 3, 15)):
            await repository.append(record)
        await repository.append(
            BodyStatsRecord(user_id="other", date=date(2026, 3, 14), weight_kg=60.0)
        )

        found = await repository.find_by_date_range(
            "user123", date(2026, 3, 13), date(2026, 3, 14)
        )

        assert [r.weight_kg for r in found] == [75.1, 75.2]


def _adaptation(created_at: datetime) -> AdaptationRecord:
    return AdaptationRecord(
        user_id="user123",
        trigger="weight_stagnation",
        calorie_adjustment=125,
        macro_adjustments=MacroAdjustments(carbs=20),
        workout_adjustments=WorkoutAdjustments(),
        reasoning="Weight has remained stable.",
        effective_date=created_at.date(),
        created_at=created_at,
    )


class TestInMemoryAdaptationRepository:
    @pytest.mark.asyncio
    async def test_mark_applied_flips_once(self):
        repository = InMemoryAdaptationRepository()
        adaptation = _adaptation(datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc))
        await repository.save(adaptation)
        applied_at = datetime(2026, 3, 16, 9, 0, tzinfo=timezone.utc)

        first = await repository.mark_applied(adaptation.adaptation_id, applied_at)
        second = await repository.mark_applied(adaptation.adaptation_id, applied_at)

        assert (first, second) == (True, False)
        stored = await repository.get(adaptation.adaptation_id)
        assert stored.applied is True
        assert stored.applied_at == applied_at
        assert await repository.mark_applied("missing", applied_at) is False

    @pytest.mark.asyncio
    async def test_find_latest_includes_pending(self):
        repository = InMemoryAdaptationRepository()
        older = _adaptation(datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc))
        newer = _adaptation(datetime(2026, 3, 8, 8, 0, tzinfo=timezone.utc))
        await repository.save(newer)
        await repository.save(older)
        await repository.mark_applied(older.adaptation_id, datetime(2026, 3, 2, tzinfo=timezone.utc))

        latest = await repository.find_latest("user123")
        latest_applied = await repository.find_latest_applied("user123")

        assert latest.adaptation_id == newer.adaptation_id
        assert latest_applied.adaptation_id == older.adaptation_id
        assert await repository.find_latest("other") is None
