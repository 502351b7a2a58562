"""Unit tests for LogBodyStatsHandler and LogWorkoutHandler."""

from datetime import date

import pytest

from application.gain_plan.commands.log_body_stats import LogBodyStatsCommand, LogBodyStatsHandler
from application.gain_plan.commands.log_workout import LogWorkoutCommand, LogWorkoutHandler
from domain.gain_plan.core.entities.body_stats_record import BodyMeasurements
from domain.gain_plan.core.entities.workout_log_record import ExerciseEntry, SetEntry
from domain.gain_plan.core.exceptions.domain_errors import OutOfRangeError, ValidationError
from domain.gain_plan.core.value_objects.trend import WorkoutIntensity
from infrastructure.persistence.in_memory import (
    InMemoryBodyStatsRepository,
    InMemoryWorkoutLogRepository,
)


class TestLogBodyStats:
    def setup_method(self):
        self.repository = InMemoryBodyStatsRepository()
        self.handler = LogBodyStatsHandler(self.repository)

    @pytest.mark.asyncio
    async def test_appends_record(self):
        record = await self.handler.handle(
            LogBodyStatsCommand(
                user_id="user123",
                date=date(2026, 3, 15),
                weight_kg=75.4,
                body_fat_pct=15.0,
                measurements=BodyMeasurements(chest_cm=100.0, waist_cm=80.0),
                notes="morning, fasted",
            )
        )

        stored = await self.repository.find_by_date_range(
            "user123", date(2026, 3, 1), date(2026, 3, 31)
        )
        assert stored == [record]
        assert record.measurements.waist_cm == 80.0

    @pytest.mark.asyncio
    async def test_latest_follows_date_order(self):
        for day, weight in [(14, 75.2), (15, 75.4), (13, 75.0)]:
            await self.handler.handle(
                LogBodyStatsCommand(user_id="user123", date=date(2026, 3, day), weight_kg=weight)
            )

        latest = await self.repository.find_latest("user123")

        assert latest.weight_kg == 75.4

    @pytest.mark.asyncio
    async def test_out_of_range_weight_is_not_stored(self):
        with pytest.raises(OutOfRangeError) as exc_info:
            await self.handler.handle(
                LogBodyStatsCommand(user_id="user123", date=date(2026, 3, 15), weight_kg=20.0)
            )

        assert exc_info.value.field == "weight_kg"
        assert self.repository.count() == 0

    @pytest.mark.asyncio
    async def test_long_notes_rejected(self):
        with pytest.raises(ValidationError):
            await self.handler.handle(
                LogBodyStatsCommand(
                    user_id="user123", date=date(2026, 3, 15), weight_kg=75.0, notes="x" * 501
                )
            )


class TestLogWorkout:
    def setup_method(self):
        self.repository = InMemoryWorkoutLogRepository()
        self.handler = LogWorkoutHandler(self.repository)

    @pytest.mark.asyncio
    async def test_volume_is_derived_from_sets(self):
        record = await self.handler.handle(
            LogWorkoutCommand(
                user_id="user123",
                date=date(2026, 3, 15),
                duration_min=75,
                intensity="high",
                exercises=(
                    ExerciseEntry("Squat", (SetEntry(5, 100.0), SetEntry(5, 100.0))),
                    ExerciseEntry("Pull-up", (SetEntry(10),)),
                ),
            )
        )

        assert record.intensity is WorkoutIntensity.HIGH
        assert record.total_volume == 1000.0
        assert self.repository.count() == 1

    @pytest.mark.asyncio
    async def test_explicit_volume_wins(self):
        record = await self.handler.handle(
            LogWorkoutCommand(
                user_id="user123",
                date=date(2026, 3, 15),
                duration_min=45,
                intensity=WorkoutIntensity.MODERATE,
                total_volume=2500.0,
            )
        )

        assert record.total_volume == 2500.0

    @pytest.mark.asyncio
    async def test_invalid_intensity(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.handler.handle(
                LogWorkoutCommand(
                    user_id="user123", date=date(2026, 3, 15), duration_min=45, intensity="extreme"
                )
            )

        assert exc_info.value.field == "intensity"
        assert self.repository.count() == 0
