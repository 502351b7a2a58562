"""Unit tests for AnalyzeAndAdaptHandler and ApplyAdaptationHandler."""

from datetime import date, datetime, timedelta, timezone

import pytest

from application.gain_plan.commands.analyze_and_adapt import (
    AnalyzeAndAdaptCommand,
    AnalyzeAndAdaptHandler,
)
from application.gain_plan.commands.apply_adaptation import (
    ApplyAdaptationCommand,
    ApplyAdaptationHandler,
    ApplyPendingAdaptationsCommand,
)
from application.gain_plan.orchestrators.calculation_pipeline import CalculationPipeline
from application.gain_plan.orchestrators.recalculation_orchestrator import (
    RecalculationOrchestrator,
)
from domain.gain_plan.adaptive.adjustment_engine import AdjustmentEngine
from domain.gain_plan.core.exceptions.domain_errors import (
    AdaptationNotFoundError,
    ProfileNotFoundError,
    ValidationError,
)
from domain.gain_plan.core.value_objects.trend import AdaptationTrigger
from infrastructure.persistence.in_memory import (
    InMemoryAdaptationRepository,
    InMemoryBodyStatsRepository,
    InMemoryProfileRepository,
    InMemorySnapshotRepository,
    InMemoryWorkoutLogRepository,
)

AS_OF = datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc)
STAGNANT_WEIGHTS = [75.0, 75.1, 75.0, 75.05, 75.1, 75.0, 75.1, 75.1]


class GainPlanHarness:
    """Wires the handlers over in-memory repositories."""

    def __init__(self):
        self.profiles = InMemoryProfileRepository()
        self.snapshots = InMemorySnapshotRepository()
        self.body_stats = InMemoryBodyStatsRepository()
        self.workouts = InMemoryWorkoutLogRepository()
        self.adaptations = InMemoryAdaptationRepository()
        self.orchestrator = RecalculationOrchestrator(
            pipeline=CalculationPipeline(),
            profile_repository=self.profiles,
            snapshot_repository=self.snapshots,
            adaptation_repository=self.adaptations,
        )
        self.analyze = AnalyzeAndAdaptHandler(
            engine=AdjustmentEngine(),
            orchestrator=self.orchestrator,
            profile_repository=self.profiles,
            body_stats_repository=self.body_stats,
            workout_repository=self.workouts,
            adaptation_repository=self.adaptations,
        )
        self.apply = ApplyAdaptationHandler(
            orchestrator=self.orchestrator, adaptation_repository=self.adaptations
        )

    async def log_weights(self, records):
        for record in records:
            await self.body_stats.append(record)


@pytest.fixture
def harness():
    return GainPlanHarness()


class TestAnalyzeAndAdapt:
    @pytest.mark.asyncio
    async def test_stagnation_is_persisted_not_applied(self, harness, gain_profile, weigh_ins):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins(STAGNANT_WEIGHTS))

        adaptation = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))

        assert adaptation.trigger is AdaptationTrigger.WEIGHT_STAGNATION
        assert adaptation.calorie_adjustment == 125
        stored = await harness.adaptations.get(adaptation.adaptation_id)
        assert stored.applied is False
        snapshot = await harness.snapshots.get("user123")
        assert snapshot.target_calories == 3232

    @pytest.mark.asyncio
    async def test_overtraining_from_logged_workouts(
        self, harness, gain_profile, weigh_ins, workouts
    ):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins([75.0 + 0.05 * i for i in range(15)]))
        for record in workouts(["high"] * 4):
            await harness.workouts.append(record)

        adaptation = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))

        assert adaptation.trigger is AdaptationTrigger.OVERTRAINING
        assert adaptation.workout_adjustments.rest_days_added == 2

    @pytest.mark.asyncio
    async def test_no_history_produces_nothing(self, harness, gain_profile):
        await harness.profiles.save(gain_profile)

        assert await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF)) is None
        assert harness.adaptations.count() == 0

    @pytest.mark.asyncio
    async def test_missing_profile(self, harness):
        with pytest.raises(ProfileNotFoundError):
            await harness.analyze.handle(AnalyzeAndAdaptCommand("ghost", as_of=AS_OF))

    @pytest.mark.asyncio
    async def test_repeat_after_applied_stagnation_is_plateau(
        self, harness, gain_profile, weigh_ins
    ):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins(STAGNANT_WEIGHTS))
        first = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))
        await harness.apply.handle(ApplyAdaptationCommand(first.adaptation_id))
        a_week_later = AS_OF + timedelta(days=7)
        await harness.log_weights(weigh_ins([75.1] * 8, end=a_week_later.date()))

        second = await harness.analyze.handle(
            AnalyzeAndAdaptCommand("user123", as_of=a_week_later)
        )

        assert second.trigger is AdaptationTrigger.PLATEAU


class TestWeeklyAnalysisGate:
    @pytest.mark.asyncio
    async def test_repeat_within_a_week_returns_the_pending_adaptation(
        self, harness, gain_profile, weigh_ins
    ):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins(STAGNANT_WEIGHTS))

        first = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))
        again = await harness.analyze.handle(
            AnalyzeAndAdaptCommand("user123", as_of=AS_OF + timedelta(days=6))
        )

        assert again.adaptation_id == first.adaptation_id
        assert harness.adaptations.count() == 1

    @pytest.mark.asyncio
    async def test_repeat_after_apply_within_a_week_returns_nothing(
        self, harness, gain_profile, weigh_ins
    ):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins(STAGNANT_WEIGHTS))
        first = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))
        await harness.apply.handle(ApplyAdaptationCommand(first.adaptation_id))

        again = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))

        assert again is None
        assert harness.adaptations.count() == 1

    @pytest.mark.asyncio
    async def test_repeated_analysis_stays_within_one_adjustment(
        self, harness, gain_profile, weigh_ins
    ):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins([75.0 + 0.01 * (i % 2) for i in range(15)]))
        baseline = await harness.orchestrator.get_snapshot("user123")

        for _ in range(3):
            await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))
        applied = await harness.apply.handle_pending(
            ApplyPendingAdaptationsCommand("user123", as_of=date(2026, 3, 16))
        )
        snapshot = await harness.snapshots.get("user123")

        assert len(applied) == 1
        assert snapshot.adaptation_offset == 125
        assert snapshot.target_calories - baseline.target_calories <= 150


class TestApplyAdaptation:
    @pytest.mark.asyncio
    async def test_apply_by_id(self, harness, gain_profile, weigh_ins):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins(STAGNANT_WEIGHTS))
        adaptation = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))

        result = await harness.apply.handle(ApplyAdaptationCommand(adaptation.adaptation_id))

        assert result.adaptation.applied is True
        assert result.snapshot.target_calories == 3357
        assert result.snapshot.macro_targets.carbs_g == 424.0

    @pytest.mark.asyncio
    async def test_unknown_id(self, harness):
        with pytest.raises(AdaptationNotFoundError):
            await harness.apply.handle(ApplyAdaptationCommand("missing"))

    @pytest.mark.asyncio
    async def test_second_apply_is_rejected(self, harness, gain_profile, weigh_ins):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins(STAGNANT_WEIGHTS))
        adaptation = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))
        await harness.apply.handle(ApplyAdaptationCommand(adaptation.adaptation_id))

        with pytest.raises(ValidationError):
            await harness.apply.handle(ApplyAdaptationCommand(adaptation.adaptation_id))

        snapshot = await harness.snapshots.get("user123")
        assert snapshot.target_calories == 3357

    @pytest.mark.asyncio
    async def test_apply_pending(self, harness, gain_profile, weigh_ins):
        await harness.profiles.save(gain_profile)
        await harness.log_weights(weigh_ins(STAGNANT_WEIGHTS))
        adaptation = await harness.analyze.handle(AnalyzeAndAdaptCommand("user123", as_of=AS_OF))

        not_yet = await harness.apply.handle_pending(
            ApplyPendingAdaptationsCommand("user123", as_of=date(2026, 3, 15))
        )
        applied = await harness.apply.handle_pending(
            ApplyPendingAdaptationsCommand("user123", as_of=date(2026, 3, 16))
        )

        assert not_yet == []
        assert [a.adaptation_id for a in applied] == [adaptation.adaptation_id]
