"""Unit tests for AdjustmentEngine."""

from datetime import date, datetime, timedelta, timezone

import pytest

from domain.gain_plan.adaptive.adjustment_engine import AdjustmentEngine
from domain.gain_plan.adaptive.trend_analyzer import TrendAnalyzer
from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.value_objects.adjustments import (
    IntensityChange,
    MacroAdjustments,
    WorkoutAdjustments,
)
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot
from domain.gain_plan.core.value_objects.goal import Goal
from domain.gain_plan.core.value_objects.macro_targets import MacroTargets
from domain.gain_plan.core.value_objects.trend import AdaptationTrigger

AS_OF = datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc)
STAGNANT_WEIGHTS = [75.0, 75.1, 75.0, 75.05, 75.1, 75.0, 75.1, 75.1]
RAPID_WEIGHTS = [75.0 + 0.2 * i for i in range(8)]
STEADY_WEIGHTS = [75.0 + 0.05 * i for i in range(15)]


@pytest.fixture
def engine() -> AdjustmentEngine:
    return AdjustmentEngine()


@pytest.fixture
def snapshot() -> CalculationSnapshot:
    return CalculationSnapshot(
        user_id="user123",
        bmr=1730,
        tdee=2682,
        surplus=550,
        target_calories=3232,
        macro_targets=MacroTargets(protein_g=202.0, carbs_g=404.0, fat_g=89.8),
        last_calculated=AS_OF,
    )


def _goal(intensity: str) -> Goal:
    return Goal(target_weight_kg=80.0, goal_intensity=intensity)


def _previous(trigger: str, applied: bool) -> AdaptationRecord:
    created = AS_OF - timedelta(days=7)
    record = AdaptationRecord(
        user_id="user123",
        trigger=trigger,
        calorie_adjustment=125,
        macro_adjustments=MacroAdjustments(carbs=20),
        workout_adjustments=WorkoutAdjustments(),
        reasoning="Earlier adjustment.",
        effective_date=created.date() + timedelta(days=1),
        created_at=created,
    )
    if applied:
        record.mark_applied(created + timedelta(days=1))
    return record


class TestStagnation:
    def test_moderate_goal_adds_125_and_five_percent_carbs(
        self, engine, snapshot, goal, weigh_ins
    ):
        adaptation = engine.analyze_and_adapt(
            "user123", weigh_ins(STAGNANT_WEIGHTS), [], snapshot, goal, AS_OF
        )

        assert adaptation is not None
        assert adaptation.trigger is AdaptationTrigger.WEIGHT_STAGNATION
        assert adaptation.calorie_adjustment == 125
        assert adaptation.macro_adjustments == MacroAdjustments(protein=0, carbs=20, fat=0)
        assert adaptation.workout_adjustments == WorkoutAdjustments()
        assert adaptation.applied is False
        assert adaptation.effective_date == date(2026, 3, 16)
        assert adaptation.created_at == AS_OF
        assert "remained stable" in adaptation.reasoning

    @pytest.mark.parametrize(
        "intensity,expected", [("conservative", 100), ("moderate", 125), ("aggressive", 150)]
    )
    def test_boost_scales_with_intensity(
        self, engine, snapshot, weigh_ins, intensity, expected
    ):
        adaptation = engine.analyze_and_adapt(
            "user123", weigh_ins(STAGNANT_WEIGHTS), [], snapshot, _goal(intensity), AS_OF
        )

        assert adaptation.calorie_adjustment == expected

    def test_repeat_stagnation_is_a_plateau(self, engine, snapshot, goal, weigh_ins):
        adaptation = engine.analyze_and_adapt(
            "user123",
            weigh_ins(STAGNANT_WEIGHTS),
            [],
            snapshot,
            goal,
            AS_OF,
            previous_adaptations=[_previous("weight_stagnation", applied=True)],
        )

        assert adaptation.trigger is AdaptationTrigger.PLATEAU

    def test_unapplied_previous_stagnation_is_ignored(self, engine, snapshot, goal, weigh_ins):
        adaptation = engine.analyze_and_adapt(
            "user123",
            weigh_ins(STAGNANT_WEIGHTS),
            [],
            snapshot,
            goal,
            AS_OF,
            previous_adaptations=[_previous("weight_stagnation", applied=False)],
        )

        assert adaptation.trigger is AdaptationTrigger.WEIGHT_STAGNATION


class TestRapidGain:
    def test_moderate_goal_cuts_125_and_five_percent_carbs(
        self, engine, snapshot, goal, weigh_ins
    ):
        adaptation = engine.analyze_and_adapt(
            "user123", weigh_ins(RAPID_WEIGHTS), [], snapshot, goal, AS_OF
        )

        assert adaptation.trigger is AdaptationTrigger.RAPID_GAIN
        assert adaptation.calorie_adjustment == -125
        assert adaptation.macro_adjustments.carbs == -20

    @pytest.mark.parametrize(
        "intensity,expected",
        [("conservative", -150), ("moderate", -125), ("aggressive", -100)],
    )
    def test_cut_is_asymmetric_to_boost(self, engine, snapshot, weigh_ins, intensity, expected):
        adaptation = engine.analyze_and_adapt(
            "user123", weigh_ins(RAPID_WEIGHTS), [], snapshot, _goal(intensity), AS_OF
        )

        assert adaptation.calorie_adjustment == expected


class TestOvertraining:
    def test_high_risk_adds_two_rest_days(self, engine, snapshot, goal, weigh_ins, workouts):
        adaptation = engine.analyze_and_adapt(
            "user123", weigh_ins(STEADY_WEIGHTS), workouts(["high"] * 4), snapshot, goal, AS_OF
        )

        assert adaptation.trigger is AdaptationTrigger.OVERTRAINING
        assert adaptation.calorie_adjustment == 0
        assert adaptation.macro_adjustments.is_zero()
        assert adaptation.workout_adjustments == WorkoutAdjustments(
            volume_change_pct=-20,
            intensity_change=IntensityChange.DECREASE,
            rest_days_added=2,
        )

    def test_moderate_risk_adds_one_rest_day(self, engine, snapshot, goal, weigh_ins, workouts):
        adaptation = engine.analyze_and_adapt(
            "user123",
            weigh_ins(STEADY_WEIGHTS),
            workouts(["high", "high", "high", "low"]),
            snapshot,
            goal,
            AS_OF,
        )

        assert adaptation.workout_adjustments.rest_days_added == 1

    def test_combined_with_stagnation(self, engine, snapshot, goal, weigh_ins, workouts):
        adaptation = engine.analyze_and_adapt(
            "user123",
            weigh_ins(STAGNANT_WEIGHTS),
            workouts(["high"] * 4),
            snapshot,
            goal,
            AS_OF,
        )

        assert adaptation.trigger is AdaptationTrigger.WEIGHT_STAGNATION
        assert adaptation.calorie_adjustment == 125
        assert adaptation.workout_adjustments.volume_change_pct == -20
        assert "Overtraining indicators detected" in adaptation.reasoning


class TestNoAdaptation:
    def test_normal_trend_returns_none(self, engine, snapshot, goal, weigh_ins):
        assert (
            engine.analyze_and_adapt(
                "user123", weigh_ins(STEADY_WEIGHTS), [], snapshot, goal, AS_OF
            )
            is None
        )

    def test_no_history_returns_none(self, engine, snapshot, goal):
        assert engine.analyze_and_adapt("user123", [], [], snapshot, goal, AS_OF) is None

    def test_date_as_of_is_accepted(self, engine, snapshot, goal, weigh_ins):
        adaptation = engine.analyze_and_adapt(
            "user123", weigh_ins(STAGNANT_WEIGHTS), [], snapshot, goal, AS_OF.date()
        )

        assert adaptation.effective_date == date(2026, 3, 16)


def test_summary_for_normal_progress(engine):
    analyzer = TrendAnalyzer()
    summary = engine.generate_summary(
        analyzer.analyze_weight_trend([], AS_OF.date()),
        analyzer.analyze_overtraining([], AS_OF.date()),
        0,
    )

    assert summary == "Progress is on track. Continue with current plan."
