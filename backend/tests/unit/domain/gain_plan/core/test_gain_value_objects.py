"""Unit tests for gain plan value objects."""

from datetime import datetime, timezone

import pytest

from domain.gain_plan.core.exceptions.domain_errors import (
    InvalidEnumError,
    OutOfRangeError,
    ValidationError,
)
from domain.gain_plan.core.rounding import round_half_up, round_to
from domain.gain_plan.core.value_objects.activity_level import ActivityLevel
from domain.gain_plan.core.value_objects.adjustments import (
    IntensityChange,
    MacroAdjustments,
    WorkoutAdjustments,
)
from domain.gain_plan.core.value_objects.biometric_profile import BiometricProfile
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot
from domain.gain_plan.core.value_objects.calorie_plan import SafetyWarning
from domain.gain_plan.core.value_objects.goal import Goal
from domain.gain_plan.core.value_objects.goal_intensity import GoalIntensity
from domain.gain_plan.core.value_objects.macro_targets import MacroTargets


class TestRounding:
    def test_half_up_differs_from_builtin(self):
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3
        assert round_half_up(1370.5) == 1371

    def test_round_to_decimals(self):
        assert round_to(12.25, 1) == 12.3
        assert round_to(0.125, 2) == 0.13


class TestActivityLevel:
    def test_multipliers(self):
        assert ActivityLevel.SEDENTARY.pal_multiplier() == 1.2
        assert ActivityLevel.LIGHT.pal_multiplier() == 1.375
        assert ActivityLevel.MODERATE.pal_multiplier() == 1.55
        assert ActivityLevel.VERY.pal_multiplier() == 1.725
        assert ActivityLevel.EXTREME.pal_multiplier() == 1.9

    def test_has_description(self):
        for level in ActivityLevel:
            assert level.description()


class TestBiometricProfile:
    def test_strings_are_parsed_into_enums(self, biometrics: BiometricProfile):
        assert biometrics.activity_level is ActivityLevel.MODERATE
        assert biometrics.biological_sex.value == "male"
        assert biometrics.fitness_level.value == "beginner"

    def test_tags_are_normalised(self):
        profile = BiometricProfile(
            age=22,
            biological_sex="female",
            height_cm=165,
            current_weight_kg=50,
            activity_level="light",
            dietary_tags=[" Vegetarian ", "vegetarian"],
        )

        assert profile.dietary_tags == frozenset({"vegetarian"})

    def test_with_updates_reports_changed_fields(self, biometrics: BiometricProfile):
        updated, changed = biometrics.with_updates(current_weight_kg=76.0, age=30)

        assert updated.current_weight_kg == 76.0
        assert changed == frozenset({"current_weight_kg"})
        assert biometrics.current_weight_kg == 75.0

    def test_with_updates_rejects_unknown_field(self, biometrics: BiometricProfile):
        with pytest.raises(ValidationError) as exc_info:
            biometrics.with_updates(shoe_size=44)

        assert exc_info.value.field == "shoe_size"

    def test_with_updates_validates_new_values(self, biometrics: BiometricProfile):
        with pytest.raises(OutOfRangeError):
            biometrics.with_updates(current_weight_kg=10)

    def test_requires_recalculation(self, biometrics: BiometricProfile):
        assert biometrics.requires_recalculation({"current_weight_kg"})
        assert biometrics.requires_recalculation({"activity_level"})
        assert not biometrics.requires_recalculation({"fitness_level", "dietary_tags"})

    def test_bmi(self, biometrics: BiometricProfile):
        assert biometrics.bmi() == pytest.approx(23.15, abs=0.01)
        assert biometrics.bmi_category() == "normal"

    def test_round_trip(self, biometrics: BiometricProfile):
        assert BiometricProfile.from_dict(biometrics.to_dict()) == biometrics


class TestGoal:
    def test_target_must_exceed_current_weight(self, biometrics: BiometricProfile):
        with pytest.raises(ValidationError) as exc_info:
            Goal(target_weight_kg=75.0).validate_against(biometrics)

        assert exc_info.value.field == "target_weight_kg"

    def test_weekly_gain_range(self):
        with pytest.raises(OutOfRangeError):
            Goal(target_weight_kg=80, weekly_gain_kg=2.5)

    def test_unknown_intensity(self):
        with pytest.raises(InvalidEnumError):
            Goal(target_weight_kg=80, goal_intensity="turbo")

    def test_surplus_intensity_defaults_to_moderate(self):
        assert Goal(target_weight_kg=80).surplus_intensity is GoalIntensity.MODERATE

    @pytest.mark.parametrize(
        "weekly_gain,expected",
        [
            (0.25, GoalIntensity.CONSERVATIVE),
            (0.3, GoalIntensity.CONSERVATIVE),
            (0.5, GoalIntensity.MODERATE),
            (0.75, GoalIntensity.AGGRESSIVE),
        ],
    )
    def test_effective_intensity_from_weekly_gain(self, weekly_gain, expected):
        assert Goal(target_weight_kg=80, weekly_gain_kg=weekly_gain).effective_intensity is expected

    def test_explicit_intensity_wins(self):
        goal = Goal(target_weight_kg=80, weekly_gain_kg=0.25, goal_intensity="aggressive")

        assert goal.effective_intensity is GoalIntensity.AGGRESSIVE

    def test_round_trip_with_target_date(self):
        goal = Goal.from_dict(
            {"target_weight_kg": 80, "weekly_gain_kg": 0.5, "target_date": "2026-09-01"}
        )

        assert Goal.from_dict(goal.to_dict()) == goal


class TestMacroTargets:
    def test_total_calories(self):
        assert MacroTargets(protein_g=150, carbs_g=300, fat_g=70).total_calories() == 2430.0

    def test_negative_grams_rejected(self):
        with pytest.raises(OutOfRangeError):
            MacroTargets(protein_g=-1, carbs_g=300, fat_g=70)

    def test_with_adjustments_floors_at_zero(self):
        targets = MacroTargets(protein_g=150, carbs_g=10, fat_g=70)

        adjusted = targets.with_adjustments(MacroAdjustments(carbs=-20, fat=5))

        assert adjusted == MacroTargets(protein_g=150, carbs_g=0.0, fat_g=75)


class TestAdjustments:
    def test_macro_adjustments_add(self):
        total = MacroAdjustments(carbs=10) + MacroAdjustments(protein=5, carbs=-3)

        assert total == MacroAdjustments(protein=5, carbs=7, fat=0)
        assert not total.is_zero()
        assert MacroAdjustments().is_zero()

    def test_workout_adjustment_bounds(self):
        with pytest.raises(OutOfRangeError):
            WorkoutAdjustments(volume_change_pct=-60)
        with pytest.raises(OutOfRangeError):
            WorkoutAdjustments(rest_days_added=8)

    def test_workout_adjustment_round_trip(self):
        adjustments = WorkoutAdjustments(-20, "decrease", 2)

        assert adjustments.intensity_change is IntensityChange.DECREASE
        assert WorkoutAdjustments.from_dict(adjustments.to_dict()) == adjustments


class TestCalculationSnapshot:
    def _snapshot(self, **overrides) -> CalculationSnapshot:
        values = dict(
            user_id="user123",
            bmr=1730,
            tdee=2682,
            surplus=550,
            target_calories=3232,
            macro_targets=MacroTargets(protein_g=202.0, carbs_g=404.0, fat_g=89.8),
            last_calculated=datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc),
        )
        values.update(overrides)
        return CalculationSnapshot(**values)

    def test_target_must_equal_tdee_plus_surplus(self):
        with pytest.raises(ValidationError) as exc_info:
            self._snapshot(target_calories=3000)

        assert exc_info.value.field == "target_calories"

    def test_naive_timestamp_becomes_utc(self):
        snapshot = self._snapshot(last_calculated=datetime(2026, 3, 15, 8, 0))

        assert snapshot.last_calculated.tzinfo == timezone.utc

    def test_calorie_adjustment_moves_surplus_target_and_offset(self):
        snapshot = self._snapshot()
        macros = MacroTargets(protein_g=202.0, carbs_g=424.0, fat_g=89.8)

        adjusted = snapshot.with_calorie_adjustment(125, macros)

        assert adjusted.surplus == 675
        assert adjusted.target_calories == 3357
        assert adjusted.adaptation_offset == 125
        assert adjusted.macro_targets == macros
        assert adjusted.last_calculated == snapshot.last_calculated

    def test_round_trip(self):
        snapshot = self._snapshot(
            version=3,
            safety_warnings=(SafetyWarning("surplus_negligible", "small"),),
        )

        assert CalculationSnapshot.from_dict(snapshot.to_dict()) == snapshot
