"""EnergyPlanner - TDEE, weight-gain surplus and calorie plan safety."""

from typing import Any, List, Optional

import structlog

from ..core.ports.calculators import ITDEECalculator
from ..core.rounding import round_half_up, round_to
from ..core.value_objects.activity_level import ActivityLevel
from ..core.value_objects.biometric_profile import BodyMetrics
from ..core.value_objects.calorie_plan import (
    CaloriePlan,
    EnergyBreakdown,
    SafetyReport,
    SafetyWarning,
)
from ..core.value_objects.goal import DEFAULT_INTENSITY, WEEKLY_GAIN_RANGE_KG
from ..core.value_objects.goal_intensity import GoalIntensity
from ..core.value_objects.guards import parse_enum, require_range
from .bmr_service import BMRService

logger = structlog.get_logger(__name__)

KCAL_PER_KG = 7700
SURPLUS_FLOOR = 250
SURPLUS_CEILING = 750
BMR_RANGE = (500, 5000)

# Safety thresholds
MAX_TARGET_BMR_RATIO = 4
EXCESS_SURPLUS = 1000
NEGLIGIBLE_SURPLUS = 200


class EnergyPlanner(ITDEECalculator):
    """Derive TDEE, size the daily surplus and check plan safety.

    TDEE = BMR × activity multiplier (sedentary 1.2 ... extreme 1.9).
    Surplus = weekly gain × 7700 / 7, or the midpoint of the goal
    intensity band, always clamped to [250, 750] kcal/day.
    """

    def __init__(self, bmr_service: Optional[BMRService] = None):
        self._bmr_service = bmr_service or BMRService()

    def calculate_tdee(self, bmr: int, activity_level: Any) -> int:
        """Calculate TDEE from BMR and activity level.

        Raises:
            OutOfRangeError: If bmr is outside [500, 5000]
            InvalidEnumError: If the activity level is unknown

        Example:
            >>> EnergyPlanner().calculate_tdee(1800, "moderate")
            2790
        """
        require_range("bmr", bmr, *BMR_RANGE)
        level = parse_enum(ActivityLevel, activity_level, "activity_level")
        tdee = round_half_up(bmr * level.pal_multiplier())
        logger.debug("tdee_calculated", bmr=bmr, activity_level=level.value, tdee=tdee)
        return tdee

    def calculate_surplus(
        self,
        weekly_gain_kg: Optional[float] = None,
        goal_intensity: Any = None,
    ) -> int:
        """Size the daily calorie surplus.

        ``weekly_gain_kg`` wins when given; otherwise the midpoint of the
        intensity band is used (moderate when no intensity is given). The
        result is clamped to [250, 750]; clamping is a safety rail, not
        an error.

        Raises:
            OutOfRangeError: If weekly_gain_kg is outside [0.1, 2.0]
            InvalidEnumError: If the goal intensity is unknown
        """
        if weekly_gain_kg is not None:
            require_range("weekly_gain_kg", weekly_gain_kg, *WEEKLY_GAIN_RANGE_KG)
            raw = round_half_up(weekly_gain_kg * KCAL_PER_KG / 7)
            source = "weekly_gain"
        else:
            intensity = (
                parse_enum(GoalIntensity, goal_intensity, "goal_intensity")
                if goal_intensity is not None
                else DEFAULT_INTENSITY
            )
            raw = round_half_up(intensity.surplus_midpoint())
            source = f"intensity:{intensity.value}"

        surplus = min(max(raw, SURPLUS_FLOOR), SURPLUS_CEILING)
        logger.debug("surplus_calculated", source=source, raw=raw, surplus=surplus)
        return surplus

    def calculate_total_target(self, tdee: int, surplus: int) -> int:
        return round_half_up(tdee + surplus)

    def validate_calorie_plan(
        self,
        total_calories: int,
        bmr: int,
        surplus: Optional[int] = None,
    ) -> SafetyReport:
        """Check a calorie plan against safety bounds.

        Findings are informational: they are returned as warnings and
        never abort the calculation. ``surplus`` defaults to
        ``total_calories - bmr`` when the planned surplus is not known.
        """
        if surplus is None:
            surplus = total_calories - bmr

        warnings: List[SafetyWarning] = []
        safe = True

        if total_calories < bmr:
            warnings.append(
                SafetyWarning("below_bmr", "Calorie target is below BMR - weight loss expected")
            )
            safe = False
        if total_calories > bmr * MAX_TARGET_BMR_RATIO:
            warnings.append(
                SafetyWarning(
                    "above_4x_bmr",
                    "Calorie target is very high - excessive fat gain likely",
                )
            )
            safe = False
        if surplus > EXCESS_SURPLUS:
            warnings.append(
                SafetyWarning(
                    "surplus_excess",
                    "Daily surplus exceeds 1000 kcal - higher fat gain risk",
                )
            )
            safe = False
        if surplus < NEGLIGIBLE_SURPLUS:
            warnings.append(
                SafetyWarning(
                    "surplus_negligible",
                    "Daily surplus is less than 200 kcal - minimal weight gain expected",
                )
            )

        if warnings:
            logger.info(
                "calorie_plan_warnings",
                total_calories=total_calories,
                bmr=bmr,
                surplus=surplus,
                codes=[w.code for w in warnings],
            )
        return SafetyReport(
            safe=safe,
            warnings=tuple(warnings),
            surplus=surplus,
            recommendation="Plan is safe and reasonable" if safe else "Review plan carefully",
        )

    def complete_plan(
        self,
        metrics: BodyMetrics,
        activity_level: Any,
        weekly_gain_kg: Optional[float] = None,
        goal_intensity: Any = None,
    ) -> CaloriePlan:
        """Run BMR -> TDEE -> surplus -> total -> safety in one go.

        Example:
            >>> plan = EnergyPlanner().complete_plan(
            ...     BodyMetrics(30, "male", 180, 75), "moderate", weekly_gain_kg=0.5
            ... )
            >>> plan.bmr, plan.tdee, plan.surplus, plan.total_calories
            (1730, 2682, 550, 3232)
        """
        level = parse_enum(ActivityLevel, activity_level, "activity_level")
        bmr = self._bmr_service.calculate(metrics)
        tdee = self.calculate_tdee(bmr, level)
        surplus = self.calculate_surplus(weekly_gain_kg, goal_intensity)
        total = self.calculate_total_target(tdee, surplus)
        safety = self.validate_calorie_plan(total, bmr, surplus)

        return CaloriePlan(
            bmr=bmr,
            tdee=tdee,
            activity_multiplier=level.pal_multiplier(),
            surplus=surplus,
            implied_weekly_gain_kg=round_to(surplus * 7 / KCAL_PER_KG, 2),
            total_calories=total,
            breakdown=EnergyBreakdown(maintenance=tdee, surplus=surplus, total=total),
            safety=safety,
        )
