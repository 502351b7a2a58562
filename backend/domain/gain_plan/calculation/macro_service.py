"""MacroAllocator - macronutrient distribution for a weight-gain target."""

from datetime import datetime
from typing import Any, Optional

import structlog

from ..core.clock import utc_now
from ..core.ports.calculators import IMacroCalculator
from ..core.rounding import round_half_up, round_to
from ..core.value_objects.activity_level import ActivityLevel
from ..core.value_objects.guards import parse_enum, require_positive
from ..core.value_objects.macro_targets import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    MacroAdjustmentAudit,
    MacroAdjustmentResult,
    MacroAllocation,
    MacroRangeCheck,
    MacroShare,
)
from ..core.value_objects.profile_enums import ProteinPreference
from ..core.value_objects.trend import TrendClassification

logger = structlog.get_logger(__name__)

MAX_TOTAL_CALORIES = 10000
MAX_BODY_WEIGHT_KG = 500

# Accepted calorie share per macro (fraction of total)
PROTEIN_SHARE_RANGE = (0.25, 0.30)
CARBS_SHARE_RANGE = (0.45, 0.55)
FAT_SHARE_RANGE = (0.20, 0.30)
FAT_SHARE = 0.25

_TREND_CALORIE_DELTAS = {
    TrendClassification.STAGNANT: (150, "Increased calories due to weight stagnation"),
    TrendClassification.RAPID_GAIN: (-100, "Decreased calories due to rapid weight gain"),
}


def _within(share: float, bounds: tuple) -> bool:
    # Tolerance for float noise at the band edges.
    return bounds[0] - 1e-9 <= share <= bounds[1] + 1e-9


class MacroAllocator(IMacroCalculator):
    """Split a calorie target into protein, carbohydrates and fat.

    Strategy:
        - Protein: g/kg baseline per activity level (1.6 sedentary up to
          2.4 extreme), scaled by preference (0.9 / 1.0 / 1.1), then
          clamped to 25-30% of calories
        - Fat: 25% of calories
        - Carbohydrates: remaining calories (45-50%)

    Calorie conversion:
        - Protein: 4 kcal/g
        - Carbohydrates: 4 kcal/g
        - Fat: 9 kcal/g
    """

    def allocate(
        self,
        total_calories: int,
        body_weight_kg: float,
        activity_level: Any,
        protein_preference: Any = ProteinPreference.MODERATE,
    ) -> MacroAllocation:
        """Allocate macros for a daily calorie target.

        Raises:
            ValidationError: On non-positive calories or weight, values above
                the sanity ceilings, or unknown enum values

        Example:
            >>> allocation = MacroAllocator().allocate(2500, 70, "moderate")
            >>> allocation.protein.grams, allocation.carbs.grams, allocation.fat.grams
            (156.3, 312.5, 69.4)
        """
        require_positive("total_calories", total_calories, MAX_TOTAL_CALORIES)
        require_positive("body_weight_kg", body_weight_kg, MAX_BODY_WEIGHT_KG)
        level = parse_enum(ActivityLevel, activity_level, "activity_level")
        preference = parse_enum(ProteinPreference, protein_preference, "protein_preference")

        protein_per_kg = round_to(level.protein_per_kg() * preference.factor(), 2)
        protein_share = body_weight_kg * protein_per_kg * PROTEIN_KCAL_PER_G / total_calories
        protein_share = min(max(protein_share, PROTEIN_SHARE_RANGE[0]), PROTEIN_SHARE_RANGE[1])

        protein_calories = total_calories * protein_share
        fat_calories = total_calories * FAT_SHARE
        carbs_calories = total_calories - protein_calories - fat_calories

        protein = self._share(protein_calories / PROTEIN_KCAL_PER_G, PROTEIN_KCAL_PER_G, total_calories)
        carbs = self._share(carbs_calories / CARBS_KCAL_PER_G, CARBS_KCAL_PER_G, total_calories)
        fat = self._share(fat_calories / FAT_KCAL_PER_G, FAT_KCAL_PER_G, total_calories)

        allocation = MacroAllocation(
            total_calories=total_calories,
            body_weight_kg=body_weight_kg,
            activity_level=level,
            protein_preference=preference,
            protein_per_kg=protein_per_kg,
            protein=protein,
            carbs=carbs,
            fat=fat,
            within_ranges=MacroRangeCheck(
                protein=_within(protein_share, PROTEIN_SHARE_RANGE),
                carbs=_within(carbs_calories / total_calories, CARBS_SHARE_RANGE),
                fat=_within(FAT_SHARE, FAT_SHARE_RANGE),
            ),
        )
        logger.debug(
            "macros_allocated",
            total_calories=total_calories,
            body_weight_kg=body_weight_kg,
            activity_level=level.value,
            protein_g=protein.grams,
            carbs_g=carbs.grams,
            fat_g=fat.grams,
            calorie_difference=allocation.calorie_difference,
        )
        return allocation

    def adjust_for_trend(
        self,
        current: MacroAllocation,
        trend: Any,
        now: Optional[datetime] = None,
        body_weight_kg: Optional[float] = None,
    ) -> MacroAdjustmentResult:
        """Re-derive macros after a trend-driven calorie change.

        Stagnation adds 150 kcal, rapid gain removes 100 kcal, anything
        else leaves the total unchanged.
        """
        classification = parse_enum(TrendClassification, trend, "trend")
        delta, reason = _TREND_CALORIE_DELTAS.get(classification, (0, "No adjustment needed"))
        adjusted_calories = current.total_calories + delta

        allocation = self.allocate(
            adjusted_calories,
            body_weight_kg if body_weight_kg is not None else current.body_weight_kg,
            current.activity_level,
            current.protein_preference,
        )
        audit = MacroAdjustmentAudit(
            original_calories=current.total_calories,
            adjusted_calories=adjusted_calories,
            delta=delta,
            reason=reason,
            timestamp=now or utc_now(),
        )
        logger.info(
            "macros_adjusted_for_trend",
            trend=classification.value,
            original_calories=current.total_calories,
            adjusted_calories=adjusted_calories,
        )
        return MacroAdjustmentResult(allocation=allocation, audit=audit)

    @staticmethod
    def _share(grams: float, kcal_per_gram: int, total_calories: int) -> MacroShare:
        grams = round_to(grams, 1)
        return MacroShare(
            grams=grams,
            calories=round_half_up(grams * kcal_per_gram),
            percentage=round_to(grams * kcal_per_gram / total_calories * 100, 1),
        )
