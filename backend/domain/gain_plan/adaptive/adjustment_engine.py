"""AdjustmentEngine - turns trend classifications into bounded deltas."""

from datetime import datetime, timedelta
from typing import Iterable, Optional

import structlog

from ..core.clock import ensure_utc, start_of_day
from ..core.entities.adaptation_record import (
    CALORIE_ADJUSTMENT_RANGE,
    MAX_REASONING_LENGTH,
    AdaptationRecord,
)
from ..core.entities.body_stats_record import BodyStatsRecord
from ..core.entities.workout_log_record import WorkoutLogRecord
from ..core.rounding import round_half_up
from ..core.value_objects.adjustments import (
    IntensityChange,
    MacroAdjustments,
    WorkoutAdjustments,
)
from ..core.value_objects.calculation_snapshot import CalculationSnapshot
from ..core.value_objects.goal import Goal
from ..core.value_objects.goal_intensity import GoalIntensity
from ..core.value_objects.macro_targets import MacroTargets
from ..core.value_objects.trend import (
    AdaptationTrigger,
    OvertrainingAnalysis,
    RiskLevel,
    TrendClassification,
    WeightTrend,
)
from .trend_analyzer import TrendAnalyzer

logger = structlog.get_logger(__name__)

# Aggressive goals get the biggest boost on stagnation but the smallest
# cut on rapid gain.
STAGNATION_CALORIE_BOOST = {
    GoalIntensity.CONSERVATIVE: 100,
    GoalIntensity.MODERATE: 125,
    GoalIntensity.AGGRESSIVE: 150,
}
RAPID_GAIN_CALORIE_CUT = {
    GoalIntensity.CONSERVATIVE: -150,
    GoalIntensity.MODERATE: -125,
    GoalIntensity.AGGRESSIVE: -100,
}

CARB_ADJUSTMENT_SHARE = 0.05
OVERTRAINING_VOLUME_CHANGE_PCT = -20

_STAGNATION_TRIGGERS = (AdaptationTrigger.WEIGHT_STAGNATION, AdaptationTrigger.PLATEAU)


class AdjustmentEngine:
    """Compute calorie, macro and workout deltas from recent history.

    Each classification contributes its own deltas independently and the
    contributions are summed; the calorie total is clamped to
    [-150, 150].
    """

    def __init__(self, analyzer: Optional[TrendAnalyzer] = None):
        self._analyzer = analyzer or TrendAnalyzer()

    def calorie_adjustment(self, weight_trend: WeightTrend, intensity: GoalIntensity) -> int:
        adjustment = 0
        if weight_trend.is_stagnant:
            adjustment += STAGNATION_CALORIE_BOOST[intensity]
        if weight_trend.is_rapid_gain:
            adjustment += RAPID_GAIN_CALORIE_CUT[intensity]
        return adjustment

    def macro_adjustments(
        self, weight_trend: WeightTrend, current_macros: MacroTargets
    ) -> MacroAdjustments:
        """Carbs move by 5% of the current carb target; protein and fat hold."""
        step = round_half_up(current_macros.carbs_g * CARB_ADJUSTMENT_SHARE)
        carbs = 0
        if weight_trend.is_stagnant:
            carbs += step
        if weight_trend.is_rapid_gain:
            carbs -= step
        return MacroAdjustments(protein=0, carbs=carbs, fat=0)

    def workout_adjustments(self, overtraining: OvertrainingAnalysis) -> WorkoutAdjustments:
        if not overtraining.detected:
            return WorkoutAdjustments()
        return WorkoutAdjustments(
            volume_change_pct=OVERTRAINING_VOLUME_CHANGE_PCT,
            intensity_change=IntensityChange.DECREASE,
            rest_days_added=2 if overtraining.risk_level is RiskLevel.HIGH else 1,
        )

    def generate_summary(
        self,
        weight_trend: WeightTrend,
        overtraining: OvertrainingAnalysis,
        calorie_adjustment: int,
    ) -> str:
        """Render the rationale stored in the adaptation audit trail."""
        parts = []
        if weight_trend.is_stagnant:
            parts.append(
                f"Weight has remained stable at {weight_trend.latest_weight_kg:.1f}kg "
                f"over the past {weight_trend.days_between} days with minimal gain "
                f"({weight_trend.weight_change_kg:.2f}kg)."
            )
            parts.append(f"Increasing daily calories by {calorie_adjustment} to stimulate weight gain.")
        if weight_trend.is_rapid_gain:
            parts.append(
                f"Weight is increasing rapidly at {weight_trend.weekly_rate_kg:.2f}kg per week "
                f"(latest {weight_trend.latest_weight_kg:.1f}kg), which exceeds the "
                f"recommended rate."
            )
            parts.append(
                f"Reducing daily calories by {abs(calorie_adjustment)} to slow down weight "
                f"gain and minimize fat accumulation."
            )
        if overtraining.detected:
            parts.append(
                f"Overtraining indicators detected: {overtraining.total_workouts} workouts "
                f"in 7 days with {overtraining.high_intensity_workouts} high-intensity sessions."
            )
            parts.append(
                f"Recommending {overtraining.risk_level.value} risk mitigation: reduce "
                f"workout volume by 20% and add rest days."
            )
        if not parts:
            parts.append("Progress is on track. Continue with current plan.")
        return " ".join(parts)[:MAX_REASONING_LENGTH]

    def analyze_and_adapt(
        self,
        user_id: str,
        body_stats: Iterable[BodyStatsRecord],
        workouts: Iterable[WorkoutLogRecord],
        current_snapshot: CalculationSnapshot,
        goal: Goal,
        as_of: datetime,
        previous_adaptations: Iterable[AdaptationRecord] = (),
    ) -> Optional[AdaptationRecord]:
        """Inspect history and propose an adaptation.

        Returns:
            Optional[AdaptationRecord]: Unapplied adaptation effective the
                day after ``as_of``, or None when the trend is normal
        """
        if not isinstance(as_of, datetime):
            as_of = start_of_day(as_of)
        as_of = ensure_utc(as_of)
        today = as_of.date()

        weight_trend = self._analyzer.analyze_weight_trend(body_stats, today)
        overtraining = self._analyzer.analyze_overtraining(workouts, today)
        classifications = self._analyzer.classify(weight_trend, overtraining)

        if classifications == (TrendClassification.NORMAL,):
            logger.info("adaptation_not_needed", user_id=user_id, as_of=today.isoformat())
            return None

        intensity = goal.effective_intensity
        low, high = CALORIE_ADJUSTMENT_RANGE
        calories = min(max(self.calorie_adjustment(weight_trend, intensity), low), high)

        adaptation = AdaptationRecord(
            user_id=user_id,
            trigger=self._select_trigger(weight_trend, previous_adaptations),
            calorie_adjustment=calories,
            macro_adjustments=self.macro_adjustments(weight_trend, current_snapshot.macro_targets),
            workout_adjustments=self.workout_adjustments(overtraining),
            reasoning=self.generate_summary(weight_trend, overtraining, calories),
            effective_date=today + timedelta(days=1),
            created_at=as_of,
        )
        logger.info(
            "adaptation_created",
            user_id=user_id,
            trigger=adaptation.trigger.value,
            classifications=[c.value for c in classifications],
            calorie_adjustment=calories,
            carbs_adjustment=adaptation.macro_adjustments.carbs,
            intensity=intensity.value,
        )
        return adaptation

    @staticmethod
    def _select_trigger(
        weight_trend: WeightTrend, previous_adaptations: Iterable[AdaptationRecord]
    ) -> AdaptationTrigger:
        if weight_trend.is_stagnant:
            applied = sorted(
                (a for a in previous_adaptations if a.applied), key=lambda a: a.created_at
            )
            if applied and applied[-1].trigger in _STAGNATION_TRIGGERS:
                return AdaptationTrigger.PLATEAU
            return AdaptationTrigger.WEIGHT_STAGNATION
        if weight_trend.is_rapid_gain:
            return AdaptationTrigger.RAPID_GAIN
        return AdaptationTrigger.OVERTRAINING
