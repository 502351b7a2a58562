"""TrendAnalyzer - classifies weight and training history."""

from datetime import date, timedelta
from typing import Iterable, List, Tuple

import structlog

from ..core.entities.body_stats_record import BodyStatsRecord
from ..core.entities.workout_log_record import WorkoutLogRecord
from ..core.value_objects.trend import (
    OvertrainingAnalysis,
    RiskLevel,
    TrendClassification,
    TrendDirection,
    WeightTrend,
)

logger = structlog.get_logger(__name__)

WEIGHT_WINDOW_DAYS = 14
WORKOUT_WINDOW_DAYS = 7


def _in_window(record_date: date, as_of: date, window_days: int) -> bool:
    return as_of - timedelta(days=window_days) <= record_date <= as_of


class TrendAnalyzer:
    """Recompute trend classifications from rolling history.

    Windows are inclusive at both ends: a 14-day window on the 15th covers
    the 1st through the 15th. Thresholds are constructor-tunable.
    """

    def __init__(
        self,
        stagnation_threshold_kg: float = 0.2,
        min_stagnation_days: int = 7,
        rapid_gain_rate_kg: float = 1.0,
        overtraining_ratio: float = 0.6,
        min_workouts: int = 3,
        high_risk_margin: float = 0.2,
    ):
        self.stagnation_threshold_kg = stagnation_threshold_kg
        self.min_stagnation_days = min_stagnation_days
        self.rapid_gain_rate_kg = rapid_gain_rate_kg
        self.overtraining_ratio = overtraining_ratio
        self.min_workouts = min_workouts
        self.high_risk_margin = high_risk_margin

    def analyze_weight_trend(
        self,
        body_stats: Iterable[BodyStatsRecord],
        as_of: date,
        window_days: int = WEIGHT_WINDOW_DAYS,
    ) -> WeightTrend:
        """Compare the oldest and latest weigh-in inside the window.

        Stagnant: change below the threshold across at least
        ``min_stagnation_days``. Rapid gain: weekly rate above the limit.
        """
        samples = sorted(
            (r for r in body_stats if _in_window(r.date, as_of, window_days)),
            key=lambda r: (r.date, r.created_at),
        )
        if len(samples) < 2:
            return WeightTrend(has_data=False, sample_count=len(samples), window_days=window_days)

        oldest, latest = samples[0], samples[-1]
        weight_change = round(latest.weight_kg - oldest.weight_kg, 3)
        days_between = (latest.date - oldest.date).days
        weekly_rate = round(weight_change / days_between * 7, 3) if days_between > 0 else 0.0

        if weight_change > 0.5:
            direction = TrendDirection.GAINING
        elif weight_change < -0.2:
            direction = TrendDirection.LOSING
        else:
            direction = TrendDirection.STABLE

        trend = WeightTrend(
            has_data=True,
            sample_count=len(samples),
            window_days=window_days,
            latest_weight_kg=latest.weight_kg,
            oldest_weight_kg=oldest.weight_kg,
            weight_change_kg=weight_change,
            days_between=days_between,
            weekly_rate_kg=weekly_rate,
            direction=direction,
            is_stagnant=(
                weight_change < self.stagnation_threshold_kg
                and days_between >= self.min_stagnation_days
            ),
            is_rapid_gain=weekly_rate > self.rapid_gain_rate_kg,
        )
        logger.debug(
            "weight_trend_analyzed",
            samples=trend.sample_count,
            weight_change_kg=weight_change,
            days_between=days_between,
            weekly_rate_kg=weekly_rate,
            is_stagnant=trend.is_stagnant,
            is_rapid_gain=trend.is_rapid_gain,
        )
        return trend

    def analyze_overtraining(
        self,
        workouts: Iterable[WorkoutLogRecord],
        as_of: date,
        window_days: int = WORKOUT_WINDOW_DAYS,
    ) -> OvertrainingAnalysis:
        """Share of high-intensity sessions in the trailing week.

        Detected when at least ``min_workouts`` sessions were logged and
        the high-intensity ratio exceeds the threshold. Risk is high when
        the ratio is at least ``high_risk_margin`` over the threshold.
        """
        sessions = sorted(
            (w for w in workouts if _in_window(w.date, as_of, window_days)),
            key=lambda w: (w.date, w.created_at),
        )
        total = len(sessions)
        high = sum(1 for w in sessions if w.is_high_intensity)
        ratio = high / total if total else 0.0
        average_duration = sum(w.duration_min for w in sessions) / total if total else 0.0
        consecutive = self._longest_high_streak(sessions)

        detected = total >= self.min_workouts and ratio > self.overtraining_ratio
        if not detected:
            risk = RiskLevel.LOW
        elif ratio - self.overtraining_ratio >= self.high_risk_margin - 1e-9:
            risk = RiskLevel.HIGH
        else:
            risk = RiskLevel.MODERATE

        indicators: List[str] = []
        if total > 6:
            indicators.append("high_frequency")
        if high >= 5:
            indicators.append("high_intensity_volume")
        if average_duration > 120:
            indicators.append("long_sessions")
        if consecutive >= 3:
            indicators.append("consecutive_high_intensity")

        analysis = OvertrainingAnalysis(
            detected=detected,
            risk_level=risk,
            total_workouts=total,
            high_intensity_workouts=high,
            high_intensity_ratio=round(ratio, 3),
            average_duration_min=round(average_duration, 1),
            consecutive_high_intensity=consecutive,
            indicators=tuple(indicators),
        )
        logger.debug(
            "overtraining_analyzed",
            total_workouts=total,
            high_intensity_workouts=high,
            ratio=analysis.high_intensity_ratio,
            detected=detected,
            risk_level=risk.value,
        )
        return analysis

    @staticmethod
    def classify(
        weight_trend: WeightTrend, overtraining: OvertrainingAnalysis
    ) -> Tuple[TrendClassification, ...]:
        found = []
        if weight_trend.is_stagnant:
            found.append(TrendClassification.STAGNANT)
        if weight_trend.is_rapid_gain:
            found.append(TrendClassification.RAPID_GAIN)
        if overtraining.detected:
            found.append(TrendClassification.OVERTRAINING)
        return tuple(found) or (TrendClassification.NORMAL,)

    @staticmethod
    def _longest_high_streak(sessions: List[WorkoutLogRecord]) -> int:
        longest = current = 0
        for session in sessions:
            current = current + 1 if session.is_high_intensity else 0
            longest = max(longest, current)
        return longest
