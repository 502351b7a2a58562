"""Trend classification value objects.

Trends are recomputed per request from the rolling history; they are
never persisted as state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class TrendClassification(str, Enum):
    STAGNANT = "stagnant"
    RAPID_GAIN = "rapid_gain"
    OVERTRAINING = "overtraining"
    NORMAL = "normal"


class AdaptationTrigger(str, Enum):
    WEIGHT_STAGNATION = "weight_stagnation"
    RAPID_GAIN = "rapid_gain"
    OVERTRAINING = "overtraining"
    PLATEAU = "plateau"


class WorkoutIntensity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class TrendDirection(str, Enum):
    GAINING = "gaining"
    LOSING = "losing"
    STABLE = "stable"


@dataclass(frozen=True)
class WeightTrend:
    """Weight history summary over a trailing window.

    ``has_data`` is False when fewer than two samples fall in the window;
    all other numeric fields are then None.
    """

    has_data: bool
    sample_count: int
    window_days: int
    latest_weight_kg: Optional[float] = None
    oldest_weight_kg: Optional[float] = None
    weight_change_kg: Optional[float] = None
    days_between: Optional[int] = None
    weekly_rate_kg: Optional[float] = None
    direction: Optional[TrendDirection] = None
    is_stagnant: bool = False
    is_rapid_gain: bool = False


@dataclass(frozen=True)
class OvertrainingAnalysis:
    """High-intensity load over the trailing week."""

    detected: bool
    risk_level: RiskLevel
    total_workouts: int
    high_intensity_workouts: int
    high_intensity_ratio: float
    average_duration_min: float = 0.0
    consecutive_high_intensity: int = 0
    indicators: Tuple[str, ...] = field(default_factory=tuple)
