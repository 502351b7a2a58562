"""Adjustment value objects carried by adaptation records."""

from dataclasses import dataclass
from enum import Enum

from .guards import parse_enum, require_number, require_range

VOLUME_CHANGE_RANGE_PCT = (-50, 50)
REST_DAYS_RANGE = (0, 7)


class IntensityChange(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


@dataclass(frozen=True)
class MacroAdjustments:
    """Gram deltas added to the current macro targets."""

    protein: float = 0
    carbs: float = 0
    fat: float = 0

    def __post_init__(self) -> None:
        require_number("macro_adjustments.protein", self.protein)
        require_number("macro_adjustments.carbs", self.carbs)
        require_number("macro_adjustments.fat", self.fat)

    def __add__(self, other: "MacroAdjustments") -> "MacroAdjustments":
        return MacroAdjustments(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )

    def is_zero(self) -> bool:
        return self.protein == 0 and self.carbs == 0 and self.fat == 0

    def to_dict(self) -> dict:
        return {"protein": self.protein, "carbs": self.carbs, "fat": self.fat}

    @classmethod
    def from_dict(cls, data: dict) -> "MacroAdjustments":
        return cls(
            protein=data.get("protein", 0),
            carbs=data.get("carbs", 0),
            fat=data.get("fat", 0),
        )


@dataclass(frozen=True)
class WorkoutAdjustments:
    """Training-load changes proposed alongside a calorie adjustment."""

    volume_change_pct: int = 0
    intensity_change: IntensityChange = IntensityChange.MAINTAIN
    rest_days_added: int = 0

    def __post_init__(self) -> None:
        require_range(
            "workout_adjustments.volume_change_pct",
            self.volume_change_pct,
            *VOLUME_CHANGE_RANGE_PCT,
        )
        require_range(
            "workout_adjustments.rest_days_added",
            self.rest_days_added,
            *REST_DAYS_RANGE,
        )
        object.__setattr__(
            self,
            "intensity_change",
            parse_enum(
                IntensityChange,
                self.intensity_change,
                "workout_adjustments.intensity_change",
            ),
        )

    def to_dict(self) -> dict:
        return {
            "volume_change_pct": self.volume_change_pct,
            "intensity_change": self.intensity_change.value,
            "rest_days_added": self.rest_days_added,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutAdjustments":
        return cls(
            volume_change_pct=data.get("volume_change_pct", 0),
            intensity_change=data.get("intensity_change", IntensityChange.MAINTAIN),
            rest_days_added=data.get("rest_days_added", 0),
        )
