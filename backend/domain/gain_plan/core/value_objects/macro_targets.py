"""Macro value objects - gram targets, allocations and adjustment audits."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from ..rounding import round_to
from .activity_level import ActivityLevel
from .guards import require_range
from .profile_enums import ProteinPreference

if TYPE_CHECKING:
    from .adjustments import MacroAdjustments

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams (one decimal).

    Uses standard calorie conversion: protein 4 kcal/g, carbs 4 kcal/g,
    fat 9 kcal/g.
    """

    protein_g: float
    carbs_g: float
    fat_g: float

    def __post_init__(self) -> None:
        require_range("protein_g", self.protein_g, 0)
        require_range("carbs_g", self.carbs_g, 0)
        require_range("fat_g", self.fat_g, 0)

    def total_calories(self) -> float:
        """Calories implied by the gram targets.

        Example:
            >>> MacroTargets(protein_g=150, carbs_g=300, fat_g=70).total_calories()
            2430.0
        """
        return float(
            self.protein_g * PROTEIN_KCAL_PER_G
            + self.carbs_g * CARBS_KCAL_PER_G
            + self.fat_g * FAT_KCAL_PER_G
        )

    def with_adjustments(self, adjustments: "MacroAdjustments") -> "MacroTargets":
        """Add gram deltas, flooring each macro at zero."""
        return MacroTargets(
            protein_g=round_to(max(0.0, self.protein_g + adjustments.protein)),
            carbs_g=round_to(max(0.0, self.carbs_g + adjustments.carbs)),
            fat_g=round_to(max(0.0, self.fat_g + adjustments.fat)),
        )

    def to_dict(self) -> dict:
        return {"protein_g": self.protein_g, "carbs_g": self.carbs_g, "fat_g": self.fat_g}

    @classmethod
    def from_dict(cls, data: dict) -> "MacroTargets":
        return cls(protein_g=data["protein_g"], carbs_g=data["carbs_g"], fat_g=data["fat_g"])


@dataclass(frozen=True)
class MacroShare:
    """One macro of an allocation: grams, calories and share of total (%)."""

    grams: float
    calories: int
    percentage: float


@dataclass(frozen=True)
class MacroRangeCheck:
    """Whether each macro's calorie share landed in its accepted band."""

    protein: bool
    carbs: bool
    fat: bool

    @property
    def all_within(self) -> bool:
        return self.protein and self.carbs and self.fat


@dataclass(frozen=True)
class MacroAllocation:
    """Result of splitting a calorie target into macros.

    Echoes the inputs back for traceability.
    """

    total_calories: int
    body_weight_kg: float
    activity_level: ActivityLevel
    protein_preference: ProteinPreference
    protein_per_kg: float
    protein: MacroShare
    carbs: MacroShare
    fat: MacroShare
    within_ranges: MacroRangeCheck

    @property
    def macro_calories(self) -> int:
        return self.protein.calories + self.carbs.calories + self.fat.calories

    @property
    def calorie_difference(self) -> int:
        """Absolute gap between the macro calories and the requested total."""
        return abs(self.macro_calories - self.total_calories)

    def targets(self) -> MacroTargets:
        return MacroTargets(
            protein_g=self.protein.grams,
            carbs_g=self.carbs.grams,
            fat_g=self.fat.grams,
        )


@dataclass(frozen=True)
class MacroAdjustmentAudit:
    """Audit trail of a trend-driven macro adjustment."""

    original_calories: int
    adjusted_calories: int
    delta: int
    reason: str
    timestamp: datetime


@dataclass(frozen=True)
class MacroAdjustmentResult:
    allocation: MacroAllocation
    audit: MacroAdjustmentAudit
