"""CalculationSnapshot - cached output of the BMR -> surplus -> macro chain."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Tuple

from ..clock import ensure_utc, parse_timestamp
from ..exceptions.domain_errors import ValidationError
from .calorie_plan import SafetyWarning
from .macro_targets import MacroTargets


@dataclass(frozen=True)
class CalculationSnapshot:
    """Derived, cacheable calculation result for one user.

    A snapshot is a cache, not a source of truth: it is a pure function of
    the profile, goal and accepted adaptations at ``last_calculated``.

    Attributes:
        user_id: Owner
        bmr: Basal metabolic rate (kcal/day)
        tdee: Total daily energy expenditure (kcal/day)
        surplus: Daily surplus including accepted adaptations (kcal/day)
        target_calories: Daily calorie target, always ``tdee + surplus``
        macro_targets: Gram targets
        last_calculated: When the pipeline last ran (UTC)
        adaptation_offset: Cumulative accepted calorie adjustment (kcal)
        version: Compare-and-swap token, bumped on every write
        safety_warnings: Informational findings from the safety check
        invalidated: Set when a calculation input changed; forces a recompute
    """

    user_id: str
    bmr: int
    tdee: int
    surplus: int
    target_calories: int
    macro_targets: MacroTargets
    last_calculated: datetime
    adaptation_offset: int = 0
    version: int = 0
    safety_warnings: Tuple[SafetyWarning, ...] = field(default_factory=tuple)
    invalidated: bool = False

    def __post_init__(self) -> None:
        if self.target_calories != self.tdee + self.surplus:
            raise ValidationError(
                "target_calories",
                f"must equal tdee + surplus "
                f"({self.target_calories} != {self.tdee} + {self.surplus})",
            )
        object.__setattr__(self, "last_calculated", ensure_utc(self.last_calculated))
        object.__setattr__(self, "safety_warnings", tuple(self.safety_warnings))

    def with_calorie_adjustment(
        self,
        calorie_adjustment: int,
        macro_targets: MacroTargets,
        calculated_at: Optional[datetime] = None,
    ) -> "CalculationSnapshot":
        """Fold an accepted calorie delta into a new snapshot."""
        return replace(
            self,
            surplus=self.surplus + calorie_adjustment,
            target_calories=self.target_calories + calorie_adjustment,
            adaptation_offset=self.adaptation_offset + calorie_adjustment,
            macro_targets=macro_targets,
            last_calculated=calculated_at or self.last_calculated,
        )

    def with_version(self, version: int) -> "CalculationSnapshot":
        return replace(self, version=version)

    def mark_invalidated(self) -> "CalculationSnapshot":
        return replace(self, invalidated=True)

    def to_dict(self) -> dict:
        """JSON-shaped boundary record."""
        return {
            "user_id": self.user_id,
            "bmr": self.bmr,
            "tdee": self.tdee,
            "surplus": self.surplus,
            "target_calories": self.target_calories,
            "macro_targets": self.macro_targets.to_dict(),
            "last_calculated": self.last_calculated.isoformat(),
            "adaptation_offset": self.adaptation_offset,
            "version": self.version,
            "safety_warnings": [w.to_dict() for w in self.safety_warnings],
            "invalidated": self.invalidated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationSnapshot":
        return cls(
            user_id=data["user_id"],
            bmr=data["bmr"],
            tdee=data["tdee"],
            surplus=data["surplus"],
            target_calories=data["target_calories"],
            macro_targets=MacroTargets.from_dict(data["macro_targets"]),
            last_calculated=parse_timestamp(data["last_calculated"]),
            adaptation_offset=data.get("adaptation_offset", 0),
            version=data.get("version", 0),
            safety_warnings=tuple(
                SafetyWarning.from_dict(w) for w in data.get("safety_warnings", ())
            ),
            invalidated=data.get("invalidated", False),
        )
