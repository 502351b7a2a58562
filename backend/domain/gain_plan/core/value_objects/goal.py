"""Goal value object - where the user wants their weight to go."""

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Optional

from ..exceptions.domain_errors import ValidationError
from .biometric_profile import WEIGHT_RANGE_KG
from .goal_intensity import GoalIntensity
from .guards import parse_enum, require_range

if TYPE_CHECKING:
    from .biometric_profile import BiometricProfile

WEEKLY_GAIN_RANGE_KG = (0.1, 2.0)
DEFAULT_INTENSITY = GoalIntensity.MODERATE


@dataclass(frozen=True)
class Goal:
    """Weight-gain goal.

    ``weekly_gain_kg`` drives surplus sizing when present; otherwise
    ``goal_intensity`` is used, falling back to ``DEFAULT_INTENSITY``.

    Attributes:
        target_weight_kg: Desired body weight (must exceed current weight)
        weekly_gain_kg: Desired gain rate in kg/week (0.1-2.0)
        goal_intensity: Pace preset used when no weekly gain is given
        target_date: Optional deadline
    """

    target_weight_kg: float
    weekly_gain_kg: Optional[float] = None
    goal_intensity: Optional[GoalIntensity] = None
    target_date: Optional[date] = None

    def __post_init__(self) -> None:
        require_range("target_weight_kg", self.target_weight_kg, *WEIGHT_RANGE_KG)
        if self.weekly_gain_kg is not None:
            require_range("weekly_gain_kg", self.weekly_gain_kg, *WEEKLY_GAIN_RANGE_KG)
        if self.goal_intensity is not None:
            object.__setattr__(
                self,
                "goal_intensity",
                parse_enum(GoalIntensity, self.goal_intensity, "goal_intensity"),
            )

    def validate_against(self, profile: "BiometricProfile") -> None:
        """Cross-field check against the owning profile.

        Raises:
            ValidationError: If the target weight is not above current weight
        """
        if self.target_weight_kg <= profile.current_weight_kg:
            raise ValidationError(
                "target_weight_kg",
                f"must be greater than current weight "
                f"({self.target_weight_kg} <= {profile.current_weight_kg})",
            )

    @property
    def surplus_intensity(self) -> GoalIntensity:
        """Intensity used for surplus sizing when no weekly gain is set."""
        return self.goal_intensity or DEFAULT_INTENSITY

    @property
    def effective_intensity(self) -> GoalIntensity:
        """Intensity used by the adaptation tables.

        An explicit intensity wins; otherwise it is derived from the
        weekly gain rate.
        """
        if self.goal_intensity is not None:
            return self.goal_intensity
        if self.weekly_gain_kg is not None:
            if self.weekly_gain_kg <= 0.3:
                return GoalIntensity.CONSERVATIVE
            if self.weekly_gain_kg <= 0.5:
                return GoalIntensity.MODERATE
            return GoalIntensity.AGGRESSIVE
        return DEFAULT_INTENSITY

    def to_dict(self) -> dict:
        return {
            "target_weight_kg": self.target_weight_kg,
            "weekly_gain_kg": self.weekly_gain_kg,
            "goal_intensity": self.goal_intensity.value if self.goal_intensity else None,
            "target_date": self.target_date.isoformat() if self.target_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        target_date = data.get("target_date")
        if isinstance(target_date, str):
            target_date = date.fromisoformat(target_date)
        return cls(
            target_weight_kg=data["target_weight_kg"],
            weekly_gain_kg=data.get("weekly_gain_kg"),
            goal_intensity=data.get("goal_intensity"),
            target_date=target_date,
        )
