"""UserGainProfile entity - aggregate root owning profile and goal."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional, Tuple

from ..clock import parse_timestamp, utc_now
from ..exceptions.domain_errors import ValidationError
from ..value_objects.biometric_profile import BiometricProfile
from ..value_objects.goal import Goal
from ..value_objects.guards import parse_enum
from ..value_objects.profile_enums import ProteinPreference


@dataclass
class UserGainProfile:
    """User-owned inputs of the calculation chain.

    Mutated only through ``apply_changes`` (or its thin wrappers), which
    reports what changed so callers can invalidate the cached snapshot.

    Attributes:
        user_id: Owner
        biometrics: Current biometric profile
        goal: Current weight-gain goal
        protein_preference: Macro allocation preference
        created_at: Creation timestamp (UTC)
        updated_at: Last update timestamp (UTC)
    """

    user_id: str
    biometrics: BiometricProfile
    goal: Goal
    protein_preference: ProteinPreference = ProteinPreference.MODERATE
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise ValidationError("user_id", "cannot be empty")
        self.protein_preference = parse_enum(
            ProteinPreference, self.protein_preference, "protein_preference"
        )
        self.goal.validate_against(self.biometrics)

    def apply_changes(
        self,
        biometric_changes: Optional[Dict[str, Any]] = None,
        goal: Optional[Goal] = None,
    ) -> Tuple[FrozenSet[str], bool]:
        """Apply biometric and goal changes atomically.

        The (new or current) goal is validated against the updated
        biometrics before anything is assigned.

        Returns:
            Tuple of (changed biometric fields, whether the goal changed)

        Raises:
            ValidationError: If a new value is invalid or the target weight
                no longer exceeds the current weight
        """
        updated, changed = self.biometrics.with_updates(**(biometric_changes or {}))
        new_goal = goal if goal is not None else self.goal
        new_goal.validate_against(updated)

        goal_changed = new_goal != self.goal
        if changed or goal_changed:
            self.biometrics = updated
            self.goal = new_goal
            self.updated_at = utc_now()
        return changed, goal_changed

    def update_biometrics(self, **changes: Any) -> FrozenSet[str]:
        changed, _ = self.apply_changes(biometric_changes=changes)
        return changed

    def update_goal(self, new_goal: Goal) -> bool:
        _, goal_changed = self.apply_changes(goal=new_goal)
        return goal_changed

    def update_protein_preference(self, preference: Any) -> bool:
        parsed = parse_enum(ProteinPreference, preference, "protein_preference")
        if parsed is self.protein_preference:
            return False
        self.protein_preference = parsed
        self.updated_at = utc_now()
        return True

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "biometrics": self.biometrics.to_dict(),
            "goal": self.goal.to_dict(),
            "protein_preference": self.protein_preference.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserGainProfile":
        return cls(
            user_id=data["user_id"],
            biometrics=BiometricProfile.from_dict(data["biometrics"]),
            goal=Goal.from_dict(data["goal"]),
            protein_preference=data.get("protein_preference", ProteinPreference.MODERATE),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )
