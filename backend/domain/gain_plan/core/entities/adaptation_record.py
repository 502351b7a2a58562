"""AdaptationRecord entity - audited, bounded adjustment to targets."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..clock import parse_timestamp, to_date, utc_now
from ..exceptions.domain_errors import AdaptationAlreadyAppliedError, ValidationError
from ..value_objects.adjustments import MacroAdjustments, WorkoutAdjustments
from ..value_objects.guards import parse_enum, require_range
from ..value_objects.trend import AdaptationTrigger

CALORIE_ADJUSTMENT_RANGE = (-150, 150)
MAX_REASONING_LENGTH = 1000


@dataclass
class AdaptationRecord:
    """Adjustment proposed by the adjustment engine.

    ``applied`` flips to True exactly once, when the orchestrator folds
    the deltas into a new calculation snapshot.

    Attributes:
        user_id: Owner
        trigger: What caused the adaptation
        calorie_adjustment: Daily kcal delta in [-150, 150]
        macro_adjustments: Gram deltas per macro
        workout_adjustments: Training-load changes
        reasoning: Human-readable rationale (audit trail)
        effective_date: First day the adaptation applies
        applied: Whether the deltas have been folded into a snapshot
        applied_at: When it was applied
    """

    user_id: str
    trigger: AdaptationTrigger
    calorie_adjustment: int
    macro_adjustments: MacroAdjustments
    workout_adjustments: WorkoutAdjustments
    reasoning: str
    effective_date: date
    applied: bool = False
    applied_at: Optional[datetime] = None
    adaptation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValidationError("user_id", "cannot be empty")
        self.trigger = parse_enum(AdaptationTrigger, self.trigger, "trigger")
        if isinstance(self.calorie_adjustment, float) and self.calorie_adjustment.is_integer():
            self.calorie_adjustment = int(self.calorie_adjustment)
        if not isinstance(self.calorie_adjustment, int) or isinstance(self.calorie_adjustment, bool):
            raise ValidationError(
                "calorie_adjustment", f"must be a whole number, got {self.calorie_adjustment!r}"
            )
        require_range("calorie_adjustment", self.calorie_adjustment, *CALORIE_ADJUSTMENT_RANGE)
        if not self.reasoning or not self.reasoning.strip():
            raise ValidationError("reasoning", "cannot be empty")
        if len(self.reasoning) > MAX_REASONING_LENGTH:
            raise ValidationError(
                "reasoning", f"must be at most {MAX_REASONING_LENGTH} characters"
            )
        if isinstance(self.effective_date, datetime):
            self.effective_date = self.effective_date.date()
        if self.effective_date < self.created_at.date():
            raise ValidationError("effective_date", "cannot precede the creation date")

    def is_due(self, as_of: date) -> bool:
        """Pending and effective on or before ``as_of``."""
        return not self.applied and self.effective_date <= as_of

    def mark_applied(self, applied_at: Optional[datetime] = None) -> None:
        """Record that the deltas were folded into a snapshot.

        Raises:
            AdaptationAlreadyAppliedError: If the adaptation was already applied
        """
        if self.applied:
            raise AdaptationAlreadyAppliedError(self.adaptation_id)
        self.applied = True
        self.applied_at = applied_at or utc_now()

    def to_dict(self) -> dict:
        return {
            "adaptation_id": self.adaptation_id,
            "user_id": self.user_id,
            "trigger": self.trigger.value,
            "calorie_adjustment": self.calorie_adjustment,
            "macro_adjustments": self.macro_adjustments.to_dict(),
            "workout_adjustments": self.workout_adjustments.to_dict(),
            "reasoning": self.reasoning,
            "effective_date": self.effective_date.isoformat(),
            "applied": self.applied,
            "applied_at": self.applied_at.isoformat() if self.applied_at else None,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AdaptationRecord":
        applied_at = data.get("applied_at")
        return cls(
            adaptation_id=data["adaptation_id"],
            user_id=data["user_id"],
            trigger=data["trigger"],
            calorie_adjustment=data["calorie_adjustment"],
            macro_adjustments=MacroAdjustments.from_dict(data.get("macro_adjustments", {})),
            workout_adjustments=WorkoutAdjustments.from_dict(data.get("workout_adjustments", {})),
            reasoning=data["reasoning"],
            effective_date=to_date(data["effective_date"]),
            applied=data.get("applied", False),
            applied_at=parse_timestamp(applied_at) if applied_at else None,
            created_at=parse_timestamp(data["created_at"]),
        )
