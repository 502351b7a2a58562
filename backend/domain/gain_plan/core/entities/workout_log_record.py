"""WorkoutLogRecord entity - one training session."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from ..clock import parse_timestamp, to_date, utc_now
from ..exceptions.domain_errors import ValidationError
from ..value_objects.guards import parse_enum, require_range
from ..value_objects.trend import WorkoutIntensity

DURATION_RANGE_MIN = (1, 300)


@dataclass(frozen=True)
class SetEntry:
    reps: int
    weight_kg: float = 0.0

    def __post_init__(self) -> None:
        require_range("sets.reps", self.reps, 0, 1000)
        require_range("sets.weight_kg", self.weight_kg, 0, 1000)

    @property
    def volume(self) -> float:
        return self.reps * self.weight_kg


@dataclass(frozen=True)
class ExerciseEntry:
    name: str
    sets: Tuple[SetEntry, ...] = ()

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("exercises.name", "cannot be empty")
        object.__setattr__(self, "sets", tuple(self.sets))

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)


@dataclass(frozen=True)
class WorkoutLogRecord:
    """Immutable training session of the append-only workout series.

    ``total_volume`` (sum of reps x weight) is derived from the exercises
    when not supplied.
    """

    user_id: str
    date: date
    duration_min: int
    intensity: WorkoutIntensity
    exercises: Tuple[ExerciseEntry, ...] = ()
    total_volume: Optional[float] = None
    record_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValidationError("user_id", "cannot be empty")
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        require_range("duration_min", self.duration_min, *DURATION_RANGE_MIN)
        object.__setattr__(
            self, "intensity", parse_enum(WorkoutIntensity, self.intensity, "intensity")
        )
        object.__setattr__(self, "exercises", tuple(self.exercises))
        if self.total_volume is None:
            object.__setattr__(self, "total_volume", sum(e.volume for e in self.exercises))
        else:
            require_range("total_volume", self.total_volume, 0)

    @property
    def is_high_intensity(self) -> bool:
        return self.intensity is WorkoutIntensity.HIGH

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "duration_min": self.duration_min,
            "intensity": self.intensity.value,
            "exercises": [
                {
                    "name": e.name,
                    "sets": [{"reps": s.reps, "weight_kg": s.weight_kg} for s in e.sets],
                }
                for e in self.exercises
            ],
            "total_volume": self.total_volume,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutLogRecord":
        return cls(
            record_id=data["record_id"],
            user_id=data["user_id"],
            date=to_date(data["date"]),
            duration_min=data["duration_min"],
            intensity=data["intensity"],
            exercises=tuple(
                ExerciseEntry(
                    name=e["name"],
                    sets=tuple(
                        SetEntry(reps=s["reps"], weight_kg=s.get("weight_kg", 0.0))
                        for s in e.get("sets", ())
                    ),
                )
                for e in data.get("exercises", ())
            ),
            total_volume=data.get("total_volume"),
            created_at=parse_timestamp(data["created_at"]),
        )
