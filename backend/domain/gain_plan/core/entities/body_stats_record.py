"""BodyStatsRecord entity - one weigh-in of the body stats time series."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..clock import parse_timestamp, to_date, utc_now
from ..exceptions.domain_errors import ValidationError
from ..value_objects.guards import require_range

BODY_FAT_RANGE_PCT = (3.0, 50.0)
MEASUREMENT_RANGE_CM = (1.0, 300.0)
MAX_NOTES_LENGTH = 500


@dataclass(frozen=True)
class BodyMeasurements:
    """Optional circumference measurements in centimeters."""

    chest_cm: Optional[float] = None
    waist_cm: Optional[float] = None
    arms_cm: Optional[float] = None
    thighs_cm: Optional[float] = None

    def __post_init__(self) -> None:
        for name in ("chest_cm", "waist_cm", "arms_cm", "thighs_cm"):
            value = getattr(self, name)
            if value is not None:
                require_range(f"measurements.{name}", value, *MEASUREMENT_RANGE_CM)

    def to_dict(self) -> dict:
        return {
            "chest_cm": self.chest_cm,
            "waist_cm": self.waist_cm,
            "arms_cm": self.arms_cm,
            "thighs_cm": self.thighs_cm,
        }


@dataclass(frozen=True)
class BodyStatsRecord:
    """Immutable weigh-in. Records are append-only and ordered by date."""

    user_id: str
    date: date
    weight_kg: float
    body_fat_pct: Optional[float] = None
    measurements: Optional[BodyMeasurements] = None
    notes: Optional[str] = None
    record_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValidationError("user_id", "cannot be empty")
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        require_range("weight_kg", self.weight_kg, 30.0, 300.0)
        if self.body_fat_pct is not None:
            require_range("body_fat_pct", self.body_fat_pct, *BODY_FAT_RANGE_PCT)
        if self.notes is not None and len(self.notes) > MAX_NOTES_LENGTH:
            raise ValidationError("notes", f"must be at most {MAX_NOTES_LENGTH} characters")

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "weight_kg": self.weight_kg,
            "body_fat_pct": self.body_fat_pct,
            "measurements": self.measurements.to_dict() if self.measurements else None,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BodyStatsRecord":
        measurements = data.get("measurements")
        return cls(
            record_id=data["record_id"],
            user_id=data["user_id"],
            date=to_date(data["date"]),
            weight_kg=data["weight_kg"],
            body_fat_pct=data.get("body_fat_pct"),
            measurements=BodyMeasurements(**measurements) if measurements else None,
            notes=data.get("notes"),
            created_at=parse_timestamp(data["created_at"]),
        )
