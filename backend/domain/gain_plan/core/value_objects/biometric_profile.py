"""Biometric value objects - the user data the calculation chain runs on."""

from dataclasses import dataclass, field, fields, replace
from typing import Any, FrozenSet, Iterable

from ..exceptions.domain_errors import ValidationError
from .activity_level import ActivityLevel
from .guards import parse_enum, require_range
from .profile_enums import BiologicalSex, FitnessLevel

AGE_RANGE = (10, 120)
HEIGHT_RANGE_CM = (100.0, 250.0)
WEIGHT_RANGE_KG = (30.0, 300.0)


def _normalise_tags(field_name: str, tags: Iterable[str]) -> FrozenSet[str]:
    if isinstance(tags, str):
        raise ValidationError(field_name, "must be a collection of strings")
    normalised = set()
    for tag in tags:
        if not isinstance(tag, str) or not tag.strip():
            raise ValidationError(field_name, f"invalid tag {tag!r}")
        normalised.add(tag.strip().lower())
    return frozenset(normalised)


@dataclass(frozen=True)
class BodyMetrics:
    """Inputs of the Mifflin-St Jeor equation.

    Attributes:
        age: Age in years (10-120)
        biological_sex: male or female
        height_cm: Height in centimeters (100-250)
        weight_kg: Body weight in kilograms (30-300)
    """

    age: int
    biological_sex: BiologicalSex
    height_cm: float
    weight_kg: float

    def __post_init__(self) -> None:
        """Validate ranges and normalise the sex enum.

        Raises:
            OutOfRangeError: If a numeric input is outside its bounds
            InvalidEnumError: If the sex is not male/female
            ValidationError: If age is not a whole number
        """
        if isinstance(self.age, bool) or not isinstance(self.age, int):
            raise ValidationError("age", f"must be a whole number, got {self.age!r}")
        require_range("age", self.age, *AGE_RANGE)
        object.__setattr__(
            self,
            "biological_sex",
            parse_enum(BiologicalSex, self.biological_sex, "biological_sex"),
        )
        require_range("height_cm", self.height_cm, *HEIGHT_RANGE_CM)
        require_range("weight_kg", self.weight_kg, *WEIGHT_RANGE_KG)


@dataclass(frozen=True)
class BiometricProfile:
    """User-owned biometric profile.

    Immutable: updates go through ``with_updates`` which returns a new
    profile together with the names of the fields that changed.
    """

    age: int
    biological_sex: BiologicalSex
    height_cm: float
    current_weight_kg: float
    activity_level: ActivityLevel
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    dietary_tags: FrozenSet[str] = field(default_factory=frozenset)
    health_flags: FrozenSet[str] = field(default_factory=frozenset)

    # Changes to any of these invalidate the calculation snapshot.
    RECALCULATION_FIELDS = frozenset({"age", "current_weight_kg", "height_cm", "activity_level"})

    def __post_init__(self) -> None:
        metrics = BodyMetrics(
            age=self.age,
            biological_sex=self.biological_sex,
            height_cm=self.height_cm,
            weight_kg=self.current_weight_kg,
        )
        object.__setattr__(self, "biological_sex", metrics.biological_sex)
        object.__setattr__(
            self,
            "activity_level",
            parse_enum(ActivityLevel, self.activity_level, "activity_level"),
        )
        object.__setattr__(
            self,
            "fitness_level",
            parse_enum(FitnessLevel, self.fitness_level, "fitness_level"),
        )
        object.__setattr__(self, "dietary_tags", _normalise_tags("dietary_tags", self.dietary_tags))
        object.__setattr__(self, "health_flags", _normalise_tags("health_flags", self.health_flags))

    def body_metrics(self) -> BodyMetrics:
        """Project the BMR inputs out of the profile."""
        return BodyMetrics(
            age=self.age,
            biological_sex=self.biological_sex,
            height_cm=self.height_cm,
            weight_kg=self.current_weight_kg,
        )

    def with_updates(self, **changes: Any) -> tuple["BiometricProfile", FrozenSet[str]]:
        """Return an updated copy and the set of fields whose value changed.

        Raises:
            ValidationError: If an unknown field is passed or a new value
                violates the profile invariants
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ValidationError(sorted(unknown)[0], "unknown profile field")

        updated = replace(self, **changes)
        changed = frozenset(name for name in changes if getattr(updated, name) != getattr(self, name))
        return updated, changed

    def requires_recalculation(self, changed_fields: Iterable[str]) -> bool:
        """Whether any of the changed fields feeds the calculation chain."""
        return bool(self.RECALCULATION_FIELDS.intersection(changed_fields))

    def bmi(self) -> float:
        """Body Mass Index = weight (kg) / height (m)^2."""
        height_m = self.height_cm / 100.0
        return self.current_weight_kg / (height_m**2)

    def bmi_category(self) -> str:
        """BMI category classification."""
        bmi_value = self.bmi()
        if bmi_value < 18.5:
            return "underweight"
        elif bmi_value < 25.0:
            return "normal"
        elif bmi_value < 30.0:
            return "overweight"
        else:
            return "obese"

    def to_dict(self) -> dict:
        return {
            "age": self.age,
            "biological_sex": self.biological_sex.value,
            "height_cm": self.height_cm,
            "current_weight_kg": self.current_weight_kg,
            "activity_level": self.activity_level.value,
            "fitness_level": self.fitness_level.value,
            "dietary_tags": sorted(self.dietary_tags),
            "health_flags": sorted(self.health_flags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BiometricProfile":
        return cls(
            age=data["age"],
            biological_sex=data["biological_sex"],
            height_cm=data["height_cm"],
            current_weight_kg=data["current_weight_kg"],
            activity_level=data["activity_level"],
            fitness_level=data.get("fitness_level", FitnessLevel.BEGINNER),
            dietary_tags=frozenset(data.get("dietary_tags", ())),
            health_flags=frozenset(data.get("health_flags", ())),
        )
