"""Enumerations describing the user behind a biometric profile."""

from enum import Enum


class BiologicalSex(str, Enum):
    """Biological sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"

    def bmr_constant(self) -> int:
        """Sex-specific additive constant (+5 male, -161 female)."""
        return 5 if self is BiologicalSex.MALE else -161


class FitnessLevel(str, Enum):
    """Self-reported training experience."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ProteinPreference(str, Enum):
    """How much protein the user wants relative to the activity baseline."""

    MINIMUM = "minimum"
    MODERATE = "moderate"
    HIGH = "high"

    def factor(self) -> float:
        """Multiplier applied to the g/kg protein baseline."""
        return {
            ProteinPreference.MINIMUM: 0.9,
            ProteinPreference.MODERATE: 1.0,
            ProteinPreference.HIGH: 1.1,
        }[self]
