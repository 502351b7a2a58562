"""Calculator ports - interfaces of the pure calculation services."""

from abc import ABC, abstractmethod

from ..value_objects.activity_level import ActivityLevel
from ..value_objects.biometric_profile import BodyMetrics
from ..value_objects.calorie_plan import BMRBreakdown
from ..value_objects.macro_targets import MacroAllocation
from ..value_objects.profile_enums import ProteinPreference


class IBMRCalculator(ABC):
    """Port for BMR calculation."""

    @abstractmethod
    def calculate(self, metrics: BodyMetrics) -> int:
        """Calculate BMR in kcal/day."""
        pass

    @abstractmethod
    def calculate_with_breakdown(self, metrics: BodyMetrics) -> BMRBreakdown:
        """Calculate BMR with each additive term exposed."""
        pass


class ITDEECalculator(ABC):
    """Port for TDEE calculation."""

    @abstractmethod
    def calculate_tdee(self, bmr: int, activity_level: ActivityLevel) -> int:
        pass


class IMacroCalculator(ABC):
    """Port for macro allocation."""

    @abstractmethod
    def allocate(
        self,
        total_calories: int,
        body_weight_kg: float,
        activity_level: ActivityLevel,
        protein_preference: ProteinPreference = ProteinPreference.MODERATE,
    ) -> MacroAllocation:
        pass
