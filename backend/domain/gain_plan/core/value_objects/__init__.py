"""Value objects for the gain plan domain."""

from .activity_level import ActivityLevel
from .adjustments import IntensityChange, MacroAdjustments, WorkoutAdjustments
from .biometric_profile import BiometricProfile, BodyMetrics
from .calculation_snapshot import CalculationSnapshot
from .calorie_plan import BMRBreakdown, CaloriePlan, EnergyBreakdown, SafetyReport, SafetyWarning
from .goal import DEFAULT_INTENSITY, Goal
from .goal_intensity import GoalIntensity
from .macro_targets import (
    MacroAdjustmentAudit,
    MacroAdjustmentResult,
    MacroAllocation,
    MacroRangeCheck,
    MacroShare,
    MacroTargets,
)
from .nutrients import (
    FoodCategory,
    FoodItem,
    FoodUnit,
    MealItem,
    MealPlan,
    MealSlot,
    MealTotals,
    NutrientTotals,
    ScaledFood,
)
from .profile_enums import BiologicalSex, FitnessLevel, ProteinPreference
from .trend import (
    AdaptationTrigger,
    OvertrainingAnalysis,
    RiskLevel,
    TrendClassification,
    TrendDirection,
    WeightTrend,
    WorkoutIntensity,
)

__all__ = [
    "ActivityLevel",
    "AdaptationTrigger",
    "BMRBreakdown",
    "BiologicalSex",
    "BiometricProfile",
    "BodyMetrics",
    "CalculationSnapshot",
    "CaloriePlan",
    "DEFAULT_INTENSITY",
    "EnergyBreakdown",
    "FitnessLevel",
    "FoodCategory",
    "FoodItem",
    "FoodUnit",
    "Goal",
    "GoalIntensity",
    "IntensityChange",
    "MacroAdjustmentAudit",
    "MacroAdjustmentResult",
    "MacroAdjustments",
    "MacroAllocation",
    "MacroRangeCheck",
    "MacroShare",
    "MacroTargets",
    "MealItem",
    "MealPlan",
    "MealSlot",
    "MealTotals",
    "NutrientTotals",
    "OvertrainingAnalysis",
    "ProteinPreference",
    "RiskLevel",
    "SafetyReport",
    "SafetyWarning",
    "ScaledFood",
    "TrendClassification",
    "TrendDirection",
    "WeightTrend",
    "WorkoutAdjustments",
    "WorkoutIntensity",
]
