"""GraphQL types for the gain plan domain.

These types expose the calorie plan, macro allocation, food aggregation and
adaptation features. Enum values match the domain enum values, so inputs
convert with ``.value``.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

import strawberry

__all__ = [
    # Enums
    "BiologicalSexEnum",
    "ActivityLevelEnum",
    "FitnessLevelEnum",
    "ProteinPreferenceEnum",
    "GoalIntensityEnum",
    "WorkoutIntensityEnum",
    "AdaptationTriggerEnum",
    "TrendDirectionEnum",
    "IntensityChangeEnum",
    # Output types
    "SafetyWarningType",
    "MacroTargetsType",
    "CalculationSnapshotType",
    "EnergyBreakdownType",
    "CaloriePlanPreviewType",
    "MacroShareType",
    "MacroAllocationType",
    "NutrientTotalsType",
    "ScaledFoodType",
    "MealTotalsType",
    "FoodItemType",
    "MealSlotType",
    "MealPlanType",
    "MacroAdjustmentsType",
    "WorkoutAdjustmentsType",
    "AdaptationType",
    "AdaptationHistoryType",
    "TriggerCountType",
    "WeightTrendType",
    "BiometricProfileType",
    "GoalType",
    "GainProfileType",
    "UpdateProfileResultType",
    "BodyStatsRecordType",
    "WorkoutLogRecordType",
    "ApplyAdaptationResultType",
    # Input types
    "BiometricProfileInput",
    "GoalInput",
    "UpdateProfileInput",
    "MealItemInput",
    "BodyMeasurementsInput",
    "LogBodyStatsInput",
    "SetInput",
    "ExerciseInput",
    "LogWorkoutInput",
]


# ============================================
# ENUMS
# ============================================


@strawberry.enum
class BiologicalSexEnum(str, Enum):
    MALE = "male"
    FEMALE = "female"


@strawberry.enum
class ActivityLevelEnum(str, Enum):
    """Physical Activity Level (PAL) for TDEE calculation."""

    SEDENTARY = "sedentary"  # 1.2
    LIGHT = "light"  # 1.375
    MODERATE = "moderate"  # 1.55
    VERY = "very"  # 1.725
    EXTREME = "extreme"  # 1.9


@strawberry.enum
class FitnessLevelEnum(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@strawberry.enum
class ProteinPreferenceEnum(str, Enum):
    MINIMUM = "minimum"
    MODERATE = "moderate"
    HIGH = "high"


@strawberry.enum
class GoalIntensityEnum(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


@strawberry.enum
class WorkoutIntensityEnum(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@strawberry.enum
class AdaptationTriggerEnum(str, Enum):
    WEIGHT_STAGNATION = "weight_stagnation"
    RAPID_GAIN = "rapid_gain"
    OVERTRAINING = "overtraining"
    PLATEAU = "plateau"


@strawberry.enum
class TrendDirectionEnum(str, Enum):
    GAINING = "gaining"
    LOSING = "losing"
    STABLE = "stable"


@strawberry.enum
class IntensityChangeEnum(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


# ============================================
# OUTPUT TYPES - calculation
# ============================================


@strawberry.type
class SafetyWarningType:
    code: str
    message: str


@strawberry.type
class MacroTargetsType:
    """Daily macro targets in grams (one decimal)."""

    protein_g: float
    carbs_g: float
    fat_g: float
    total_calories: int


@strawberry.type
class CalculationSnapshotType:
    """Cached result of the calculation chain for one user."""

    user_id: str
    bmr: int
    tdee: int
    surplus: int
    target_calories: int
    macro_targets: MacroTargetsType
    last_calculated: datetime
    adaptation_offset: int
    version: int
    safety_warnings: List[SafetyWarningType]


@strawberry.type
class EnergyBreakdownType:
    maintenance: int
    surplus: int
    total: int


@strawberry.type
class CaloriePlanPreviewType:
    """Pure pipeline result for a profile and goal; nothing is stored."""

    bmr: int
    tdee: int
    activity_multiplier: float
    surplus: int
    implied_weekly_gain_kg: float
    total_calories: int
    breakdown: EnergyBreakdownType
    safe: bool
    warnings: List[SafetyWarningType]
    recommendation: str
    macros: "MacroAllocationType"


@strawberry.type
class MacroShareType:
    grams: float
    calories: int
    percentage: float


@strawberry.type
class MacroAllocationType:
    total_calories: int
    body_weight_kg: float
    activity_level: ActivityLevelEnum
    protein_preference: ProteinPreferenceEnum
    protein_per_kg: float
    protein: MacroShareType
    carbs: MacroShareType
    fat: MacroShareType
    macro_calories: int
    calorie_difference: int
    within_ranges: bool


# ============================================
# OUTPUT TYPES - food
# ============================================


@strawberry.type
class NutrientTotalsType:
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float


@strawberry.type
class ScaledFoodType:
    food_key: str
    name: str
    quantity_g: float
    nutrients: NutrientTotalsType


@strawberry.type
class MealTotalsType:
    items: List[ScaledFoodType]
    totals: NutrientTotalsType


@strawberry.type
class FoodItemType:
    """Reference food with nutrients per 100 g (or 100 ml)."""

    key: str
    name: str
    category: str
    unit: str
    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    fiber_per_100g: float
    serving_g: Optional[float] = None


@strawberry.type
class MealSlotType:
    name: str
    calorie_target: int
    items: List[ScaledFoodType]
    totals: NutrientTotalsType
    accuracy_pct: float


@strawberry.type
class MealPlanType:
    meals_per_day: int
    target_calories: int
    meals: List[MealSlotType]
    totals: NutrientTotalsType
    accuracy_pct: float
    within_tolerance: bool


# ============================================
# OUTPUT TYPES - adaptation
# ============================================


@strawberry.type
class MacroAdjustmentsType:
    protein: float
    carbs: float
    fat: float


@strawberry.type
class WorkoutAdjustmentsType:
    volume_change_pct: int
    intensity_change: IntensityChangeEnum
    rest_days_added: int


@strawberry.type
class AdaptationType:
    adaptation_id: str
    user_id: str
    trigger: AdaptationTriggerEnum
    calorie_adjustment: int
    macro_adjustments: MacroAdjustmentsType
    workout_adjustments: WorkoutAdjustmentsType
    reasoning: str
    effective_date: date
    applied: bool
    created_at: datetime
    applied_at: Optional[datetime] = None


@strawberry.type
class TriggerCountType:
    trigger: str
    count: int


@strawberry.type
class AdaptationHistoryType:
    adaptations: List[AdaptationType]
    days: int
    total_adaptations: int
    average_per_week: float
    trigger_breakdown: List[TriggerCountType]


@strawberry.type
class WeightTrendType:
    has_data: bool
    sample_count: int
    window_days: int
    is_stagnant: bool
    is_rapid_gain: bool
    latest_weight_kg: Optional[float] = None
    oldest_weight_kg: Optional[float] = None
    weight_change_kg: Optional[float] = None
    days_between: Optional[int] = None
    weekly_rate_kg: Optional[float] = None
    direction: Optional[TrendDirectionEnum] = None


# ============================================
# OUTPUT TYPES - profile and logs
# ============================================


@strawberry.type
class BiometricProfileType:
    age: int
    biological_sex: BiologicalSexEnum
    height_cm: float
    current_weight_kg: float
    activity_level: ActivityLevelEnum
    fitness_level: FitnessLevelEnum
    dietary_tags: List[str]
    health_flags: List[str]
    bmi: float


@strawberry.type
class GoalType:
    target_weight_kg: float
    goal_intensity: GoalIntensityEnum
    weekly_gain_kg: Optional[float] = None
    target_date: Optional[date] = None


@strawberry.type
class GainProfileType:
    user_id: str
    biometrics: BiometricProfileType
    goal: GoalType
    protein_preference: ProteinPreferenceEnum
    created_at: datetime
    updated_at: datetime


@strawberry.type
class UpdateProfileResultType:
    profile: GainProfileType
    created: bool
    changed_fields: List[str]
    goal_changed: bool
    snapshot_invalidated: bool


@strawberry.type
class BodyStatsRecordType:
    record_id: str
    user_id: str
    date: date
    weight_kg: float
    created_at: datetime
    body_fat_pct: Optional[float] = None
    notes: Optional[str] = None


@strawberry.type
class WorkoutLogRecordType:
    record_id: str
    user_id: str
    date: date
    duration_min: int
    intensity: WorkoutIntensityEnum
    total_volume: float
    exercise_count: int
    created_at: datetime


@strawberry.type
class ApplyAdaptationResultType:
    adaptation: AdaptationType
    snapshot: CalculationSnapshotType


# ============================================
# INPUT TYPES
# ============================================


@strawberry.input
class BiometricProfileInput:
    """User biometric data input."""

    age: int
    biological_sex: BiologicalSexEnum
    height_cm: float
    current_weight_kg: float
    activity_level: ActivityLevelEnum
    fitness_level: FitnessLevelEnum = FitnessLevelEnum.BEGINNER
    dietary_tags: List[str] = strawberry.field(default_factory=list)
    health_flags: List[str] = strawberry.field(default_factory=list)


@strawberry.input
class GoalInput:
    target_weight_kg: float
    weekly_gain_kg: Optional[float] = None
    goal_intensity: Optional[GoalIntensityEnum] = None
    target_date: Optional[date] = None


@strawberry.input
class UpdateProfileInput:
    """Create or update a profile. Creating requires biometrics and goal."""

    user_id: str
    biometrics: Optional[BiometricProfileInput] = None
    goal: Optional[GoalInput] = None
    protein_preference: Optional[ProteinPreferenceEnum] = None


@strawberry.input
class MealItemInput:
    food_key: str
    quantity_g: float


@strawberry.input
class BodyMeasurementsInput:
    chest_cm: Optional[float] = None
    waist_cm: Optional[float] = None
    arms_cm: Optional[float] = None
    thighs_cm: Optional[float] = None


@strawberry.input
class LogBodyStatsInput:
    user_id: str
    date: date
    weight_kg: float
    body_fat_pct: Optional[float] = None
    measurements: Optional[BodyMeasurementsInput] = None
    notes: Optional[str] = None


@strawberry.input
class SetInput:
    reps: int
    weight_kg: float


@strawberry.input
class ExerciseInput:
    name: str
    sets: List[SetInput]


@strawberry.input
class LogWorkoutInput:
    user_id: str
    date: date
    duration_min: int
    intensity: WorkoutIntensityEnum
    exercises: List[ExerciseInput] = strawberry.field(default_factory=list)
    total_volume: Optional[float] = None
