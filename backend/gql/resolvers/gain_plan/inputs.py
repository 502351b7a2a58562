"""GraphQL input -> domain conversion.

Domain constructors validate; conversion only unwraps enums and lists.
"""

from domain.gain_plan.core.entities.body_stats_record import BodyMeasurements
from domain.gain_plan.core.entities.workout_log_record import ExerciseEntry, SetEntry
from domain.gain_plan.core.value_objects.biometric_profile import BiometricProfile
from domain.gain_plan.core.value_objects.goal import Goal
from gql.types_gain_plan import (
    BiometricProfileInput,
    BodyMeasurementsInput,
    ExerciseInput,
    GoalInput,
)


def to_biometrics(data: BiometricProfileInput) -> BiometricProfile:
    return BiometricProfile(
        age=data.age,
        biological_sex=data.biological_sex.value,
        height_cm=data.height_cm,
        current_weight_kg=data.current_weight_kg,
        activity_level=data.activity_level.value,
        fitness_level=data.fitness_level.value,
        dietary_tags=frozenset(data.dietary_tags),
        health_flags=frozenset(data.health_flags),
    )


def to_goal(data: GoalInput) -> Goal:
    return Goal(
        target_weight_kg=data.target_weight_kg,
        weekly_gain_kg=data.weekly_gain_kg,
        goal_intensity=data.goal_intensity.value if data.goal_intensity else None,
        target_date=data.target_date,
    )


def to_measurements(data: BodyMeasurementsInput) -> BodyMeasurements:
    return BodyMeasurements(
        chest_cm=data.chest_cm,
        waist_cm=data.waist_cm,
        arms_cm=data.arms_cm,
        thighs_cm=data.thighs_cm,
    )


def to_exercise(data: ExerciseInput) -> ExerciseEntry:
    return ExerciseEntry(
        name=data.name,
        sets=tuple(SetEntry(reps=s.reps, weight_kg=s.weight_kg) for s in data.sets),
    )
