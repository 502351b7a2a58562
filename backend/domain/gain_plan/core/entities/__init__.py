"""Entities for the gain plan domain."""

from .adaptation_record import AdaptationRecord
from .body_stats_record import BodyMeasurements, BodyStatsRecord
from .user_gain_profile import UserGainProfile
from .workout_log_record import ExerciseEntry, SetEntry, WorkoutLogRecord

__all__ = [
    "AdaptationRecord",
    "BodyMeasurements",
    "BodyStatsRecord",
    "ExerciseEntry",
    "SetEntry",
    "UserGainProfile",
    "WorkoutLogRecord",
]
