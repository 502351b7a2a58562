"""MongoDB repository implementations."""

from .adaptation_repository import MongoAdaptationRepository
from .base import MongoBaseRepository
from .profile_repository import MongoProfileRepository
from .snapshot_repository import MongoSnapshotRepository
from .time_series_repository import MongoBodyStatsRepository, MongoWorkoutLogRepository

__all__ = [
    "MongoAdaptationRepository",
    "MongoBaseRepository",
    "MongoBodyStatsRepository",
    "MongoProfileRepository",
    "MongoSnapshotRepository",
    "MongoWorkoutLogRepository",
]
