"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.adaptation_repository import (
    InMemoryAdaptationRepository,
)
from infrastructure.persistence.in_memory.profile_repository import (
    InMemoryProfileRepository,
)
from infrastructure.persistence.in_memory.snapshot_repository import (
    InMemorySnapshotRepository,
)
from infrastructure.persistence.in_memory.time_series_repository import (
    InMemoryBodyStatsRepository,
    InMemoryWorkoutLogRepository,
)

__all__ = [
    "InMemoryAdaptationRepository",
    "InMemoryBodyStatsRepository",
    "InMemoryProfileRepository",
    "InMemorySnapshotRepository",
    "InMemoryWorkoutLogRepository",
]
