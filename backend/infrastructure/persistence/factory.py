"""Repository Factory for Persistence Layer.

Environment-based repository selection with graceful fallback to in-memory.
Strategy:
- .env (runtime): REPOSITORY_BACKEND=mongodb (production persistence)
- .env.test (pytest): REPOSITORY_BACKEND=inmemory (fast, isolated tests)
- Default: inmemory (safe fallback if env vars not set)

Usage:
    from infrastructure.persistence.factory import get_snapshot_repository

    repo = get_snapshot_repository()  # Singleton, inmemory or mongodb
"""

from typing import Any, Callable, Dict, Optional, TypeVar

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from domain.gain_plan.core.ports.repositories import (
    IAdaptationRepository,
    IBodyStatsRepository,
    IProfileRepository,
    ISnapshotRepository,
    IWorkoutLogRepository,
)
from infrastructure.config import get_mongodb_database, get_mongodb_uri, get_repository_backend
from infrastructure.persistence.in_memory import (
    InMemoryAdaptationRepository,
    InMemoryBodyStatsRepository,
    InMemoryProfileRepository,
    InMemorySnapshotRepository,
    InMemoryWorkoutLogRepository,
)
from infrastructure.persistence.mongodb import (
    MongoAdaptationRepository,
    MongoBodyStatsRepository,
    MongoProfileRepository,
    MongoSnapshotRepository,
    MongoWorkoutLogRepository,
)

TRepository = TypeVar("TRepository")

# Singleton instances (lazy initialization), keyed by port name
_repositories: Dict[str, Any] = {}
_mongo_client: Optional[AsyncIOMotorClient] = None


def _get_mongo_client() -> AsyncIOMotorClient:
    """Shared motor client so every collection uses one connection pool.

    Raises:
        ValueError: If REPOSITORY_BACKEND=mongodb but MONGODB_URI not set
    """
    global _mongo_client
    if _mongo_client is None:
        uri = get_mongodb_uri()
        if not uri:
            raise ValueError(
                "REPOSITORY_BACKEND=mongodb but MONGODB_URI not set. "
                "Set MONGODB_URI in .env or use REPOSITORY_BACKEND=inmemory"
            )
        _mongo_client = AsyncIOMotorClient(uri)
    return _mongo_client


def get_mongo_database() -> AsyncIOMotorDatabase:
    return _get_mongo_client()[get_mongodb_database()]


def _create(inmemory: Callable[[], TRepository], mongo: Callable[..., TRepository]) -> TRepository:
    if get_repository_backend() == "mongodb":
        return mongo(_get_mongo_client())
    return inmemory()


def _singleton(name: str, factory: Callable[[], TRepository]) -> TRepository:
    if name not in _repositories:
        _repositories[name] = factory()
    return _repositories[name]


def create_profile_repository() -> IProfileRepository:
    return _create(InMemoryProfileRepository, MongoProfileRepository)


def create_snapshot_repository() -> ISnapshotRepository:
    return _create(InMemorySnapshotRepository, MongoSnapshotRepository)


def create_body_stats_repository() -> IBodyStatsRepository:
    return _create(InMemoryBodyStatsRepository, MongoBodyStatsRepository)


def create_workout_repository() -> IWorkoutLogRepository:
    return _create(InMemoryWorkoutLogRepository, MongoWorkoutLogRepository)


def create_adaptation_repository() -> IAdaptationRepository:
    return _create(InMemoryAdaptationRepository, MongoAdaptationRepository)


def get_profile_repository() -> IProfileRepository:
    return _singleton("profile", create_profile_repository)


def get_snapshot_repository() -> ISnapshotRepository:
    return _singleton("snapshot", create_snapshot_repository)


def get_body_stats_repository() -> IBodyStatsRepository:
    return _singleton("body_stats", create_body_stats_repository)


def get_workout_repository() -> IWorkoutLogRepository:
    return _singleton("workout", create_workout_repository)


def get_adaptation_repository() -> IAdaptationRepository:
    return _singleton("adaptation", create_adaptation_repository)


def reset_repositories() -> None:
    """Reset singleton repository instances.

    Useful for testing to force re-creation with different env vars.
    """
    global _mongo_client
    _repositories.clear()
    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
