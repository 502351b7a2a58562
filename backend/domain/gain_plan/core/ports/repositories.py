"""Repository ports - store collaborator interfaces."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from ..entities.adaptation_record import AdaptationRecord
from ..entities.body_stats_record import BodyStatsRecord
from ..entities.user_gain_profile import UserGainProfile
from ..entities.workout_log_record import WorkoutLogRecord
from ..value_objects.calculation_snapshot import CalculationSnapshot


class IProfileRepository(ABC):
    """Point read/write of a user's profile and goal."""

    @abstractmethod
    async def save(self, profile: UserGainProfile) -> None:
        """Save profile (create or update).

        Args:
            profile: Profile to save
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Optional[UserGainProfile]:
        """Find profile by user ID.

        Returns:
            Optional[UserGainProfile]: Profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, user_id: str) -> bool:
        pass


class ISnapshotRepository(ABC):
    """Point read/write of a user's calculation snapshot.

    Writes are compare-and-swap on ``CalculationSnapshot.version``.
    """

    @abstractmethod
    async def get(self, user_id: str) -> Optional[CalculationSnapshot]:
        pass

    @abstractmethod
    async def save(
        self, snapshot: CalculationSnapshot, expected_version: Optional[int]
    ) -> CalculationSnapshot:
        """Store a snapshot if the stored version still matches.

        Args:
            snapshot: Snapshot to store
            expected_version: Version the caller read, or None when the
                caller saw no snapshot at all

        Returns:
            CalculationSnapshot: The stored snapshot with its new version

        Raises:
            SnapshotConflictError: If another writer got there first
        """
        pass

    @abstractmethod
    async def invalidate(self, user_id: str) -> None:
        """Flag the snapshot so the next read recomputes.

        The adaptation offset survives; no-op when there is no snapshot.
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Drop the snapshot entirely, adaptation offset included."""
        pass


class IBodyStatsRepository(ABC):
    """Append-only body stats time series."""

    @abstractmethod
    async def append(self, record: BodyStatsRecord) -> None:
        """Insert a record.

        Raises:
            DuplicateRecordError: If the record id already exists
        """
        pass

    @abstractmethod
    async def find_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> List[BodyStatsRecord]:
        """Records with ``start <= date <= end``, oldest first."""
        pass

    @abstractmethod
    async def find_latest(self, user_id: str) -> Optional[BodyStatsRecord]:
        pass


class IWorkoutLogRepository(ABC):
    """Append-only workout log time series."""

    @abstractmethod
    async def append(self, record: WorkoutLogRecord) -> None:
        """Insert a record.

        Raises:
            DuplicateRecordError: If the record id already exists
        """
        pass

    @abstractmethod
    async def find_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> List[WorkoutLogRecord]:
        """Records with ``start <= date <= end``, oldest first."""
        pass


class IAdaptationRepository(ABC):
    """Adaptation audit trail."""

    @abstractmethod
    async def save(self, adaptation: AdaptationRecord) -> None:
        """Save adaptation (create or update)."""
        pass

    @abstractmethod
    async def get(self, adaptation_id: str) -> Optional[AdaptationRecord]:
        pass

    @abstractmethod
    async def find_pending(self, user_id: str, as_of: date) -> List[AdaptationRecord]:
        """Unapplied adaptations effective on or before ``as_of``, oldest first."""
        pass

    @abstractmethod
    async def find_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> List[AdaptationRecord]:
        """Adaptations created between ``start`` and ``end`` inclusive, oldest first."""
        pass

    @abstractmethod
    async def mark_applied(self, adaptation_id: str, applied_at: datetime) -> bool:
        """Flip ``applied`` from False to True in a single conditional write.

        Returns:
            True if this call flipped the flag, False if the adaptation is
            missing or was already applied
        """
        pass

    @abstractmethod
    async def find_latest(self, user_id: str) -> Optional[AdaptationRecord]:
        """Most recently created adaptation, applied or not."""
        pass

    @abstractmethod
    async def find_latest_applied(self, user_id: str) -> Optional[AdaptationRecord]:
        pass
