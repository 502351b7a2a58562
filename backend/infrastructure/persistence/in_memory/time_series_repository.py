"""In-memory append-only time series for body stats and workouts."""

from datetime import date
from typing import Generic, List, Optional, TypeVar

from domain.gain_plan.core.entities.body_stats_record import BodyStatsRecord
from domain.gain_plan.core.entities.workout_log_record import WorkoutLogRecord
from domain.gain_plan.core.exceptions.domain_errors import DuplicateRecordError
from domain.gain_plan.core.ports.repositories import IBodyStatsRepository, IWorkoutLogRepository

TRecord = TypeVar("TRecord", BodyStatsRecord, WorkoutLogRecord)


class _InMemoryTimeSeries(Generic[TRecord]):
    """Per-user lists of frozen records; inserts only, never updates."""

    def __init__(self) -> None:
        self._records: dict[str, List[TRecord]] = {}
        self._ids: set[str] = set()

    async def append(self, record: TRecord) -> None:
        if record.record_id in self._ids:
            raise DuplicateRecordError(record.record_id)
        self._ids.add(record.record_id)
        self._records.setdefault(record.user_id, []).append(record)

    async def find_by_date_range(self, user_id: str, start: date, end: date) -> List[TRecord]:
        return sorted(
            (r for r in self._records.get(user_id, []) if start <= r.date <= end),
            key=lambda r: (r.date, r.created_at),
        )

    def clear(self) -> None:
        self._records.clear()
        self._ids.clear()

    def count(self) -> int:
        return len(self._ids)


class InMemoryBodyStatsRepository(_InMemoryTimeSeries[BodyStatsRecord], IBodyStatsRepository):
    async def find_latest(self, user_id: str) -> Optional[BodyStatsRecord]:
        records = self._records.get(user_id)
        if not records:
            return None
        return max(records, key=lambda r: (r.date, r.created_at))


class InMemoryWorkoutLogRepository(
    _InMemoryTimeSeries[WorkoutLogRecord], IWorkoutLogRepository
):
    pass
