"""MongoDB append-only repositories for body stats and workout logs."""

from datetime import date
from typing import Any, Dict, List, Optional

from domain.gain_plan.core.entities.body_stats_record import BodyStatsRecord
from domain.gain_plan.core.entities.workout_log_record import WorkoutLogRecord
from domain.gain_plan.core.ports.repositories import IBodyStatsRepository, IWorkoutLogRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository

# Dates are stored as ISO strings, which sort the same as the dates.
_CHRONOLOGICAL = [("date", 1), ("created_at", 1)]


def _date_range_filter(user_id: str, start: date, end: date) -> Dict[str, Any]:
    return {"user_id": user_id, "date": {"$gte": start.isoformat(), "$lte": end.isoformat()}}


class MongoBodyStatsRepository(MongoBaseRepository[BodyStatsRecord], IBodyStatsRepository):
    @property
    def collection_name(self) -> str:
        return "body_stats"

    def document_id(self, entity: BodyStatsRecord) -> str:
        return entity.record_id

    def from_document(self, doc: Dict[str, Any]) -> BodyStatsRecord:
        return BodyStatsRecord.from_dict(doc)

    async def append(self, record: BodyStatsRecord) -> None:
        await self._insert_one(self.to_document(record))

    async def find_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> List[BodyStatsRecord]:
        docs = await self._find_many(_date_range_filter(user_id, start, end), sort=_CHRONOLOGICAL)
        return [self.from_document(doc) for doc in docs]

    async def find_latest(self, user_id: str) -> Optional[BodyStatsRecord]:
        docs = await self._find_many(
            {"user_id": user_id}, sort=[("date", -1), ("created_at", -1)], limit=1
        )
        return self.from_document(docs[0]) if docs else None


class MongoWorkoutLogRepository(MongoBaseRepository[WorkoutLogRecord], IWorkoutLogRepository):
    @property
    def collection_name(self) -> str:
        return "workout_logs"

    def document_id(self, entity: WorkoutLogRecord) -> str:
        return entity.record_id

    def from_document(self, doc: Dict[str, Any]) -> WorkoutLogRecord:
        return WorkoutLogRecord.from_dict(doc)

    async def append(self, record: WorkoutLogRecord) -> None:
        await self._insert_one(self.to_document(record))

    async def find_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> List[WorkoutLogRecord]:
        docs = await self._find_many(_date_range_filter(user_id, start, end), sort=_CHRONOLOGICAL)
        return [self.from_document(doc) for doc in docs]
