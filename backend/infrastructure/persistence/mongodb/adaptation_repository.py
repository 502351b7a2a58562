"""MongoDB implementation of IAdaptationRepository."""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.ports.repositories import IAdaptationRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoAdaptationRepository(MongoBaseRepository[AdaptationRecord], IAdaptationRepository):
    """
    Example document:
        {
            "_id": "7d0c...",
            "adaptation_id": "7d0c...",
            "user_id": "user-123",
            "trigger": "weight_stagnation",
            "calorie_adjustment": 125,
            "effective_date": "2026-03-02",
            "applied": false,
            "created_at": "2026-03-01T08:00:00+00:00",
            ...
        }
    """

    @property
    def collection_name(self) -> str:
        return "adaptations"

    def document_id(self, entity: AdaptationRecord) -> str:
        return entity.adaptation_id

    def from_document(self, doc: Dict[str, Any]) -> AdaptationRecord:
        return AdaptationRecord.from_dict(doc)

    async def save(self, adaptation: AdaptationRecord) -> None:
        await self._replace_one(
            {"_id": adaptation.adaptation_id}, self.to_document(adaptation), upsert=True
        )

    async def get(self, adaptation_id: str) -> Optional[AdaptationRecord]:
        doc = await self._find_one({"_id": adaptation_id})
        return self.from_document(doc) if doc else None

    async def find_pending(self, user_id: str, as_of: date) -> List[AdaptationRecord]:
        docs = await self._find_many(
            {
                "user_id": user_id,
                "applied": False,
                "effective_date": {"$lte": as_of.isoformat()},
            },
            sort=[("created_at", 1)],
        )
        return [self.from_document(doc) for doc in docs]

    async def find_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> List[AdaptationRecord]:
        # created_at is a full ISO timestamp; compare against day boundaries.
        docs = await self._find_many(
            {
                "user_id": user_id,
                "created_at": {
                    "$gte": start.isoformat(),
                    "$lt": (end + timedelta(days=1)).isoformat(),
                },
            },
            sort=[("created_at", 1)],
        )
        return [self.from_document(doc) for doc in docs]

    async def mark_applied(self, adaptation_id: str, applied_at: datetime) -> bool:
        matched = await self._update_one(
            {"_id": adaptation_id, "applied": False},
            {"$set": {"applied": True, "applied_at": applied_at.isoformat()}},
        )
        return matched == 1

    async def find_latest(self, user_id: str) -> Optional[AdaptationRecord]:
        docs = await self._find_many({"user_id": user_id}, sort=[("created_at", -1)], limit=1)
        return self.from_document(docs[0]) if docs else None

    async def find_latest_applied(self, user_id: str) -> Optional[AdaptationRecord]:
        docs = await self._find_many(
            {"user_id": user_id, "applied": True}, sort=[("created_at", -1)], limit=1
        )
        return self.from_document(docs[0]) if docs else None
