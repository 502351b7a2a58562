"""MongoDB implementation of ISnapshotRepository.

The version check runs inside the write filter, so two writers racing on
the same user cannot both succeed.
"""

import logging
from typing import Any, Dict, Optional

from domain.gain_plan.core.exceptions.domain_errors import (
    DuplicateRecordError,
    SnapshotConflictError,
)
from domain.gain_plan.core.ports.repositories import ISnapshotRepository
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot
from infrastructure.persistence.mongodb.base import MongoBaseRepository

logger = logging.getLogger(__name__)


class MongoSnapshotRepository(MongoBaseRepository[CalculationSnapshot], ISnapshotRepository):
    @property
    def collection_name(self) -> str:
        return "calculation_snapshots"

    def document_id(self, entity: CalculationSnapshot) -> str:
        return entity.user_id

    def from_document(self, doc: Dict[str, Any]) -> CalculationSnapshot:
        return CalculationSnapshot.from_dict(doc)

    async def get(self, user_id: str) -> Optional[CalculationSnapshot]:
        doc = await self._find_one({"_id": user_id})
        return self.from_document(doc) if doc else None

    async def save(
        self, snapshot: CalculationSnapshot, expected_version: Optional[int]
    ) -> CalculationSnapshot:
        saved = snapshot.with_version((expected_version or 0) + 1)
        document = self.to_document(saved)

        if expected_version is None:
            try:
                await self._insert_one(document)
            except DuplicateRecordError:
                raise SnapshotConflictError(snapshot.user_id, expected_version)
            return saved

        matched = await self._replace_one(
            {"_id": snapshot.user_id, "version": expected_version}, document
        )
        if matched == 0:
            logger.info(
                f"Snapshot CAS failed for {snapshot.user_id}: expected {expected_version}"
            )
            raise SnapshotConflictError(snapshot.user_id, expected_version)
        return saved

    async def invalidate(self, user_id: str) -> None:
        await self._update_one(
            {"_id": user_id}, {"$set": {"invalidated": True}, "$inc": {"version": 1}}
        )

    async def delete(self, user_id: str) -> None:
        await self._delete_one({"_id": user_id})
