"""In-memory implementation of ISnapshotRepository with compare-and-swap."""

import logging
from typing import Optional

from domain.gain_plan.core.exceptions.domain_errors import SnapshotConflictError
from domain.gain_plan.core.ports.repositories import ISnapshotRepository
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot

logger = logging.getLogger(__name__)


class InMemorySnapshotRepository(ISnapshotRepository):
    """
    In-memory snapshot store.

    Snapshots are frozen, so they are stored and returned without copying.
    Each method runs without awaiting, which makes the version check and
    the write atomic on the event loop.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, CalculationSnapshot] = {}
        self.write_count = 0

    async def get(self, user_id: str) -> Optional[CalculationSnapshot]:
        return self._snapshots.get(user_id)

    async def save(
        self, snapshot: CalculationSnapshot, expected_version: Optional[int]
    ) -> CalculationSnapshot:
        stored = self._snapshots.get(snapshot.user_id)
        stored_version = stored.version if stored else None
        if stored_version != expected_version:
            logger.info(
                f"Snapshot CAS failed for {snapshot.user_id}: "
                f"expected {expected_version}, found {stored_version}"
            )
            raise SnapshotConflictError(snapshot.user_id, expected_version)

        saved = snapshot.with_version((stored_version or 0) + 1)
        self._snapshots[snapshot.user_id] = saved
        self.write_count += 1
        return saved

    async def invalidate(self, user_id: str) -> None:
        stored = self._snapshots.get(user_id)
        if stored is not None:
            self._snapshots[user_id] = stored.mark_invalidated().with_version(stored.version + 1)

    async def delete(self, user_id: str) -> None:
        self._snapshots.pop(user_id, None)

    def clear(self) -> None:
        self._snapshots.clear()
        self.write_count = 0
