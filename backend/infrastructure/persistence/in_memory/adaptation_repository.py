"""In-memory implementation of IAdaptationRepository."""

from copy import deepcopy
from datetime import date, datetime
from typing import List, Optional

from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.ports.repositories import IAdaptationRepository


class InMemoryAdaptationRepository(IAdaptationRepository):
    """Adaptation records keyed by id; stored and returned as deep copies."""

    def __init__(self) -> None:
        self._adaptations: dict[str, AdaptationRecord] = {}

    async def save(self, adaptation: AdaptationRecord) -> None:
        self._adaptations[adaptation.adaptation_id] = deepcopy(adaptation)

    async def get(self, adaptation_id: str) -> Optional[AdaptationRecord]:
        adaptation = self._adaptations.get(adaptation_id)
        return deepcopy(adaptation) if adaptation else None

    async def find_pending(self, user_id: str, as_of: date) -> List[AdaptationRecord]:
        return self._select(lambda a: a.user_id == user_id and a.is_due(as_of))

    async def find_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> List[AdaptationRecord]:
        return self._select(
            lambda a: a.user_id == user_id and start <= a.created_at.date() <= end
        )

    async def mark_applied(self, adaptation_id: str, applied_at: datetime) -> bool:
        adaptation = self._adaptations.get(adaptation_id)
        if adaptation is None or adaptation.applied:
            return False
        adaptation.mark_applied(applied_at)
        return True

    async def find_latest(self, user_id: str) -> Optional[AdaptationRecord]:
        mine = self._select(lambda a: a.user_id == user_id)
        return mine[-1] if mine else None

    async def find_latest_applied(self, user_id: str) -> Optional[AdaptationRecord]:
        applied = self._select(lambda a: a.user_id == user_id and a.applied)
        return applied[-1] if applied else None

    def _select(self, predicate) -> List[AdaptationRecord]:
        return [
            deepcopy(a)
            for a in sorted(self._adaptations.values(), key=lambda a: a.created_at)
            if predicate(a)
        ]

    def clear(self) -> None:
        self._adaptations.clear()

    def count(self) -> int:
        return len(self._adaptations)
