"""GetAdaptationHistoryQuery - adaptation audit trail with frequency stats."""

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Optional, Tuple

from domain.gain_plan.core.clock import utc_now
from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.ports.repositories import IAdaptationRepository
from domain.gain_plan.core.rounding import round_to

DEFAULT_HISTORY_DAYS = 30


@dataclass(frozen=True)
class GetAdaptationHistoryQuery:
    """Attributes:
        user_id: User identifier
        days: Length of the window ending at ``end``
        end: Last day of the window (defaults to today)
    """

    user_id: str
    days: int = DEFAULT_HISTORY_DAYS
    end: Optional[date] = None


@dataclass(frozen=True)
class AdaptationHistory:
    adaptations: Tuple[AdaptationRecord, ...]
    days: int
    total_adaptations: int
    average_per_week: float
    trigger_breakdown: Dict[str, int]


class GetAdaptationHistoryQueryHandler:
    """Read-only access to the adaptation audit trail."""

    def __init__(self, repository: IAdaptationRepository):
        self._repository = repository

    async def handle(self, query: GetAdaptationHistoryQuery) -> AdaptationHistory:
        if query.days <= 0:
            raise ValueError(f"days must be positive, got {query.days}")
        end = query.end or utc_now().date()
        start = end - timedelta(days=query.days)

        adaptations = await self._repository.find_by_date_range(query.user_id, start, end)
        breakdown = Counter(a.trigger.value for a in adaptations)
        return AdaptationHistory(
            adaptations=tuple(adaptations),
            days=query.days,
            total_adaptations=len(adaptations),
            average_per_week=round_to(len(adaptations) / query.days * 7),
            trigger_breakdown=dict(sorted(breakdown.items())),
        )
