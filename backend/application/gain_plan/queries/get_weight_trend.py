"""GetWeightTrendQuery - weight trend over a trailing window."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from domain.gain_plan.adaptive.trend_analyzer import WEIGHT_WINDOW_DAYS, TrendAnalyzer
from domain.gain_plan.core.clock import utc_now
from domain.gain_plan.core.ports.repositories import IBodyStatsRepository
from domain.gain_plan.core.value_objects.trend import WeightTrend


@dataclass(frozen=True)
class GetWeightTrendQuery:
    user_id: str
    as_of: Optional[date] = None
    window_days: int = WEIGHT_WINDOW_DAYS


class GetWeightTrendQueryHandler:
    def __init__(self, repository: IBodyStatsRepository, analyzer: Optional[TrendAnalyzer] = None):
        self._repository = repository
        self._analyzer = analyzer or TrendAnalyzer()

    async def handle(self, query: GetWeightTrendQuery) -> WeightTrend:
        as_of = query.as_of or utc_now().date()
        records = await self._repository.find_by_date_range(
            query.user_id, as_of - timedelta(days=query.window_days), as_of
        )
        return self._analyzer.analyze_weight_trend(records, as_of, query.window_days)
