"""LogBodyStatsCommand - append a weigh-in to the body stats series."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog

from domain.gain_plan.core.entities.body_stats_record import BodyMeasurements, BodyStatsRecord
from domain.gain_plan.core.ports.repositories import IBodyStatsRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LogBodyStatsCommand:
    user_id: str
    date: date
    weight_kg: float
    body_fat_pct: Optional[float] = None
    measurements: Optional[BodyMeasurements] = None
    notes: Optional[str] = None


class LogBodyStatsHandler:
    """Validates and appends body stats records. Records are never updated."""

    def __init__(self, repository: IBodyStatsRepository):
        self._repository = repository

    async def handle(self, command: LogBodyStatsCommand) -> BodyStatsRecord:
        """
        Raises:
            ValidationError: If a value is out of range
        """
        record = BodyStatsRecord(
            user_id=command.user_id,
            date=command.date,
            weight_kg=command.weight_kg,
            body_fat_pct=command.body_fat_pct,
            measurements=command.measurements,
            notes=command.notes,
        )
        await self._repository.append(record)
        logger.info(
            "body_stats_logged",
            user_id=record.user_id,
            record_id=record.record_id,
            date=record.date.isoformat(),
            weight_kg=record.weight_kg,
        )
        return record
