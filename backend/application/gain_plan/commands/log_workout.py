"""LogWorkoutCommand - append a training session to the workout series."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

import structlog

from domain.gain_plan.core.entities.workout_log_record import ExerciseEntry, WorkoutLogRecord
from domain.gain_plan.core.ports.repositories import IWorkoutLogRepository
from domain.gain_plan.core.value_objects.trend import WorkoutIntensity

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LogWorkoutCommand:
    user_id: str
    date: date
    duration_min: int
    intensity: WorkoutIntensity
    exercises: Tuple[ExerciseEntry, ...] = ()
    total_volume: Optional[float] = None


class LogWorkoutHandler:
    def __init__(self, repository: IWorkoutLogRepository):
        self._repository = repository

    async def handle(self, command: LogWorkoutCommand) -> WorkoutLogRecord:
        record = WorkoutLogRecord(
            user_id=command.user_id,
            date=command.date,
            duration_min=command.duration_min,
            intensity=command.intensity,
            exercises=command.exercises,
            total_volume=command.total_volume,
        )
        await self._repository.append(record)
        logger.info(
            "workout_logged",
            user_id=record.user_id,
            record_id=record.record_id,
            date=record.date.isoformat(),
            intensity=record.intensity.value,
            total_volume=record.total_volume,
        )
        return record
