"""AnalyzeAndAdaptCommand - run the adjustment engine over recent history."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import structlog

from domain.gain_plan.adaptive.adjustment_engine import AdjustmentEngine
from domain.gain_plan.adaptive.trend_analyzer import WEIGHT_WINDOW_DAYS, WORKOUT_WINDOW_DAYS
from domain.gain_plan.core.clock import ensure_utc, utc_now
from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.exceptions.domain_errors import ProfileNotFoundError
from domain.gain_plan.core.ports.repositories import (
    IAdaptationRepository,
    IBodyStatsRepository,
    IProfileRepository,
    IWorkoutLogRepository,
)

from ..orchestrators.recalculation_orchestrator import RecalculationOrchestrator

logger = structlog.get_logger(__name__)

# At most one adaptation per user per week.
ANALYSIS_INTERVAL = timedelta(days=7)


@dataclass(frozen=True)
class AnalyzeAndAdaptCommand:
    """Attributes:
        user_id: User to analyze
        as_of: Analysis time (defaults to now)
    """

    user_id: str
    as_of: Optional[datetime] = None


class AnalyzeAndAdaptHandler:
    """Handler for AnalyzeAndAdaptCommand.

    Loads the history windows, the current snapshot and the goal, asks the
    adjustment engine for an adaptation and persists it when one is
    produced. The adaptation is not applied here.

    Analysis runs at most once per ``ANALYSIS_INTERVAL``: inside that
    window the latest adaptation is returned while it is still pending,
    and nothing is returned once it has been applied.
    """

    def __init__(
        self,
        engine: AdjustmentEngine,
        orchestrator: RecalculationOrchestrator,
        profile_repository: IProfileRepository,
        body_stats_repository: IBodyStatsRepository,
        workout_repository: IWorkoutLogRepository,
        adaptation_repository: IAdaptationRepository,
    ):
        self._engine = engine
        self._orchestrator = orchestrator
        self._profiles = profile_repository
        self._body_stats = body_stats_repository
        self._workouts = workout_repository
        self._adaptations = adaptation_repository

    async def handle(self, command: AnalyzeAndAdaptCommand) -> Optional[AdaptationRecord]:
        """
        Raises:
            ProfileNotFoundError: If the user has no profile on record
        """
        as_of = ensure_utc(command.as_of) if command.as_of else utc_now()
        today = as_of.date()

        profile = await self._profiles.find_by_user_id(command.user_id)
        if profile is None:
            raise ProfileNotFoundError(command.user_id)

        latest = await self._adaptations.find_latest(command.user_id)
        if latest is not None and as_of - latest.created_at < ANALYSIS_INTERVAL:
            logger.info(
                "adaptive_analysis_skipped",
                user_id=command.user_id,
                last_adaptation_id=latest.adaptation_id,
                last_created_at=latest.created_at.isoformat(),
            )
            return None if latest.applied else latest

        snapshot = await self._orchestrator.get_snapshot(command.user_id)
        body_stats = await self._body_stats.find_by_date_range(
            command.user_id, today - timedelta(days=WEIGHT_WINDOW_DAYS), today
        )
        workouts = await self._workouts.find_by_date_range(
            command.user_id, today - timedelta(days=WORKOUT_WINDOW_DAYS), today
        )
        last_applied = await self._adaptations.find_latest_applied(command.user_id)

        adaptation = self._engine.analyze_and_adapt(
            command.user_id,
            body_stats,
            workouts,
            snapshot,
            profile.goal,
            as_of,
            previous_adaptations=[last_applied] if last_applied else [],
        )
        if adaptation is not None:
            await self._adaptations.save(adaptation)
            logger.info(
                "adaptation_persisted",
                user_id=command.user_id,
                adaptation_id=adaptation.adaptation_id,
                trigger=adaptation.trigger.value,
            )
        return adaptation
