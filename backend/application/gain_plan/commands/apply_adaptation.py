"""ApplyAdaptationCommand - fold an accepted adaptation into the snapshot."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.exceptions.domain_errors import AdaptationNotFoundError
from domain.gain_plan.core.ports.repositories import IAdaptationRepository
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot

from ..orchestrators.recalculation_orchestrator import RecalculationOrchestrator


@dataclass(frozen=True)
class ApplyAdaptationCommand:
    adaptation_id: str


@dataclass(frozen=True)
class ApplyAdaptationResult:
    adaptation: AdaptationRecord
    snapshot: CalculationSnapshot


@dataclass(frozen=True)
class ApplyPendingAdaptationsCommand:
    user_id: str
    as_of: Optional[date] = None


class ApplyAdaptationHandler:
    """Loads adaptations and hands them to the orchestrator."""

    def __init__(
        self,
        orchestrator: RecalculationOrchestrator,
        adaptation_repository: IAdaptationRepository,
    ):
        self._orchestrator = orchestrator
        self._adaptations = adaptation_repository

    async def handle(self, command: ApplyAdaptationCommand) -> ApplyAdaptationResult:
        """
        Raises:
            AdaptationNotFoundError: If no adaptation has that id
            AdaptationAlreadyAppliedError: If it was already applied
        """
        adaptation = await self._adaptations.get(command.adaptation_id)
        if adaptation is None:
            raise AdaptationNotFoundError(command.adaptation_id)
        snapshot = await self._orchestrator.apply_adaptation(adaptation)
        return ApplyAdaptationResult(adaptation=adaptation, snapshot=snapshot)

    async def handle_pending(self, command: ApplyPendingAdaptationsCommand) -> List[AdaptationRecord]:
        return await self._orchestrator.apply_pending(command.user_id, command.as_of)
