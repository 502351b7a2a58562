"""GraphQL context factory for dependency injection.

Provides all required dependencies for GraphQL resolvers:
- Repositories (profiles, snapshots, time series, adaptations)
- Orchestrators (calculation pipeline, recalculation)
- Domain services (macro allocator, food aggregator, meal planner,
  adjustment engine)
"""

from typing import Any, Optional

from fastapi import Request
from strawberry.fastapi import BaseContext

from application.gain_plan.orchestrators.calculation_pipeline import CalculationPipeline
from application.gain_plan.orchestrators.recalculation_orchestrator import (
    RecalculationOrchestrator,
)
from application.gain_plan.orchestrators.user_locks import UserLocks
from domain.gain_plan.adaptive.adjustment_engine import AdjustmentEngine
from domain.gain_plan.calculation.macro_service import MacroAllocator
from domain.gain_plan.core.ports.repositories import (
    IAdaptationRepository,
    IBodyStatsRepository,
    IProfileRepository,
    ISnapshotRepository,
    IWorkoutLogRepository,
)
from domain.gain_plan.food.aggregator import FoodAggregator
from domain.gain_plan.food.meal_planner import MealPlanAssembler


class GraphQLContext(BaseContext):
    """GraphQL context with all dependencies.

    This context is injected into all GraphQL resolvers via the
    `info` parameter. Resolvers access dependencies using
    `info.context.get("service_name")`.
    """

    def __init__(
        self,
        profile_repository: IProfileRepository,
        snapshot_repository: ISnapshotRepository,
        body_stats_repository: IBodyStatsRepository,
        workout_repository: IWorkoutLogRepository,
        adaptation_repository: IAdaptationRepository,
        pipeline: CalculationPipeline,
        orchestrator: RecalculationOrchestrator,
        macro_allocator: MacroAllocator,
        food_aggregator: FoodAggregator,
        meal_planner: MealPlanAssembler,
        adjustment_engine: AdjustmentEngine,
        request: Optional[Request] = None,
    ) -> None:
        super().__init__()
        self.profile_repository = profile_repository
        self.snapshot_repository = snapshot_repository
        self.body_stats_repository = body_stats_repository
        self.workout_repository = workout_repository
        self.adaptation_repository = adaptation_repository
        self.pipeline = pipeline
        self.orchestrator = orchestrator
        self.macro_allocator = macro_allocator
        self.food_aggregator = food_aggregator
        self.meal_planner = meal_planner
        self.adjustment_engine = adjustment_engine
        self.request = request

    def get(self, key: str) -> Any:
        """Get dependency by name (for resolver compatibility).

        Example:
            >>> repository = info.context.get("profile_repository")
        """
        return getattr(self, key, None)


def create_context(
    profile_repository: IProfileRepository,
    snapshot_repository: ISnapshotRepository,
    body_stats_repository: IBodyStatsRepository,
    workout_repository: IWorkoutLogRepository,
    adaptation_repository: IAdaptationRepository,
    stale_hours: float,
    locks: Optional[UserLocks] = None,
    request: Optional[Request] = None,
) -> GraphQLContext:
    """Create GraphQL context, wiring domain services around the repositories.

    Pass the same ``locks`` on every request so per-user serialisation
    holds across requests.

    Example:
        >>> context = create_context(
        ...     profile_repository=InMemoryProfileRepository(),
        ...     snapshot_repository=InMemorySnapshotRepository(),
        ...     # ... other repositories
        ...     stale_hours=24,
        ... )
    """
    pipeline = CalculationPipeline()
    aggregator = FoodAggregator()
    orchestrator = RecalculationOrchestrator(
        pipeline=pipeline,
        profile_repository=profile_repository,
        snapshot_repository=snapshot_repository,
        adaptation_repository=adaptation_repository,
        stale_hours=stale_hours,
        locks=locks,
    )
    return GraphQLContext(
        profile_repository=profile_repository,
        snapshot_repository=snapshot_repository,
        body_stats_repository=body_stats_repository,
        workout_repository=workout_repository,
        adaptation_repository=adaptation_repository,
        pipeline=pipeline,
        orchestrator=orchestrator,
        macro_allocator=MacroAllocator(),
        food_aggregator=aggregator,
        meal_planner=MealPlanAssembler(aggregator),
        adjustment_engine=AdjustmentEngine(),
        request=request,
    )
