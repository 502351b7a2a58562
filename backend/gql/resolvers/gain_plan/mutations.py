"""Mutation resolvers for the gain plan domain.

These resolvers execute CQRS commands using Command Handlers:
- updateProfile: Create or update profile and goal, invalidating the snapshot
- logBodyStats / logWorkout: Append to the history series
- analyzeAndAdapt: Propose an adaptation from recent history
- applyAdaptation / applyPendingAdaptations: Fold adaptations into the snapshot
- recalculate: Force a fresh snapshot
"""

from datetime import date, datetime
from typing import List, Optional

import strawberry

from application.gain_plan.commands.analyze_and_adapt import (
    AnalyzeAndAdaptCommand,
    AnalyzeAndAdaptHandler,
)
from application.gain_plan.commands.apply_adaptation import (
    ApplyAdaptationCommand,
    ApplyAdaptationHandler,
    ApplyPendingAdaptationsCommand,
)
from application.gain_plan.commands.log_body_stats import (
    LogBodyStatsCommand,
    LogBodyStatsHandler,
)
from application.gain_plan.commands.log_workout import LogWorkoutCommand, LogWorkoutHandler
from application.gain_plan.commands.update_profile import (
    UpdateProfileCommand,
    UpdateProfileHandler,
)
from domain.gain_plan.core.value_objects.profile_enums import ProteinPreference
from gql.errors import domain_errors_as_graphql, invalid_input
from gql.resolvers.gain_plan.inputs import to_biometrics, to_exercise, to_goal, to_measurements
from gql.resolvers.gain_plan.mappers import (
    map_adaptation,
    map_body_stats,
    map_profile,
    map_snapshot,
    map_workout,
)
from gql.types_gain_plan import (
    AdaptationType,
    ApplyAdaptationResultType,
    BodyStatsRecordType,
    CalculationSnapshotType,
    LogBodyStatsInput,
    LogWorkoutInput,
    UpdateProfileInput,
    UpdateProfileResultType,
    WorkoutLogRecordType,
)


@strawberry.type
class GainPlanMutations:
    """Gain plan commands."""

    @strawberry.mutation(description="Create or update a profile and goal")
    async def update_profile(
        self, info: strawberry.types.Info, input: UpdateProfileInput
    ) -> UpdateProfileResultType:
        """Create or update the user's profile.

        A goal change drops the cached snapshot; a biometric or preference
        change flags it for recomputation.

        Example:
            mutation {
              gainPlan {
                updateProfile(input: {
                  userId: "user123"
                  biometrics: {
                    age: 25, biologicalSex: MALE, heightCm: 175
                    currentWeightKg: 70, activityLevel: MODERATE
                  }
                  goal: { targetWeightKg: 75, weeklyGainKg: 0.5 }
                }) {
                  created
                  snapshotInvalidated
                }
              }
            }
        """
        if input.biometrics is None and input.goal is None and input.protein_preference is None:
            raise invalid_input(None, "At least one field must be provided for update")

        handler = UpdateProfileHandler(
            profile_repository=info.context.get("profile_repository"),
            snapshot_repository=info.context.get("snapshot_repository"),
        )
        with domain_errors_as_graphql():
            command = UpdateProfileCommand(
                user_id=input.user_id,
                biometrics=to_biometrics(input.biometrics) if input.biometrics else None,
                goal=to_goal(input.goal) if input.goal else None,
                protein_preference=(
                    ProteinPreference(input.protein_preference.value)
                    if input.protein_preference
                    else None
                ),
            )
            result = await handler.handle(command)

        return UpdateProfileResultType(
            profile=map_profile(result.profile),
            created=result.created,
            changed_fields=sorted(result.changed_fields),
            goal_changed=result.goal_changed,
            snapshot_invalidated=result.snapshot_invalidated,
        )

    @strawberry.mutation(description="Record a weigh-in")
    async def log_body_stats(
        self, info: strawberry.types.Info, input: LogBodyStatsInput
    ) -> BodyStatsRecordType:
        handler = LogBodyStatsHandler(info.context.get("body_stats_repository"))
        with domain_errors_as_graphql():
            record = await handler.handle(
                LogBodyStatsCommand(
                    user_id=input.user_id,
                    date=input.date,
                    weight_kg=input.weight_kg,
                    body_fat_pct=input.body_fat_pct,
                    measurements=(
                        to_measurements(input.measurements) if input.measurements else None
                    ),
                    notes=input.notes,
                )
            )
        return map_body_stats(record)

    @strawberry.mutation(description="Record a training session")
    async def log_workout(
        self, info: strawberry.types.Info, input: LogWorkoutInput
    ) -> WorkoutLogRecordType:
        handler = LogWorkoutHandler(info.context.get("workout_repository"))
        with domain_errors_as_graphql():
            record = await handler.handle(
                LogWorkoutCommand(
                    user_id=input.user_id,
                    date=input.date,
                    duration_min=input.duration_min,
                    intensity=input.intensity.value,
                    exercises=tuple(to_exercise(e) for e in input.exercises),
                    total_volume=input.total_volume,
                )
            )
        return map_workout(record)

    @strawberry.mutation(description="Analyze recent history and propose an adaptation")
    async def analyze_and_adapt(
        self,
        info: strawberry.types.Info,
        user_id: str,
        as_of: Optional[datetime] = None,
    ) -> Optional[AdaptationType]:
        """Returns null when the trend is normal and nothing needs to change."""
        context = info.context
        handler = AnalyzeAndAdaptHandler(
            engine=context.get("adjustment_engine"),
            orchestrator=context.get("orchestrator"),
            profile_repository=context.get("profile_repository"),
            body_stats_repository=context.get("body_stats_repository"),
            workout_repository=context.get("workout_repository"),
            adaptation_repository=context.get("adaptation_repository"),
        )
        with domain_errors_as_graphql():
            adaptation = await handler.handle(
                AnalyzeAndAdaptCommand(user_id=user_id, as_of=as_of)
            )
        return map_adaptation(adaptation) if adaptation else None

    @strawberry.mutation(description="Fold an adaptation into the user's snapshot")
    async def apply_adaptation(
        self, info: strawberry.types.Info, adaptation_id: str
    ) -> ApplyAdaptationResultType:
        handler = ApplyAdaptationHandler(
            orchestrator=info.context.get("orchestrator"),
            adaptation_repository=info.context.get("adaptation_repository"),
        )
        with domain_errors_as_graphql():
            result = await handler.handle(ApplyAdaptationCommand(adaptation_id=adaptation_id))
        return ApplyAdaptationResultType(
            adaptation=map_adaptation(result.adaptation),
            snapshot=map_snapshot(result.snapshot),
        )

    @strawberry.mutation(description="Apply every adaptation whose effective date has arrived")
    async def apply_pending_adaptations(
        self,
        info: strawberry.types.Info,
        user_id: str,
        as_of: Optional[date] = None,
    ) -> List[AdaptationType]:
        handler = ApplyAdaptationHandler(
            orchestrator=info.context.get("orchestrator"),
            adaptation_repository=info.context.get("adaptation_repository"),
        )
        with domain_errors_as_graphql():
            applied = await handler.handle_pending(
                ApplyPendingAdaptationsCommand(user_id=user_id, as_of=as_of)
            )
        return [map_adaptation(a) for a in applied]

    @strawberry.mutation(description="Recompute the snapshot even if it is fresh")
    async def recalculate(
        self, info: strawberry.types.Info, user_id: str
    ) -> CalculationSnapshotType:
        orchestrator = info.context.get("orchestrator")
        with domain_errors_as_graphql():
            snapshot = await orchestrator.recalculate(user_id, force=True)
        return map_snapshot(snapshot)
