"""Query resolvers for the gain plan domain.

- computeCaloriePlan: Cached calculation snapshot (recomputed when stale)
- previewCaloriePlan: Pure calculation for an ad-hoc profile and goal
- allocateMacros: Macro split for a calorie target
- aggregateMeal / foods: Food reference table lookups
- mealPlan: Daily meal plan built from the user's snapshot
- profile / adaptationHistory / weightTrend: Read models
"""

from datetime import date
from typing import List, Optional

import strawberry

from application.gain_plan.queries.get_adaptation_history import (
    DEFAULT_HISTORY_DAYS,
    GetAdaptationHistoryQuery,
    GetAdaptationHistoryQueryHandler,
)
from application.gain_plan.queries.get_weight_trend import (
    GetWeightTrendQuery,
    GetWeightTrendQueryHandler,
)
from domain.gain_plan.adaptive.trend_analyzer import WEIGHT_WINDOW_DAYS
from domain.gain_plan.core.exceptions.domain_errors import ProfileNotFoundError
from gql.errors import domain_errors_as_graphql, invalid_input
from gql.resolvers.gain_plan.inputs import to_biometrics, to_goal
from gql.resolvers.gain_plan.mappers import (
    map_allocation,
    map_food,
    map_history,
    map_meal_plan,
    map_meal_totals,
    map_plan_preview,
    map_profile,
    map_snapshot,
    map_weight_trend,
)
from gql.types_gain_plan import (
    ActivityLevelEnum,
    AdaptationHistoryType,
    BiometricProfileInput,
    CalculationSnapshotType,
    CaloriePlanPreviewType,
    FoodItemType,
    GainProfileType,
    GoalInput,
    MacroAllocationType,
    MealItemInput,
    MealPlanType,
    MealTotalsType,
    ProteinPreferenceEnum,
    WeightTrendType,
)


@strawberry.type
class GainPlanQueries:
    """Gain plan read operations."""

    @strawberry.field(description="Calorie plan snapshot, recomputed only when stale")
    async def compute_calorie_plan(
        self, info: strawberry.types.Info, user_id: str
    ) -> CalculationSnapshotType:
        """Return the user's calculation snapshot.

        Example:
            query {
              gainPlan {
                computeCaloriePlan(userId: "user123") {
                  bmr tdee surplus targetCalories
                  macroTargets { proteinG carbsG fatG }
                }
              }
            }
        """
        orchestrator = info.context.get("orchestrator")
        with domain_errors_as_graphql():
            snapshot = await orchestrator.get_snapshot(user_id)
        return map_snapshot(snapshot)

    @strawberry.field(description="Calorie plan for a profile and goal, nothing stored")
    def preview_calorie_plan(
        self,
        info: strawberry.types.Info,
        biometrics: BiometricProfileInput,
        goal: GoalInput,
        protein_preference: ProteinPreferenceEnum = ProteinPreferenceEnum.MODERATE,
    ) -> CaloriePlanPreviewType:
        pipeline = info.context.get("pipeline")
        allocator = info.context.get("macro_allocator")
        with domain_errors_as_graphql():
            profile = to_biometrics(biometrics)
            plan = pipeline.plan(profile, to_goal(goal))
            allocation = allocator.allocate(
                plan.total_calories,
                profile.current_weight_kg,
                profile.activity_level,
                protein_preference.value,
            )
        return map_plan_preview(plan, allocation)

    @strawberry.field(description="Split a calorie target into protein, carbs and fat")
    def allocate_macros(
        self,
        info: strawberry.types.Info,
        calories: int,
        weight_kg: float,
        activity_level: ActivityLevelEnum,
        protein_preference: ProteinPreferenceEnum = ProteinPreferenceEnum.MODERATE,
    ) -> MacroAllocationType:
        allocator = info.context.get("macro_allocator")
        with domain_errors_as_graphql():
            allocation = allocator.allocate(
                calories, weight_kg, activity_level.value, protein_preference.value
            )
        return map_allocation(allocation)

    @strawberry.field(description="Nutrient totals for a list of (food, grams) items")
    def aggregate_meal(
        self, info: strawberry.types.Info, items: List[MealItemInput]
    ) -> MealTotalsType:
        aggregator = info.context.get("food_aggregator")
        with domain_errors_as_graphql():
            meal = aggregator.aggregate_meal(
                [{"food_key": i.food_key, "quantity_g": i.quantity_g} for i in items]
            )
        return map_meal_totals(meal)

    @strawberry.field(description="Reference foods, optionally filtered by name or category")
    def foods(self, info: strawberry.types.Info, query: Optional[str] = None) -> List[FoodItemType]:
        table = info.context.get("food_aggregator").table
        return [map_food(food) for food in table.search(query or "")]

    @strawberry.field(description="Daily meal plan matching the user's current targets")
    async def meal_plan(
        self,
        info: strawberry.types.Info,
        user_id: str,
        meals_per_day: int = 4,
        exclude_foods: Optional[List[str]] = None,
    ) -> MealPlanType:
        orchestrator = info.context.get("orchestrator")
        profiles = info.context.get("profile_repository")
        planner = info.context.get("meal_planner")
        with domain_errors_as_graphql():
            profile = await profiles.find_by_user_id(user_id)
            if profile is None:
                raise ProfileNotFoundError(user_id)
            snapshot = await orchestrator.get_snapshot(user_id)
            plan = planner.assemble(
                snapshot.macro_targets,
                snapshot.target_calories,
                dietary_tags=profile.biometrics.dietary_tags,
                meals_per_day=meals_per_day,
                exclude_foods=exclude_foods or (),
            )
        return map_meal_plan(plan)

    @strawberry.field(description="Stored profile and goal")
    async def profile(
        self, info: strawberry.types.Info, user_id: str
    ) -> Optional[GainProfileType]:
        repository = info.context.get("profile_repository")
        profile = await repository.find_by_user_id(user_id)
        return map_profile(profile) if profile else None

    @strawberry.field(description="Adaptations created over the last N days")
    async def adaptation_history(
        self,
        info: strawberry.types.Info,
        user_id: str,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> AdaptationHistoryType:
        if days <= 0:
            raise invalid_input("days", f"days must be positive, got {days}")
        handler = GetAdaptationHistoryQueryHandler(info.context.get("adaptation_repository"))
        history = await handler.handle(GetAdaptationHistoryQuery(user_id=user_id, days=days))
        return map_history(history)

    @strawberry.field(description="Weight trend over a trailing window")
    async def weight_trend(
        self,
        info: strawberry.types.Info,
        user_id: str,
        as_of: Optional[date] = None,
        window_days: int = WEIGHT_WINDOW_DAYS,
    ) -> WeightTrendType:
        if window_days <= 0:
            raise invalid_input("windowDays", f"windowDays must be positive, got {window_days}")
        handler = GetWeightTrendQueryHandler(info.context.get("body_stats_repository"))
        trend = await handler.handle(
            GetWeightTrendQuery(user_id=user_id, as_of=as_of, window_days=window_days)
        )
        return map_weight_trend(trend)
