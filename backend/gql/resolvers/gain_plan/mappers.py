"""Domain -> GraphQL type mapping for the gain plan resolvers."""

from typing import TYPE_CHECKING

from gql.types_gain_plan import (
    ActivityLevelEnum,
    AdaptationHistoryType,
    AdaptationTriggerEnum,
    AdaptationType,
    BiologicalSexEnum,
    BiometricProfileType,
    BodyStatsRecordType,
    CalculationSnapshotType,
    CaloriePlanPreviewType,
    EnergyBreakdownType,
    FitnessLevelEnum,
    FoodItemType,
    GainProfileType,
    GoalIntensityEnum,
    GoalType,
    IntensityChangeEnum,
    MacroAdjustmentsType,
    MacroAllocationType,
    MacroShareType,
    MacroTargetsType,
    MealPlanType,
    MealSlotType,
    MealTotalsType,
    NutrientTotalsType,
    ProteinPreferenceEnum,
    SafetyWarningType,
    ScaledFoodType,
    TrendDirectionEnum,
    TriggerCountType,
    WeightTrendType,
    WorkoutAdjustmentsType,
    WorkoutIntensityEnum,
    WorkoutLogRecordType,
)

if TYPE_CHECKING:
    from application.gain_plan.queries.get_adaptation_history import AdaptationHistory
    from domain.gain_plan.core.entities import (
        AdaptationRecord,
        BodyStatsRecord,
        UserGainProfile,
        WorkoutLogRecord,
    )
    from domain.gain_plan.core.value_objects import (
        CalculationSnapshot,
        CaloriePlan,
        FoodItem,
        MacroAllocation,
        MacroShare,
        MacroTargets,
        MealPlan,
        MealTotals,
        NutrientTotals,
        SafetyWarning,
        ScaledFood,
        WeightTrend,
    )


def map_warning(warning: "SafetyWarning") -> SafetyWarningType:
    return SafetyWarningType(code=warning.code, message=warning.message)


def map_macro_targets(targets: "MacroTargets") -> MacroTargetsType:
    return MacroTargetsType(
        protein_g=targets.protein_g,
        carbs_g=targets.carbs_g,
        fat_g=targets.fat_g,
        total_calories=targets.total_calories(),
    )


def map_snapshot(snapshot: "CalculationSnapshot") -> CalculationSnapshotType:
    return CalculationSnapshotType(
        user_id=snapshot.user_id,
        bmr=snapshot.bmr,
        tdee=snapshot.tdee,
        surplus=snapshot.surplus,
        target_calories=snapshot.target_calories,
        macro_targets=map_macro_targets(snapshot.macro_targets),
        last_calculated=snapshot.last_calculated,
        adaptation_offset=snapshot.adaptation_offset,
        version=snapshot.version,
        safety_warnings=[map_warning(w) for w in snapshot.safety_warnings],
    )


def _map_share(share: "MacroShare") -> MacroShareType:
    return MacroShareType(grams=share.grams, calories=share.calories, percentage=share.percentage)


def map_allocation(allocation: "MacroAllocation") -> MacroAllocationType:
    return MacroAllocationType(
        total_calories=allocation.total_calories,
        body_weight_kg=allocation.body_weight_kg,
        activity_level=ActivityLevelEnum(allocation.activity_level.value),
        protein_preference=ProteinPreferenceEnum(allocation.protein_preference.value),
        protein_per_kg=allocation.protein_per_kg,
        protein=_map_share(allocation.protein),
        carbs=_map_share(allocation.carbs),
        fat=_map_share(allocation.fat),
        macro_calories=allocation.macro_calories,
        calorie_difference=allocation.calorie_difference,
        within_ranges=allocation.within_ranges.all_within,
    )


def map_plan_preview(plan: "CaloriePlan", allocation: "MacroAllocation") -> CaloriePlanPreviewType:
    return CaloriePlanPreviewType(
        bmr=plan.bmr,
        tdee=plan.tdee,
        activity_multiplier=plan.activity_multiplier,
        surplus=plan.surplus,
        implied_weekly_gain_kg=plan.implied_weekly_gain_kg,
        total_calories=plan.total_calories,
        breakdown=EnergyBreakdownType(
            maintenance=plan.breakdown.maintenance,
            surplus=plan.breakdown.surplus,
            total=plan.breakdown.total,
        ),
        safe=plan.safety.safe,
        warnings=[map_warning(w) for w in plan.safety.warnings],
        recommendation=plan.safety.recommendation,
        macros=map_allocation(allocation),
    )


def map_nutrients(totals: "NutrientTotals") -> NutrientTotalsType:
    return NutrientTotalsType(
        calories=totals.calories,
        protein_g=totals.protein_g,
        carbs_g=totals.carbs_g,
        fat_g=totals.fat_g,
        fiber_g=totals.fiber_g,
    )


def map_scaled_food(item: "ScaledFood") -> ScaledFoodType:
    return ScaledFoodType(
        food_key=item.food_key,
        name=item.name,
        quantity_g=item.quantity_g,
        nutrients=map_nutrients(item.nutrients),
    )


def map_meal_totals(meal: "MealTotals") -> MealTotalsType:
    return MealTotalsType(
        items=[map_scaled_food(i) for i in meal.items],
        totals=map_nutrients(meal.totals),
    )


def map_food(food: "FoodItem") -> FoodItemType:
    return FoodItemType(
        key=food.key,
        name=food.name,
        category=food.category.value,
        unit=food.unit.value,
        calories_per_100g=food.calories_per_100g,
        protein_per_100g=food.protein_per_100g,
        carbs_per_100g=food.carbs_per_100g,
        fat_per_100g=food.fat_per_100g,
        fiber_per_100g=food.fiber_per_100g,
        serving_g=food.serving_g,
    )


def map_meal_plan(plan: "MealPlan") -> MealPlanType:
    return MealPlanType(
        meals_per_day=plan.meals_per_day,
        target_calories=plan.target_calories,
        meals=[
            MealSlotType(
                name=slot.name,
                calorie_target=slot.calorie_target,
                items=[map_scaled_food(i) for i in slot.items],
                totals=map_nutrients(slot.totals),
                accuracy_pct=slot.accuracy_pct,
            )
            for slot in plan.meals
        ],
        totals=map_nutrients(plan.totals),
        accuracy_pct=plan.accuracy_pct,
        within_tolerance=plan.within_tolerance,
    )


def map_adaptation(adaptation: "AdaptationRecord") -> AdaptationType:
    macros = adaptation.macro_adjustments
    workout = adaptation.workout_adjustments
    return AdaptationType(
        adaptation_id=adaptation.adaptation_id,
        user_id=adaptation.user_id,
        trigger=AdaptationTriggerEnum(adaptation.trigger.value),
        calorie_adjustment=adaptation.calorie_adjustment,
        macro_adjustments=MacroAdjustmentsType(
            protein=macros.protein, carbs=macros.carbs, fat=macros.fat
        ),
        workout_adjustments=WorkoutAdjustmentsType(
            volume_change_pct=workout.volume_change_pct,
            intensity_change=IntensityChangeEnum(workout.intensity_change.value),
            rest_days_added=workout.rest_days_added,
        ),
        reasoning=adaptation.reasoning,
        effective_date=adaptation.effective_date,
        applied=adaptation.applied,
        created_at=adaptation.created_at,
        applied_at=adaptation.applied_at,
    )


def map_history(history: "AdaptationHistory") -> AdaptationHistoryType:
    return AdaptationHistoryType(
        adaptations=[map_adaptation(a) for a in history.adaptations],
        days=history.days,
        total_adaptations=history.total_adaptations,
        average_per_week=history.average_per_week,
        trigger_breakdown=[
            TriggerCountType(trigger=trigger, count=count)
            for trigger, count in history.trigger_breakdown.items()
        ],
    )


def map_weight_trend(trend: "WeightTrend") -> WeightTrendType:
    return WeightTrendType(
        has_data=trend.has_data,
        sample_count=trend.sample_count,
        window_days=trend.window_days,
        is_stagnant=trend.is_stagnant,
        is_rapid_gain=trend.is_rapid_gain,
        latest_weight_kg=trend.latest_weight_kg,
        oldest_weight_kg=trend.oldest_weight_kg,
        weight_change_kg=trend.weight_change_kg,
        days_between=trend.days_between,
        weekly_rate_kg=trend.weekly_rate_kg,
        direction=TrendDirectionEnum(trend.direction.value) if trend.direction else None,
    )


def map_profile(profile: "UserGainProfile") -> GainProfileType:
    bio = profile.biometrics
    goal = profile.goal
    return GainProfileType(
        user_id=profile.user_id,
        biometrics=BiometricProfileType(
            age=bio.age,
            biological_sex=BiologicalSexEnum(bio.biological_sex.value),
            height_cm=bio.height_cm,
            current_weight_kg=bio.current_weight_kg,
            activity_level=ActivityLevelEnum(bio.activity_level.value),
            fitness_level=FitnessLevelEnum(bio.fitness_level.value),
            dietary_tags=sorted(bio.dietary_tags),
            health_flags=sorted(bio.health_flags),
            bmi=round(bio.bmi(), 1),
        ),
        goal=GoalType(
            target_weight_kg=goal.target_weight_kg,
            goal_intensity=GoalIntensityEnum(goal.surplus_intensity.value),
            weekly_gain_kg=goal.weekly_gain_kg,
            target_date=goal.target_date,
        ),
        protein_preference=ProteinPreferenceEnum(profile.protein_preference.value),
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def map_body_stats(record: "BodyStatsRecord") -> BodyStatsRecordType:
    return BodyStatsRecordType(
        record_id=record.record_id,
        user_id=record.user_id,
        date=record.date,
        weight_kg=record.weight_kg,
        created_at=record.created_at,
        body_fat_pct=record.body_fat_pct,
        notes=record.notes,
    )


def map_workout(record: "WorkoutLogRecord") -> WorkoutLogRecordType:
    return WorkoutLogRecordType(
        record_id=record.record_id,
        user_id=record.user_id,
        date=record.date,
        duration_min=record.duration_min,
        intensity=WorkoutIntensityEnum(record.intensity.value),
        total_volume=record.total_volume,
        exercise_count=len(record.exercises),
        created_at=record.created_at,
    )
