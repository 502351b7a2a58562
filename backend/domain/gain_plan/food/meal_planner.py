"""MealPlanAssembler - greedy meal plan approximating macro targets."""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import structlog

from ..core.exceptions.domain_errors import ValidationError
from ..core.rounding import round_half_up, round_to
from ..core.value_objects.guards import require_positive, require_range
from ..core.value_objects.macro_targets import MacroTargets
from ..core.value_objects.nutrients import FoodCategory, FoodItem, MealPlan, MealSlot
from .aggregator import FoodAggregator, sum_nutrients

logger = structlog.get_logger(__name__)

MEALS_PER_DAY_RANGE = (3, 6)

MEAL_DISTRIBUTIONS: Dict[int, Tuple[float, ...]] = {
    3: (0.30, 0.40, 0.30),
    4: (0.25, 0.30, 0.30, 0.15),
    5: (0.20, 0.15, 0.30, 0.20, 0.15),
    6: (0.20, 0.10, 0.25, 0.15, 0.20, 0.10),
}

MEAL_NAMES: Dict[int, Tuple[str, ...]] = {
    3: ("Breakfast", "Lunch", "Dinner"),
    4: ("Breakfast", "Lunch", "Dinner", "Evening Snack"),
    5: ("Breakfast", "Mid-Morning Snack", "Lunch", "Evening Snack", "Dinner"),
    6: (
        "Breakfast",
        "Mid-Morning Snack",
        "Lunch",
        "Afternoon Snack",
        "Dinner",
        "Late Snack",
    ),
}

_ANIMAL_FLESH = frozenset({FoodCategory.MEAT, FoodCategory.FISH})
_EXCLUDED_BY_TAG: Dict[str, FrozenSet[FoodCategory]] = {
    "vegan": _ANIMAL_FLESH | {FoodCategory.EGG, FoodCategory.DAIRY},
    "vegetarian": _ANIMAL_FLESH,
    "eggetarian": _ANIMAL_FLESH,
}

_PROTEIN_CATEGORIES = frozenset(
    {FoodCategory.MEAT, FoodCategory.FISH, FoodCategory.EGG, FoodCategory.DAIRY, FoodCategory.LEGUME}
)
_CARB_CATEGORIES = frozenset({FoodCategory.GRAIN, FoodCategory.BREAD})

# Per-item quantity bounds (g) after rescaling a slot
MIN_ITEM_G = 5
MAX_ITEM_G = 1000
VEGETABLE_PORTION_G = 100


def excluded_categories(dietary_tags: Iterable[str]) -> FrozenSet[FoodCategory]:
    """Categories ruled out by a set of dietary tags.

    ``non-vegetarian`` alongside ``vegetarian`` lifts the restriction.
    """
    tags = {t.strip().lower() for t in dietary_tags}
    if "non-vegetarian" in tags:
        tags.discard("vegetarian")
        tags.discard("eggetarian")
    excluded: FrozenSet[FoodCategory] = frozenset()
    for tag in tags:
        excluded = excluded | _EXCLUDED_BY_TAG.get(tag, frozenset())
    return excluded


class MealPlanAssembler:
    """Build a day of meals whose calories land close to the target.

    For every slot the assembler picks, in order, a protein source, a carb
    source, a vegetable and, when fat is short, a fat source. Choices
    rotate through the candidates by slot index so the plan is varied yet
    deterministic. Quantities are then rescaled so the slot hits its
    calorie share. Accuracy is the contract, not optimality.
    """

    def __init__(self, aggregator: Optional[FoodAggregator] = None):
        self._aggregator = aggregator or FoodAggregator()

    def assemble(
        self,
        targets: MacroTargets,
        total_calories: int,
        dietary_tags: Iterable[str] = (),
        meals_per_day: int = 4,
        exclude_foods: Iterable[str] = (),
    ) -> MealPlan:
        """Assemble a daily meal plan.

        Raises:
            ValidationError: On non-positive calories, an unsupported number
                of meals, or when the filters leave nothing to eat
        """
        require_positive("total_calories", total_calories)
        require_range("meals_per_day", meals_per_day, *MEALS_PER_DAY_RANGE)
        if int(meals_per_day) != meals_per_day:
            raise ValidationError("meals_per_day", "must be a whole number")
        meals_per_day = int(meals_per_day)

        foods = self._available_foods(dietary_tags, exclude_foods)
        protein_sources = sorted(
            (f for f in foods if f.category in _PROTEIN_CATEGORIES and f.protein_density >= 4),
            key=lambda f: (-f.protein_density, f.key),
        )
        carb_sources = sorted(
            (f for f in foods if f.category in _CARB_CATEGORIES and f.carbs_per_100g > 20),
            key=lambda f: f.key,
        )
        vegetables = sorted(
            (f for f in foods if f.category is FoodCategory.VEGETABLE), key=lambda f: f.key
        )
        fat_sources = sorted(
            (f for f in foods if f.fat_per_100g >= 40), key=lambda f: f.key
        )
        if not (protein_sources or carb_sources or vegetables or fat_sources):
            raise ValidationError("dietary_tags", "no foods left after applying filters")

        slots: List[MealSlot] = []
        for index, (name, share) in enumerate(
            zip(MEAL_NAMES[meals_per_day], MEAL_DISTRIBUTIONS[meals_per_day])
        ):
            picks = self._greedy_picks(
                index,
                protein_g=targets.protein_g * share,
                carbs_g=targets.carbs_g * share,
                fat_g=targets.fat_g * share,
                protein_sources=protein_sources,
                carb_sources=carb_sources,
                vegetables=vegetables,
                fat_sources=fat_sources,
            )
            slots.append(self._build_slot(name, round_half_up(total_calories * share), picks))

        totals = sum_nutrients(item for slot in slots for item in slot.items)
        plan = MealPlan(
            meals_per_day=meals_per_day,
            target_calories=total_calories,
            meals=tuple(slots),
            totals=totals,
            accuracy_pct=round_to(totals.calories / total_calories * 100),
        )
        logger.debug(
            "meal_plan_assembled",
            meals_per_day=meals_per_day,
            target_calories=total_calories,
            planned_calories=totals.calories,
            accuracy_pct=plan.accuracy_pct,
        )
        return plan

    def _available_foods(
        self, dietary_tags: Iterable[str], exclude_foods: Iterable[str]
    ) -> List[FoodItem]:
        excluded = excluded_categories(dietary_tags)
        excluded_keys = {k.strip().lower() for k in exclude_foods}
        return [
            food
            for food in self._aggregator.table.all()
            if food.category not in excluded and food.key not in excluded_keys
        ]

    @staticmethod
    def _greedy_picks(
        index: int,
        protein_g: float,
        carbs_g: float,
        fat_g: float,
        protein_sources: Sequence[FoodItem],
        carb_sources: Sequence[FoodItem],
        vegetables: Sequence[FoodItem],
        fat_sources: Sequence[FoodItem],
    ) -> List[Tuple[FoodItem, float]]:
        picks: List[Tuple[FoodItem, float]] = []
        got_protein = got_carbs = got_fat = 0.0

        def add(food: FoodItem, quantity: float) -> None:
            nonlocal got_protein, got_carbs, got_fat
            picks.append((food, quantity))
            got_protein += food.protein_per_100g * quantity / 100
            got_carbs += food.carbs_per_100g * quantity / 100
            got_fat += food.fat_per_100g * quantity / 100

        if protein_sources:
            food = protein_sources[index % len(protein_sources)]
            add(food, min(max(protein_g * 0.7 / food.protein_per_100g * 100, 50), 300))
        if carb_sources:
            food = carb_sources[index % len(carb_sources)]
            remaining = max(carbs_g * 0.8 - got_carbs, 0)
            add(food, min(max(remaining / food.carbs_per_100g * 100, 30), 400))
        if vegetables:
            add(vegetables[index % len(vegetables)], VEGETABLE_PORTION_G)
        if fat_sources and got_fat < fat_g * 0.7:
            food = fat_sources[index % len(fat_sources)]
            add(food, min(max((fat_g - got_fat) / food.fat_per_100g * 100, 5), 50))
        return picks

    def _build_slot(
        self, name: str, calorie_target: int, picks: List[Tuple[FoodItem, float]]
    ) -> MealSlot:
        raw_calories = sum(food.calories_per_100g * qty / 100 for food, qty in picks)
        factor = calorie_target / raw_calories if raw_calories else 1.0

        items = tuple(
            self._aggregator.scale_food(
                food.key, min(max(round_half_up(qty * factor), MIN_ITEM_G), MAX_ITEM_G)
            )
            for food, qty in picks
        )
        totals = sum_nutrients(items)
        return MealSlot(
            name=name,
            calorie_target=calorie_target,
            items=items,
            totals=totals,
            accuracy_pct=round_to(totals.calories / calorie_target * 100) if calorie_target else 0.0,
        )
