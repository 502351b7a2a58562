"""FoodAggregator - scales foods by quantity and sums them into meals."""

from typing import Any, Iterable, List, Optional

import structlog

from ..core.exceptions.domain_errors import ValidationError
from ..core.rounding import round_half_up, round_to
from ..core.value_objects.guards import require_positive
from ..core.value_objects.nutrients import MealItem, MealTotals, NutrientTotals, ScaledFood
from .reference_table import FoodReferenceTable, get_food_reference_table

logger = structlog.get_logger(__name__)

MAX_QUANTITY_G = 5000


def sum_nutrients(items: Iterable[ScaledFood]) -> NutrientTotals:
    """Sum scaled foods; calories stay whole, the rest is re-rounded."""
    items = list(items)
    return NutrientTotals(
        calories=sum(i.nutrients.calories for i in items),
        protein_g=round_to(sum(i.nutrients.protein_g for i in items)),
        carbs_g=round_to(sum(i.nutrients.carbs_g for i in items)),
        fat_g=round_to(sum(i.nutrients.fat_g for i in items)),
        fiber_g=round_to(sum(i.nutrients.fiber_g for i in items)),
    )


def _as_meal_item(raw: Any) -> MealItem:
    if isinstance(raw, MealItem):
        return raw
    if isinstance(raw, dict):
        key = raw.get("food_key", raw.get("food"))
        return MealItem(food_key=key, quantity_g=raw.get("quantity_g", raw.get("quantity")))
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return MealItem(food_key=raw[0], quantity_g=raw[1])
    raise ValidationError("items", f"unsupported meal item {raw!r}")


class FoodAggregator:
    """Turn (food, quantity) pairs into nutrient totals.

    Nutrients scale linearly with ``quantity / 100``; calories are rounded
    to whole kcal, macros and fiber to one decimal.
    """

    def __init__(self, table: Optional[FoodReferenceTable] = None):
        self._table = table or get_food_reference_table()

    @property
    def table(self) -> FoodReferenceTable:
        return self._table

    def scale_food(self, food_key: str, quantity_g: float) -> ScaledFood:
        """Scale one food to a quantity in grams (ml for liquids).

        Raises:
            ValidationError: If quantity is not positive or too large
            FoodNotFoundError: If the food key is unknown

        Example:
            >>> FoodAggregator().scale_food("Paneer", 50).calories
            133
        """
        require_positive("quantity_g", quantity_g, MAX_QUANTITY_G)
        food = self._table.lookup(food_key)
        factor = quantity_g / 100

        return ScaledFood(
            food_key=food.key,
            name=food.name,
            quantity_g=quantity_g,
            nutrients=NutrientTotals(
                calories=round_half_up(food.calories_per_100g * factor),
                protein_g=round_to(food.protein_per_100g * factor),
                carbs_g=round_to(food.carbs_per_100g * factor),
                fat_g=round_to(food.fat_per_100g * factor),
                fiber_g=round_to(food.fiber_per_100g * factor),
            ),
        )

    def aggregate_meal(self, items: Iterable[Any]) -> MealTotals:
        """Scale every item and sum the results.

        Items may be ``MealItem``s, ``(key, quantity)`` pairs or dicts
        with ``food_key``/``quantity_g``.

        Raises:
            ValidationError: If the list is empty or an item is malformed
            FoodNotFoundError: If any food key is unknown
        """
        meal_items: List[MealItem] = [_as_meal_item(raw) for raw in items or ()]
        if not meal_items:
            raise ValidationError("items", "meal must contain at least one food")

        scaled = tuple(self.scale_food(i.food_key, i.quantity_g) for i in meal_items)
        totals = sum_nutrients(scaled)
        logger.debug("meal_aggregated", item_count=len(scaled), calories=totals.calories)
        return MealTotals(items=scaled, totals=totals)
