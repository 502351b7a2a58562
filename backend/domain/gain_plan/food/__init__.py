"""Food reference table, aggregation and meal planning."""

from .aggregator import FoodAggregator
from .meal_planner import MealPlanAssembler
from .reference_table import FoodReferenceTable, get_food_reference_table

__all__ = [
    "FoodAggregator",
    "FoodReferenceTable",
    "MealPlanAssembler",
    "get_food_reference_table",
]
