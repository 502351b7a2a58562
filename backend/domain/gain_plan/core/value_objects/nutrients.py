"""Food composition value objects."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .guards import parse_enum, require_positive, require_range


class FoodCategory(str, Enum):
    GRAIN = "grain"
    BREAD = "bread"
    LEGUME = "legume"
    DAIRY = "dairy"
    MEAT = "meat"
    FISH = "fish"
    EGG = "egg"
    VEGETABLE = "vegetable"
    NUT = "nut"


class FoodUnit(str, Enum):
    GRAM = "gram"
    ML = "ml"


@dataclass(frozen=True)
class FoodItem:
    """Canonical food with nutrients per 100 g (or 100 ml)."""

    key: str
    name: str
    category: FoodCategory
    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    fiber_per_100g: float = 0.0
    serving_g: Optional[float] = None
    unit: FoodUnit = FoodUnit.GRAM

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", parse_enum(FoodCategory, self.category, "category"))
        object.__setattr__(self, "unit", parse_enum(FoodUnit, self.unit, "unit"))
        for name in (
            "calories_per_100g",
            "protein_per_100g",
            "carbs_per_100g",
            "fat_per_100g",
            "fiber_per_100g",
        ):
            require_range(name, getattr(self, name), 0, 900)
        if self.serving_g is not None:
            require_positive("serving_g", self.serving_g)

    @property
    def protein_density(self) -> float:
        """Grams of protein per 100 kcal."""
        if self.calories_per_100g == 0:
            return 0.0
        return self.protein_per_100g / self.calories_per_100g * 100


@dataclass(frozen=True)
class NutrientTotals:
    """Calories (whole kcal) plus macros and fiber (one decimal)."""

    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float = 0.0

    def to_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
            "fiber_g": self.fiber_g,
        }


@dataclass(frozen=True)
class ScaledFood:
    """A food scaled to a concrete quantity."""

    food_key: str
    name: str
    quantity_g: float
    nutrients: NutrientTotals

    @property
    def calories(self) -> int:
        return self.nutrients.calories


@dataclass(frozen=True)
class MealItem:
    food_key: str
    quantity_g: float


@dataclass(frozen=True)
class MealTotals:
    items: Tuple[ScaledFood, ...]
    totals: NutrientTotals


@dataclass(frozen=True)
class MealSlot:
    """One planned meal of the day."""

    name: str
    calorie_target: int
    items: Tuple[ScaledFood, ...]
    totals: NutrientTotals
    accuracy_pct: float


@dataclass(frozen=True)
class MealPlan:
    """A full day of meals approximating a calorie/macro target."""

    meals_per_day: int
    target_calories: int
    meals: Tuple[MealSlot, ...]
    totals: NutrientTotals
    accuracy_pct: float

    @property
    def within_tolerance(self) -> bool:
        """Whether the plan total is within 20% of the target."""
        return abs(self.totals.calories - self.target_calories) <= 0.2 * self.target_calories
