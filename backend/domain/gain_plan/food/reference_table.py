"""FoodReferenceTable - immutable, process-wide food lookup."""

from collections import Counter
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple

import structlog

from ..core.exceptions.domain_errors import DuplicateRecordError, FoodNotFoundError, ValidationError
from ..core.value_objects.guards import parse_enum
from ..core.value_objects.nutrients import FoodCategory, FoodItem
from .food_data import SEED_FOODS

logger = structlog.get_logger(__name__)


def _normalise_key(key: Any) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValidationError("food_key", "must be a non-empty string")
    return key.strip().lower()


class FoodReferenceTable:
    """Read-only lookup of canonical foods keyed by lower-case key.

    Built once from seed data; there is no mutation API. Use
    ``get_food_reference_table()`` for the process-wide instance.
    """

    def __init__(self, foods: Iterable[FoodItem]):
        entries: Dict[str, FoodItem] = {}
        for food in foods:
            key = _normalise_key(food.key)
            if key in entries:
                raise DuplicateRecordError(key)
            entries[key] = food
        self._foods: Mapping[str, FoodItem] = MappingProxyType(entries)

    def __len__(self) -> int:
        return len(self._foods)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip().lower() in self._foods

    def lookup(self, key: str) -> FoodItem:
        """Case-insensitive lookup.

        Raises:
            ValidationError: If the key is blank
            FoodNotFoundError: If no food has that key
        """
        normalised = _normalise_key(key)
        food = self._foods.get(normalised)
        if food is None:
            raise FoodNotFoundError(key)
        return food

    def all(self) -> Tuple[FoodItem, ...]:
        return tuple(self._foods.values())

    def by_category(self, category: Any) -> Tuple[FoodItem, ...]:
        wanted = parse_enum(FoodCategory, category, "category")
        return tuple(f for f in self._foods.values() if f.category is wanted)

    def search(self, query: str) -> Tuple[FoodItem, ...]:
        """Match a category name exactly, or a name/key substring."""
        term = (query or "").strip().lower()
        if not term:
            return self.all()
        return tuple(
            food
            for key, food in self._foods.items()
            if food.category.value == term or term in key or term in food.name.lower()
        )

    def stats(self) -> dict:
        counts = Counter(food.category.value for food in self._foods.values())
        return {"total_foods": len(self._foods), "categories": dict(sorted(counts.items()))}


@lru_cache(maxsize=1)
def get_food_reference_table() -> FoodReferenceTable:
    """Process-wide food table, built on first use."""
    table = FoodReferenceTable(SEED_FOODS)
    logger.debug("food_reference_table_built", total_foods=len(table))
    return table
