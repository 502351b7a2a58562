"""Unit tests for FoodReferenceTable."""

import pytest

from domain.gain_plan.core.exceptions.domain_errors import (
    DuplicateRecordError,
    FoodNotFoundError,
    InvalidEnumError,
    ValidationError,
)
from domain.gain_plan.core.value_objects.nutrients import FoodCategory, FoodItem, FoodUnit
from domain.gain_plan.food.reference_table import FoodReferenceTable, get_food_reference_table


@pytest.fixture
def table() -> FoodReferenceTable:
    return get_food_reference_table()


class TestFoodReferenceTable:
    def test_seed_size(self, table: FoodReferenceTable) -> None:
        assert len(table) == 32
        assert table.stats()["total_foods"] == 32

    def test_process_wide_instance(self, table: FoodReferenceTable) -> None:
        assert get_food_reference_table() is table

    def test_lookup_is_case_insensitive(self, table: FoodReferenceTable) -> None:
        food = table.lookup("  PANEER ")

        assert food.key == "paneer"
        assert food.calories_per_100g == 265
        assert "Paneer" in table

    def test_unknown_food(self, table: FoodReferenceTable) -> None:
        with pytest.raises(FoodNotFoundError) as exc_info:
            table.lookup("pizza")

        assert exc_info.value.key == "pizza"

    def test_blank_key(self, table: FoodReferenceTable) -> None:
        with pytest.raises(ValidationError):
            table.lookup("  ")

    def test_by_category(self, table: FoodReferenceTable) -> None:
        dairy = table.by_category("dairy")

        assert {f.key for f in dairy} == {"paneer", "curd-plain", "milk-whole", "ghee"}

    def test_unknown_category(self, table: FoodReferenceTable) -> None:
        with pytest.raises(InvalidEnumError):
            table.by_category("dessert")

    def test_search_by_category_name(self, table: FoodReferenceTable) -> None:
        assert {f.category for f in table.search("legume")} == {FoodCategory.LEGUME}

    def test_search_by_name_substring(self, table: FoodReferenceTable) -> None:
        keys = {f.key for f in table.search("chicken")}

        assert keys == {"chicken-breast-cooked", "chicken-thigh-cooked", "chicken-curry"}

    def test_empty_search_returns_everything(self, table: FoodReferenceTable) -> None:
        assert len(table.search("")) == 32

    def test_milk_is_measured_in_ml(self, table: FoodReferenceTable) -> None:
        assert table.lookup("milk-whole").unit is FoodUnit.ML

    def test_duplicate_keys_rejected(self) -> None:
        rice = FoodItem("rice", "Rice", "grain", 130, 2.7, 28.0, 0.3)

        with pytest.raises(DuplicateRecordError):
            FoodReferenceTable([rice, FoodItem("RICE", "Rice", "grain", 130, 2.7, 28.0, 0.3)])

    def test_table_is_read_only(self, table: FoodReferenceTable) -> None:
        with pytest.raises(TypeError):
            table._foods["pizza"] = table.lookup("paneer")  # type: ignore[index]
