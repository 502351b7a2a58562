"""Seed data for the food reference table.

Values are per 100 g (per 100 ml for milk). ``serving_g`` is the weight of
one typical piece where the food is counted in pieces.
"""

from ..core.value_objects.nutrients import FoodCategory, FoodItem, FoodUnit

G = FoodCategory

SEED_FOODS = (
    # Grains
    FoodItem("basmati-rice-cooked", "Basmati Rice (Cooked)", G.GRAIN, 130, 2.7, 28.0, 0.3, 0.4),
    FoodItem("brown-rice-cooked", "Brown Rice (Cooked)", G.GRAIN, 111, 2.6, 23.0, 0.9, 1.8),
    FoodItem("white-rice-cooked", "White Rice (Cooked)", G.GRAIN, 130, 2.7, 28.0, 0.3, 0.4),
    # Breads
    FoodItem("roti-wheat", "Wheat Roti", G.BREAD, 280, 8.0, 56.0, 2.0, 3.6, serving_g=55),
    FoodItem("paratha-plain", "Plain Paratha", G.BREAD, 318, 6.5, 38.0, 16.0, 1.9, serving_g=80),
    FoodItem("naan-plain", "Plain Naan", G.BREAD, 262, 9.0, 45.0, 3.4, 1.5, serving_g=100),
    FoodItem("ragi-roti", "Ragi (Finger Millet) Roti", G.BREAD, 328, 6.3, 65.0, 1.3, 3.8, serving_g=50),
    # Legumes
    FoodItem("dal-moong-cooked", "Moong Dal (Cooked)", G.LEGUME, 106, 3.2, 19.2, 0.4, 2.1),
    FoodItem("dal-chana-cooked", "Chana Dal (Cooked)", G.LEGUME, 102, 3.5, 18.4, 0.5, 2.5),
    FoodItem(
        "dal-masoor-cooked", "Masoor Dal (Red Lentil) (Cooked)", G.LEGUME, 99, 3.7, 17.5, 0.4, 2.2
    ),
    FoodItem(
        "dal-arhar-cooked", "Arhar Dal (Pigeon Pea) (Cooked)", G.LEGUME, 120, 3.8, 21.6, 0.6, 2.2
    ),
    FoodItem("chickpeas-cooked", "Chickpeas (Cooked)", G.LEGUME, 134, 6.7, 22.5, 2.1, 5.8),
    # Dairy
    FoodItem("paneer", "Paneer (Indian Cottage Cheese)", G.DAIRY, 265, 25.0, 3.2, 17.0, 0.0),
    FoodItem("curd-plain", "Plain Yogurt (Curd)", G.DAIRY, 61, 3.5, 4.7, 3.3, 0.0),
    FoodItem("milk-whole", "Whole Milk", G.DAIRY, 61, 3.2, 4.8, 3.3, 0.0, unit=FoodUnit.ML),
    FoodItem("ghee", "Ghee (Clarified Butter)", G.DAIRY, 900, 0.3, 0.0, 99.5, 0.0),
    # Meat
    FoodItem(
        "chicken-breast-cooked", "Chicken Breast (Boiled/Cooked)", G.MEAT, 165, 31.0, 0.0, 3.6, 0.0
    ),
    FoodItem("chicken-thigh-cooked", "Chicken Thigh (Cooked)", G.MEAT, 209, 26.0, 0.0, 11.0, 0.0),
    FoodItem("chicken-curry", "Chicken Curry (with oil/ghee)", G.MEAT, 142, 17.0, 2.0, 7.0, 0.5),
    # Fish
    FoodItem("fish-cooked", "Fish (Rohu/Catla) (Cooked)", G.FISH, 120, 20.0, 0.0, 4.5, 0.0),
    # Eggs
    FoodItem("egg-whole-boiled", "Whole Egg (Boiled)", G.EGG, 155, 13.0, 1.1, 11.0, 0.0, serving_g=50),
    FoodItem("egg-white-boiled", "Egg White (Boiled)", G.EGG, 52, 11.0, 0.7, 0.2, 0.0, serving_g=33),
    FoodItem("egg-yolk-boiled", "Egg Yolk (Boiled)", G.EGG, 322, 17.0, 0.6, 27.0, 0.0, serving_g=17),
    FoodItem("egg-scrambled", "Egg (Scrambled)", G.EGG, 155, 13.0, 1.1, 11.0, 0.0, serving_g=50),
    # Vegetables
    FoodItem("spinach-cooked", "Spinach (Cooked)", G.VEGETABLE, 23, 2.7, 3.6, 0.4, 2.2),
    FoodItem("broccoli-cooked", "Broccoli (Cooked)", G.VEGETABLE, 34, 2.8, 7.0, 0.4, 2.4),
    FoodItem("potato-cooked", "Potato (Boiled)", G.VEGETABLE, 77, 1.7, 17.5, 0.1, 2.1),
    FoodItem("sweet-potato-cooked", "Sweet Potato (Boiled)", G.VEGETABLE, 86, 1.6, 20.1, 0.1, 3.0),
    FoodItem("onion-raw", "Onion (Raw)", G.VEGETABLE, 40, 1.1, 9.0, 0.1, 1.7),
    FoodItem("tomato-raw", "Tomato (Raw)", G.VEGETABLE, 18, 0.9, 3.9, 0.2, 1.2),
    # Nuts
    FoodItem("peanuts-raw", "Peanuts (Raw)", G.NUT, 567, 25.8, 16.1, 49.2, 8.5),
    FoodItem("almonds", "Almonds (Raw)", G.NUT, 579, 21.2, 21.6, 50.6, 12.5),
)
