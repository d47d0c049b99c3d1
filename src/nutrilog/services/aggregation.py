"""Nutrition aggregation over the food catalog.

Every function here is pure: the result depends only on the ingredient list
and the catalog snapshot passed in.
"""

import logging
from collections.abc import Iterable, Mapping

from nutrilog.domain.foods import Food, Ingredient
from nutrilog.domain.meals import SelectedFood, atwater_calories
from nutrilog.domain.nutrition import Nutrition

_logger = logging.getLogger(__name__)

Catalog = Mapping[str, Food] | Iterable[Food]


def index_catalog(catalog: Catalog) -> Mapping[str, Food]:
    """Return the catalog keyed by food id."""
    if isinstance(catalog, Mapping):
        return catalog
    return {food.id: food for food in catalog}


def calculate_dish_nutrition(
    ingredients: Iterable[Ingredient], catalog: Catalog
) -> Nutrition:
    """Sum the nutrition of each ingredient scaled by its grams."""
    foods = index_catalog(catalog)
    return _sum_portions(
        ((item.food_id, item.grams) for item in ingredients), foods
    )


def convert_to_nutrition_per_100g(totals: Nutrition, total_grams: float) -> Nutrition:
    """Express absolute totals per 100g; zero weight yields all zeros."""
    if total_grams <= 0:
        return Nutrition.zero()
    return totals.scaled(100.0 / total_grams)


def calculate_meal_nutrition(
    selected_foods: Iterable[SelectedFood], catalog: Catalog
) -> Nutrition:
    """Return absolute meal totals with calories derived from macros."""
    foods = index_catalog(catalog)
    totals = _sum_portions(
        ((item.food_id, item.portion_grams) for item in selected_foods), foods
    )
    return totals.with_calories(
        round(atwater_calories(totals.protein, totals.carbs, totals.fat))
    )


def _sum_portions(
    portions: Iterable[tuple[str, float]], foods: Mapping[str, Food]
) -> Nutrition:
    total = Nutrition.zero()
    for food_id, grams in portions:
        food = foods.get(food_id)
        if food is None:
            _logger.warning("Skipping unknown food in aggregation: food_id=%s", food_id)
            continue
        total = total + food.nutrition_per_100g.scaled(grams / 100.0)
    return total
