"""JSON record conversion for persisted catalog, meal and target state."""

from dataclasses import fields, replace
from datetime import UTC, datetime
from typing import TypeVar

from nutrilog.domain.foods import Food, Ingredient
from nutrilog.domain.meals import MacroTargets, MealPlan, SelectedFood
from nutrilog.domain.nutrition import Nutrition
from nutrilog.domain.progress import (
    DEFAULT_TARGET_PROFILE,
    MicronutrientTargets,
    SubMacroTargets,
    TargetProfile,
)

_T = TypeVar("_T", MacroTargets, SubMacroTargets, MicronutrientTargets)


def dump_food(food: Food) -> dict[str, object]:
    """Convert a food into its persisted record."""
    record: dict[str, object] = {
        "id": food.id,
        "name": food.name,
        "category": food.category,
        "nutritionPer100g": food.nutrition_per_100g.to_dict(),
        "userAdded": food.user_added,
        "createdAt": _dump_datetime(food.created_at),
        "lastUsed": _dump_datetime(food.last_used),
    }
    if food.is_dish:
        record["isDish"] = True
        record["ingredients"] = [
            {"foodId": item.food_id, "grams": item.grams} for item in food.ingredients
        ]
        record["totalGrams"] = food.total_grams
    return record


def parse_food(row: dict[str, object]) -> Food:
    """Parse a persisted food record into a domain model."""
    ingredients = tuple(
        Ingredient(food_id=str(item["foodId"]), grams=float(item.get("grams", 0.0)))
        for item in row.get("ingredients") or []
    )
    total_grams = row.get("totalGrams")
    return Food(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        nutrition_per_100g=Nutrition.from_mapping(row.get("nutritionPer100g")),
        user_added=bool(row.get("userAdded", False)),
        created_at=_parse_datetime(row.get("createdAt")),
        last_used=_parse_datetime(row.get("lastUsed")),
        is_dish=bool(row.get("isDish", False)),
        ingredients=ingredients,
        total_grams=float(total_grams) if total_grams is not None else None,
    )


def dump_meal_plan(plan: MealPlan) -> dict[str, object]:
    """Convert a logged meal into its persisted record."""
    return {
        "id": plan.id,
        "mealId": plan.meal_id,
        "selectedFoods": [
            {"foodId": item.food_id, "portionGrams": item.portion_grams}
            for item in plan.selected_foods
        ],
        "calculatedMacros": plan.calculated_macros.to_dict(),
        "createdAt": _dump_datetime(plan.created_at),
    }


def parse_meal_plan(row: dict[str, object]) -> MealPlan:
    """Parse a persisted meal plan record."""
    created_at = _parse_datetime(row.get("createdAt"))
    if created_at is None:
        raise ValueError(f"Meal plan {row.get('id')} has no createdAt")
    return MealPlan(
        id=str(row["id"]),
        meal_id=str(row.get("mealId", "")),
        selected_foods=tuple(
            SelectedFood(
                food_id=str(item["foodId"]),
                portion_grams=float(item.get("portionGrams", 0.0)),
            )
            for item in row.get("selectedFoods") or []
        ),
        calculated_macros=Nutrition.from_mapping(row.get("calculatedMacros")),
        created_at=created_at,
    )


def dump_target_profile(profile: TargetProfile) -> dict[str, object]:
    """Convert a target profile into its persisted record."""
    return {
        "targets": _dump_group(profile.targets),
        "subMacroTargets": _dump_group(profile.sub_macro_targets),
        "micronutrientTargets": _dump_group(profile.micronutrient_targets),
    }


def parse_target_profile(row: dict[str, object]) -> TargetProfile:
    """Parse a persisted target profile; missing values keep defaults."""
    return TargetProfile(
        targets=_parse_group(DEFAULT_TARGET_PROFILE.targets, row.get("targets")),
        sub_macro_targets=_parse_group(
            DEFAULT_TARGET_PROFILE.sub_macro_targets, row.get("subMacroTargets")
        ),
        micronutrient_targets=_parse_group(
            DEFAULT_TARGET_PROFILE.micronutrient_targets,
            row.get("micronutrientTargets"),
        ),
    )


def camel_case(name: str) -> str:
    """Convert a snake_case attribute name to the persisted camelCase key."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _dump_group(group: object) -> dict[str, float]:
    return {
        camel_case(field.name): getattr(group, field.name) for field in fields(group)
    }


def _parse_group(default: _T, raw: object) -> _T:
    if not isinstance(raw, dict):
        return default
    values: dict[str, float] = {}
    for field in fields(default):
        value = raw.get(camel_case(field.name))
        if isinstance(value, int | float) and not isinstance(value, bool):
            values[field.name] = float(value)
    return replace(default, **values)


def _dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
