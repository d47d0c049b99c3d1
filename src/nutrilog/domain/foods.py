"""Domain models for the food catalog."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from nutrilog.domain.nutrition import Nutrition

DISH_CATEGORY = "dishes"


class NutrilogError(Exception):
    """Base error for domain guard clauses."""


class UnknownFoodError(NutrilogError, LookupError):
    """Raised when a food id does not resolve in the catalog."""

    def __init__(self, food_id: str) -> None:
        super().__init__(f"Unknown food id: {food_id}")
        self.food_id = food_id


class InvalidIngredientError(NutrilogError, ValueError):
    """Raised when an ingredient cannot be used in a dish."""


@dataclass(frozen=True)
class Ingredient:
    """A food reference with a gram amount inside a dish."""

    food_id: str
    grams: float


@dataclass(frozen=True)
class Food:
    """A nutrition fact record, simple or composite."""

    id: str
    name: str
    category: str
    nutrition_per_100g: Nutrition
    user_added: bool = False
    created_at: datetime | None = None
    last_used: datetime | None = None
    is_dish: bool = False
    ingredients: tuple[Ingredient, ...] = ()
    total_grams: float | None = None


@dataclass(frozen=True)
class FoodPatch:
    """Partial update for a food; ``None`` fields are left untouched."""

    name: str | None = None
    category: str | None = None
    nutrition_per_100g: Nutrition | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "FoodPatch":
        """Build a patch from a loose payload."""
        name = payload.get("name")
        category = payload.get("category")
        nutrition_raw = payload.get(
            "nutritionPer100g", payload.get("nutrition_per_100g")
        )
        return cls(
            name=str(name) if name is not None else None,
            category=str(category) if category is not None else None,
            nutrition_per_100g=(
                Nutrition.from_mapping(nutrition_raw)
                if isinstance(nutrition_raw, Mapping)
                else None
            ),
        )

    def apply(self, food: Food) -> Food:
        """Return ``food`` with the present fields overwritten.

        Dish nutrition is always derived from ingredients, so a nutrition
        patch on a dish is ignored.
        """
        nutrition = food.nutrition_per_100g
        if self.nutrition_per_100g is not None and not food.is_dish:
            nutrition = self.nutrition_per_100g
        return Food(
            id=food.id,
            name=self.name if self.name is not None else food.name,
            category=self.category if self.category is not None else food.category,
            nutrition_per_100g=nutrition,
            user_added=food.user_added,
            created_at=food.created_at,
            last_used=food.last_used,
            is_dish=food.is_dish,
            ingredients=food.ingredients,
            total_grams=food.total_grams,
        )
