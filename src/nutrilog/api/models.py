"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field


class FoodCreateRequest(BaseModel):
    """Payload for adding a food."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    category: str
    nutrition_per_100g: dict[str, float] = Field(
        default_factory=dict, alias="nutritionPer100g"
    )


class FoodUpdateRequest(BaseModel):
    """Partial update for a food; omitted fields are kept."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    category: str | None = None
    nutrition_per_100g: dict[str, float] | None = Field(
        default=None, alias="nutritionPer100g"
    )


class IngredientPayload(BaseModel):
    """Ingredient reference inside a dish."""

    model_config = ConfigDict(populate_by_name=True)

    food_id: str = Field(alias="foodId")
    grams: float = Field(ge=0)


class DishCreateRequest(BaseModel):
    """Payload for creating a dish."""

    name: str = Field(min_length=1)
    ingredients: list[IngredientPayload]


class SelectedFoodPayload(BaseModel):
    """Food portion eaten in a meal."""

    model_config = ConfigDict(populate_by_name=True)

    food_id: str = Field(alias="foodId")
    portion_grams: float = Field(ge=0, alias="portionGrams")


class MealPlanCreateRequest(BaseModel):
    """Payload for logging a meal."""

    model_config = ConfigDict(populate_by_name=True)

    meal_id: str = Field(alias="mealId")
    selected_foods: list[SelectedFoodPayload] = Field(alias="selectedFoods")
