"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from nutrilog.adapters.serialization import (
    camel_case,
    dump_food,
    dump_meal_plan,
    dump_target_profile,
)
from nutrilog.api.models import (
    DishCreateRequest,
    FoodCreateRequest,
    FoodUpdateRequest,
    MealPlanCreateRequest,
)
from nutrilog.app_logging import configure_logging
from nutrilog.containers import AppContainer
from nutrilog.domain.foods import (
    FoodPatch,
    Ingredient,
    InvalidIngredientError,
    UnknownFoodError,
)
from nutrilog.domain.meals import SelectedFood
from nutrilog.domain.nutrition import Nutrition
from nutrilog.domain.progress import DailyProgress, NutrientProgress, TargetProfile
from nutrilog.services.progress import build_nutrient_report


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.load()
        logger.info(
            "Loaded %s foods and %s meal plans",
            len(app.state.container.catalog_service.foods),
            len(app.state.container.meal_plan_service.meal_plans),
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods")
    async def list_foods(request: Request, q: str = "") -> dict[str, object]:
        """Return foods matching ``q`` by name or category."""
        state_container: AppContainer = request.app.state.container
        foods = state_container.catalog_service.search(q)
        return {"foods": [dump_food(food) for food in foods]}

    @app.get("/foods/recent")
    async def recent_foods(request: Request, limit: int = 5) -> dict[str, object]:
        """Return the most recently used foods."""
        state_container: AppContainer = request.app.state.container
        foods = state_container.catalog_service.get_recently_used(limit)
        return {"foods": [dump_food(food) for food in foods]}

    @app.get("/foods/{food_id}")
    async def get_food(food_id: str, request: Request) -> dict[str, object]:
        """Return a single food."""
        state_container: AppContainer = request.app.state.container
        food = state_container.catalog_service.get_by_id(food_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return dump_food(food)

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def add_food(
        payload: FoodCreateRequest, request: Request
    ) -> dict[str, object]:
        """Add a user food."""
        state_container: AppContainer = request.app.state.container
        food = state_container.catalog_service.add(
            name=payload.name,
            category=payload.category,
            nutrition_per_100g=Nutrition.from_mapping(payload.nutrition_per_100g),
        )
        return dump_food(food)

    @app.patch("/foods/{food_id}")
    async def update_food(
        food_id: str, payload: FoodUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Merge the given fields into a food."""
        state_container: AppContainer = request.app.state.container
        catalog = state_container.catalog_service
        catalog.update(
            food_id,
            FoodPatch(
                name=payload.name,
                category=payload.category,
                nutrition_per_100g=(
                    Nutrition.from_mapping(payload.nutrition_per_100g)
                    if payload.nutrition_per_100g is not None
                    else None
                ),
            ),
        )
        food = catalog.get_by_id(food_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return dump_food(food)

    @app.delete("/foods/{food_id}")
    async def delete_food(food_id: str, request: Request) -> dict[str, str]:
        """Delete a food; deleting an unknown id succeeds."""
        state_container: AppContainer = request.app.state.container
        state_container.catalog_service.remove(food_id)
        return {"status": "ok"}

    @app.post("/dishes", status_code=status.HTTP_201_CREATED)
    async def create_dish(
        payload: DishCreateRequest, request: Request
    ) -> dict[str, object]:
        """Create a dish from ingredients."""
        state_container: AppContainer = request.app.state.container
        ingredients = [
            Ingredient(food_id=item.food_id, grams=item.grams)
            for item in payload.ingredients
        ]
        try:
            dish = state_container.catalog_service.create_dish(
                payload.name, ingredients
            )
        except (UnknownFoodError, InvalidIngredientError) as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return dump_food(dish)

    @app.post("/meal-plans", status_code=status.HTTP_201_CREATED)
    async def log_meal(
        payload: MealPlanCreateRequest, request: Request
    ) -> dict[str, object]:
        """Log a meal eaten now."""
        state_container: AppContainer = request.app.state.container
        plan = state_container.meal_plan_service.log_meal(
            payload.meal_id,
            [
                SelectedFood(food_id=item.food_id, portion_grams=item.portion_grams)
                for item in payload.selected_foods
            ],
        )
        return dump_meal_plan(plan)

    @app.get("/meal-plans/today")
    async def todays_meal_plans(request: Request) -> dict[str, object]:
        """Return today's logged meals with their target differences."""
        state_container: AppContainer = request.app.state.container
        service = state_container.meal_plan_service
        plans = []
        for plan in service.get_todays_meal_plans():
            difference = service.get_target_differences(plan)
            plans.append(
                {
                    **dump_meal_plan(plan),
                    "targetDifference": {
                        "calories": difference.calories,
                        "protein": difference.protein,
                        "carbs": difference.carbs,
                        "fat": difference.fat,
                    },
                }
            )
        return {"mealPlans": plans}

    @app.delete("/meal-plans/{plan_id}")
    async def delete_meal_plan(plan_id: str, request: Request) -> dict[str, str]:
        """Delete a logged meal."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_plan_service.delete_meal_plan(plan_id)
        return {"status": "ok"}

    @app.get("/progress/today")
    async def progress_today(request: Request) -> dict[str, object]:
        """Return today's consumed totals against targets."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.target_profile_service.get_profile()
        progress = state_container.meal_plan_service.get_daily_progress(profile)
        report = build_nutrient_report(
            progress, cap=state_container.settings.display_cap_percent
        )
        return _format_progress(progress, report)

    return app


def _format_progress(
    progress: DailyProgress, report: list[NutrientProgress]
) -> dict[str, object]:
    targets = dump_target_profile(
        TargetProfile(
            targets=progress.targets,
            sub_macro_targets=progress.sub_macro_targets,
            micronutrient_targets=progress.micronutrient_targets,
        )
    )
    return {
        "day": progress.day.isoformat(),
        "mealCount": progress.meal_count,
        "consumed": progress.consumed.to_dict(),
        **targets,
        "nutrients": [
            {
                "nutrient": camel_case(entry.nutrient),
                "label": entry.label,
                "unit": entry.unit,
                "current": entry.current,
                "target": entry.target,
                "percentage": entry.percentage,
                "displayPercentage": entry.display_percentage,
                "status": entry.status.value,
                "isMax": entry.is_max,
            }
            for entry in report
        ],
    }
