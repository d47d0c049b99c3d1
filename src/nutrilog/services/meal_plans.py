"""Meal plan store: logged meals and today's progress."""

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

from nutrilog.adapters.serialization import dump_meal_plan, parse_meal_plan
from nutrilog.data.default_meals import DEFAULT_MEALS
from nutrilog.domain.meals import MealDefinition, MealPlan, SelectedFood
from nutrilog.domain.progress import DailyProgress, MacroDifference, TargetProfile
from nutrilog.services.aggregation import calculate_meal_nutrition
from nutrilog.services.catalog import FoodCatalogService
from nutrilog.services.progress import get_daily_progress, meal_target_differences
from nutrilog.services.storage import KeyValueStore

MEAL_PLANS_KEY = "mealPlans"

_logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MealPlanService:
    """Owns logged meal instances and computes their cached macros."""

    store: KeyValueStore
    catalog: FoodCatalogService
    timezone_name: str = "UTC"
    meals: Sequence[MealDefinition] = DEFAULT_MEALS
    id_factory: Callable[[], str] = _new_id
    clock: Callable[[], datetime] = _utc_now
    meal_plans: list[MealPlan] = field(default_factory=list, init=False)
    loaded: bool = field(default=False, init=False)

    def load(self) -> list[MealPlan]:
        """Restore logged meals; unreadable data starts an empty log.

        Writes stay suppressed until the store has been read successfully.
        """
        try:
            raw = self.store.get_item(MEAL_PLANS_KEY)
        except Exception:
            _logger.exception("Failed to read meal plans, starting empty")
            self.meal_plans = []
            self.loaded = False
            return []
        try:
            rows = json.loads(raw) if raw is not None else []
            if not isinstance(rows, list):
                raise ValueError("Stored meal plans payload is not a list")
            plans = [parse_meal_plan(row) for row in rows]
        except Exception:
            _logger.exception("Failed to load meal plans, starting empty")
            plans = []
        self.meal_plans = plans
        self.loaded = True
        return list(plans)

    def log_meal(
        self, meal_id: str, selected_foods: Sequence[SelectedFood]
    ) -> MealPlan:
        """Record a meal as eaten now and mark its foods as used."""
        plan = MealPlan(
            id=self.id_factory(),
            meal_id=meal_id,
            selected_foods=tuple(selected_foods),
            calculated_macros=calculate_meal_nutrition(
                selected_foods, self.catalog.snapshot()
            ),
            created_at=self.clock(),
        )
        with self.catalog.batch():
            for item in plan.selected_foods:
                self.catalog.touch_last_used(item.food_id)
        self.meal_plans.append(plan)
        self._write()
        return plan

    def update_meal_plan(
        self, plan_id: str, selected_foods: Sequence[SelectedFood]
    ) -> MealPlan | None:
        """Replace a logged meal's foods and recompute its macros."""
        for index, plan in enumerate(self.meal_plans):
            if plan.id != plan_id:
                continue
            updated = MealPlan(
                id=plan.id,
                meal_id=plan.meal_id,
                selected_foods=tuple(selected_foods),
                calculated_macros=calculate_meal_nutrition(
                    selected_foods, self.catalog.snapshot()
                ),
                created_at=plan.created_at,
            )
            self.meal_plans[index] = updated
            self._write()
            return updated
        return None

    def delete_meal_plan(self, plan_id: str) -> None:
        """Delete a logged meal; unknown ids are ignored."""
        remaining = [plan for plan in self.meal_plans if plan.id != plan_id]
        if len(remaining) == len(self.meal_plans):
            return
        self.meal_plans = remaining
        self._write()

    def get_meal_by_id(self, meal_id: str) -> MealDefinition | None:
        """Return a meal definition by id, if present."""
        return next((meal for meal in self.meals if meal.id == meal_id), None)

    def today(self) -> date:
        """Return today's calendar date in the configured timezone."""
        return self.clock().astimezone(ZoneInfo(self.timezone_name)).date()

    def get_todays_meal_plans(self) -> list[MealPlan]:
        """Return meals logged on today's local calendar date."""
        tz = ZoneInfo(self.timezone_name)
        today = self.today()
        return [
            plan
            for plan in self.meal_plans
            if plan.created_at.astimezone(tz).date() == today
        ]

    def get_meal_status_today(self) -> list[tuple[MealDefinition, bool]]:
        """Return each meal slot with whether it was logged today."""
        logged = {plan.meal_id for plan in self.get_todays_meal_plans()}
        return [(meal, meal.id in logged) for meal in self.meals]

    def get_daily_progress(self, target_profile: TargetProfile) -> DailyProgress:
        """Return today's progress against ``target_profile``."""
        return get_daily_progress(
            self.get_todays_meal_plans(),
            self.catalog.snapshot(),
            target_profile,
            day=self.today(),
        )

    def get_target_differences(self, plan: MealPlan) -> MacroDifference:
        """Return how a logged meal compares to its slot's targets."""
        return meal_target_differences(plan, self.get_meal_by_id(plan.meal_id))

    def _write(self) -> None:
        if not self.loaded:
            _logger.debug("Skipping meal plans save before load")
            return
        payload = json.dumps([dump_meal_plan(plan) for plan in self.meal_plans])
        try:
            self.store.set_item(MEAL_PLANS_KEY, payload)
        except Exception:
            _logger.exception("Failed to save meal plans")
