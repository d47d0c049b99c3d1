"""Food catalog store with search, recency and dish creation."""

import json
import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from nutrilog.adapters.serialization import dump_food, parse_food
from nutrilog.data.default_foods import DEFAULT_FOODS
from nutrilog.domain.foods import (
    DISH_CATEGORY,
    Food,
    FoodPatch,
    Ingredient,
    InvalidIngredientError,
    UnknownFoodError,
)
from nutrilog.domain.nutrition import Nutrition
from nutrilog.services.aggregation import (
    calculate_dish_nutrition,
    convert_to_nutrition_per_100g,
)
from nutrilog.services.storage import KeyValueStore

FOODS_KEY = "foods"

_NEVER_USED = datetime.min.replace(tzinfo=UTC)

_logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FoodCatalogService:
    """Owns the food catalog and keeps the persisted copy in sync.

    In-memory state is authoritative. Each mutation rewrites the whole
    ``foods`` key; inside :meth:`batch` the rewrite happens once on exit.
    Writes are suppressed until :meth:`load` has read the store successfully
    so an unloaded store never clobbers persisted data.
    """

    store: KeyValueStore
    id_factory: Callable[[], str] = _new_id
    clock: Callable[[], datetime] = _utc_now
    default_foods: Sequence[Food] = DEFAULT_FOODS
    foods: list[Food] = field(default_factory=list, init=False)
    filtered_foods: list[Food] = field(default_factory=list, init=False)
    search_term: str = field(default="", init=False)
    loaded: bool = field(default=False, init=False)
    _batch_depth: int = field(default=0, init=False, repr=False)
    _save_pending: bool = field(default=False, init=False, repr=False)

    def load(self) -> list[Food]:
        """Restore the catalog, seeding defaults when nothing is stored."""
        seeded = False
        try:
            raw = self.store.get_item(FOODS_KEY)
        except Exception:
            _logger.exception("Failed to read foods, using defaults until reload")
            self._reset(list(self.default_foods), loaded=False)
            return list(self.foods)
        try:
            if raw is None:
                foods = list(self.default_foods)
                seeded = True
            else:
                rows = json.loads(raw)
                if not isinstance(rows, list):
                    raise ValueError("Stored foods payload is not a list")
                foods = [parse_food(row) for row in rows]
        except Exception:
            _logger.exception("Failed to load foods, falling back to defaults")
            foods = list(self.default_foods)
        self._reset(foods, loaded=True)
        if seeded:
            _logger.info("Seeded food catalog with %s default foods", len(foods))
            self._write()
        return list(self.foods)

    def reload(self) -> list[Food]:
        """Discard in-memory state and load again from storage."""
        _logger.info("Reloading foods")
        return self.load()

    def add(
        self, name: str, category: str, nutrition_per_100g: Nutrition
    ) -> Food:
        """Append a user-added food with a fresh id and timestamps."""
        now = self.clock()
        food = Food(
            id=self.id_factory(),
            name=name,
            category=category,
            nutrition_per_100g=nutrition_per_100g,
            user_added=True,
            created_at=now,
            last_used=now,
        )
        self.foods.append(food)
        self._changed()
        return food

    def update(self, food_id: str, patch: FoodPatch) -> None:
        """Merge ``patch`` into the matching food; unknown ids are ignored."""
        index = self._index_of(food_id)
        if index is None:
            return
        self.foods[index] = patch.apply(self.foods[index])
        self._changed()

    def remove(self, food_id: str) -> None:
        """Remove a food; unknown ids are ignored.

        Dishes or meals referencing the food keep a dangling id, which
        aggregation treats as a zero contribution.
        """
        index = self._index_of(food_id)
        if index is None:
            return
        del self.foods[index]
        self._changed()

    def search(self, term: str) -> list[Food]:
        """Filter by case-insensitive name or category match and remember it."""
        self.search_term = term
        self.filtered_foods = self._filter(term)
        return list(self.filtered_foods)

    def touch_last_used(self, food_id: str) -> None:
        """Mark a food as just consumed."""
        index = self._index_of(food_id)
        if index is None:
            return
        current = self.foods[index]
        self.foods[index] = Food(
            id=current.id,
            name=current.name,
            category=current.category,
            nutrition_per_100g=current.nutrition_per_100g,
            user_added=current.user_added,
            created_at=current.created_at,
            last_used=self.clock(),
            is_dish=current.is_dish,
            ingredients=current.ingredients,
            total_grams=current.total_grams,
        )
        self._changed()

    def create_dish(self, name: str, ingredients: Sequence[Ingredient]) -> Food:
        """Create a composite food whose nutrition derives from ingredients."""
        catalog = self.snapshot()
        for item in ingredients:
            if item.food_id not in catalog:
                raise UnknownFoodError(item.food_id)
            if item.grams < 0:
                raise InvalidIngredientError(
                    f"Ingredient {item.food_id} has negative grams: {item.grams}"
                )
        total_grams = sum(item.grams for item in ingredients)
        totals = calculate_dish_nutrition(ingredients, catalog)
        now = self.clock()
        dish = Food(
            id=self.id_factory(),
            name=name,
            category=DISH_CATEGORY,
            nutrition_per_100g=convert_to_nutrition_per_100g(totals, total_grams),
            user_added=True,
            created_at=now,
            last_used=now,
            is_dish=True,
            ingredients=tuple(ingredients),
            total_grams=total_grams,
        )
        self.foods.append(dish)
        self._changed()
        return dish

    def recalculate_dish(self, dish_id: str) -> Food | None:
        """Re-derive a dish's nutrition from the current catalog."""
        index = self._index_of(dish_id)
        if index is None or not self.foods[index].is_dish:
            return None
        dish = self.foods[index]
        totals = calculate_dish_nutrition(dish.ingredients, self.snapshot())
        updated = Food(
            id=dish.id,
            name=dish.name,
            category=dish.category,
            nutrition_per_100g=convert_to_nutrition_per_100g(
                totals, dish.total_grams or 0.0
            ),
            user_added=dish.user_added,
            created_at=dish.created_at,
            last_used=dish.last_used,
            is_dish=True,
            ingredients=dish.ingredients,
            total_grams=dish.total_grams,
        )
        self.foods[index] = updated
        self._changed()
        return updated

    def get_by_id(self, food_id: str) -> Food | None:
        """Return a food by id, if present."""
        index = self._index_of(food_id)
        return self.foods[index] if index is not None else None

    def get_by_category(self, category: str) -> list[Food]:
        """Return foods in a category (exact match)."""
        return [food for food in self.foods if food.category == category]

    def get_recently_used(self, limit: int = 5) -> list[Food]:
        """Return the most recently used foods, catalog order breaking ties."""
        ranked = sorted(
            self.foods,
            key=lambda food: food.last_used or _NEVER_USED,
            reverse=True,
        )
        return ranked[: max(limit, 0)]

    def snapshot(self) -> dict[str, Food]:
        """Return the catalog keyed by id for aggregation."""
        return {food.id: food for food in self.foods}

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Coalesce the writes of several mutations into one."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._save_pending:
                self._save_pending = False
                self._write()

    def _reset(self, foods: list[Food], loaded: bool) -> None:
        self.foods = foods
        self.search_term = ""
        self.filtered_foods = list(foods)
        self.loaded = loaded

    def _changed(self) -> None:
        self.filtered_foods = self._filter(self.search_term)
        if self._batch_depth:
            self._save_pending = True
            return
        self._write()

    def _write(self) -> None:
        if not self.loaded:
            _logger.debug("Skipping foods save before load")
            return
        payload = json.dumps([dump_food(food) for food in self.foods])
        try:
            self.store.set_item(FOODS_KEY, payload)
        except Exception:
            _logger.exception("Failed to save foods")

    def _filter(self, term: str) -> list[Food]:
        needle = term.strip().lower()
        if not needle:
            return list(self.foods)
        return [
            food
            for food in self.foods
            if needle in food.name.lower() or needle in food.category.lower()
        ]

    def _index_of(self, food_id: str) -> int | None:
        for index, food in enumerate(self.foods):
            if food.id == food_id:
                return index
        return None
