"""Tests for the food catalog service."""

import json
from datetime import UTC, datetime

import pytest

from nutrilog.adapters.serialization import dump_food
from nutrilog.data.default_foods import DEFAULT_FOODS
from nutrilog.domain.foods import (
    Food,
    FoodPatch,
    Ingredient,
    InvalidIngredientError,
    UnknownFoodError,
)
from nutrilog.domain.nutrition import Nutrition
from nutrilog.services.catalog import FOODS_KEY, FoodCatalogService
from tests.conftest import (
    TEST_FOODS,
    FailingKeyValueStore,
    FakeClock,
    InMemoryKeyValueStore,
    SequentialIds,
)


def _stored_ids(store: InMemoryKeyValueStore) -> list[str]:
    return [row["id"] for row in json.loads(store.items[FOODS_KEY])]


def test_load_seeds_defaults_and_persists() -> None:
    store = InMemoryKeyValueStore()
    service = FoodCatalogService(store)

    foods = service.load()

    assert [food.id for food in foods] == [food.id for food in DEFAULT_FOODS]
    assert _stored_ids(store) == [food.id for food in DEFAULT_FOODS]
    assert service.filtered_foods == foods


def test_load_restores_stored_catalog() -> None:
    stored = [dump_food(TEST_FOODS[2])]
    store = InMemoryKeyValueStore(items={FOODS_KEY: json.dumps(stored)})
    service = FoodCatalogService(store)

    foods = service.load()

    assert foods == [TEST_FOODS[2]]
    assert store.writes == []


def test_load_falls_back_to_defaults_on_corrupt_data(caplog) -> None:
    store = InMemoryKeyValueStore(items={FOODS_KEY: "{not json"})
    service = FoodCatalogService(store, default_foods=TEST_FOODS)

    foods = service.load()

    assert foods == list(TEST_FOODS)
    assert "Failed to load foods" in caplog.text


def test_load_falls_back_to_defaults_on_read_error() -> None:
    service = FoodCatalogService(FailingKeyValueStore(), default_foods=TEST_FOODS)

    assert service.load() == list(TEST_FOODS)


def test_add_assigns_id_and_timestamps(catalog_service, store, clock) -> None:
    food = catalog_service.add("Tofu", "protein", Nutrition(protein=8, fat=4.8))

    assert food.id == "food-1"
    assert food.user_added is True
    assert food.created_at == clock.now
    assert food.last_used == clock.now
    assert catalog_service.foods[-1] == food
    assert _stored_ids(store)[-1] == "food-1"


def test_add_generates_distinct_ids_for_rapid_creation() -> None:
    service = FoodCatalogService(InMemoryKeyValueStore(), default_foods=())
    service.load()

    first = service.add("A", "misc", Nutrition())
    second = service.add("B", "misc", Nutrition())

    assert first.id != second.id


def test_update_merges_present_fields(catalog_service, store) -> None:
    catalog_service.update("chicken", FoodPatch(name="Grilled Chicken"))

    food = catalog_service.get_by_id("chicken")
    assert food is not None
    assert food.name == "Grilled Chicken"
    assert food.category == "protein"
    assert food.nutrition_per_100g == TEST_FOODS[2].nutrition_per_100g
    assert store.writes == [FOODS_KEY]


def test_update_with_empty_patch_keeps_record(catalog_service) -> None:
    before = catalog_service.get_by_id("rice")

    catalog_service.update("rice", FoodPatch())

    assert catalog_service.get_by_id("rice") == before


def test_update_unknown_id_is_noop(catalog_service, store) -> None:
    catalog_service.update("missing", FoodPatch(name="Nope"))

    assert catalog_service.foods == list(TEST_FOODS)
    assert store.writes == []


def test_patch_from_mapping_reads_camel_case() -> None:
    patch = FoodPatch.from_mapping(
        {"category": "greens", "nutritionPer100g": {"protein": 2}}
    )

    assert patch.name is None
    assert patch.category == "greens"
    assert patch.nutrition_per_100g == Nutrition(protein=2)


def test_remove_deletes_and_ignores_unknown(catalog_service, store) -> None:
    catalog_service.remove("lettuce")
    catalog_service.remove("lettuce")

    assert catalog_service.get_by_id("lettuce") is None
    assert len(catalog_service.foods) == len(TEST_FOODS) - 1
    assert store.writes == [FOODS_KEY]


def test_search_matches_name_or_category_case_insensitive(catalog_service) -> None:
    assert [food.id for food in catalog_service.search("CHICK")] == ["chicken"]
    assert [food.id for food in catalog_service.search("fats")] == ["olive-oil"]
    assert catalog_service.search_term == "fats"


def test_empty_search_returns_everything(catalog_service) -> None:
    assert catalog_service.search("") == list(TEST_FOODS)


def test_search_term_is_reapplied_after_mutation(catalog_service) -> None:
    catalog_service.search("protein")

    catalog_service.add("Tempeh", "protein", Nutrition(protein=19))

    assert [food.name for food in catalog_service.filtered_foods] == [
        "Chicken Breast",
        "Tempeh",
    ]


def test_touch_last_used_updates_timestamp(catalog_service, clock) -> None:
    clock.advance(hours=2)

    catalog_service.touch_last_used("rice")

    food = catalog_service.get_by_id("rice")
    assert food is not None
    assert food.last_used == clock.now


def test_get_by_category(catalog_service) -> None:
    assert catalog_service.get_by_category("vegetables") == [TEST_FOODS[0]]
    assert catalog_service.get_by_category("Vegetables") == []


def test_recently_used_orders_descending_with_stable_ties() -> None:
    base = datetime(2024, 1, 1, tzinfo=UTC)
    foods = [
        Food("a", "A", "x", Nutrition(), last_used=base.replace(hour=1)),
        Food("b", "B", "x", Nutrition(), last_used=base.replace(hour=3)),
        Food("c", "C", "x", Nutrition(), last_used=base.replace(hour=2)),
        Food("d", "D", "x", Nutrition(), last_used=base.replace(hour=4)),
        Food("e", "E", "x", Nutrition(), last_used=base.replace(hour=3)),
        Food("f", "F", "x", Nutrition(), last_used=None),
    ]
    service = FoodCatalogService(InMemoryKeyValueStore(), default_foods=foods)
    service.load()

    assert [food.id for food in service.get_recently_used(3)] == ["d", "b", "e"]
    assert [food.id for food in service.get_recently_used(10)][-1] == "f"
    assert len(service.get_recently_used()) == 5


def test_create_dish_derives_per_100g(catalog_service, store) -> None:
    dish = catalog_service.create_dish(
        "Salad", [Ingredient("lettuce", 100), Ingredient("olive-oil", 10)]
    )

    assert dish.is_dish is True
    assert dish.category == "dishes"
    assert dish.total_grams == 110
    assert dish.nutrition_per_100g.calories == pytest.approx(94.0, abs=0.1)
    assert dish.nutrition_per_100g.fat == pytest.approx(10.2 / 110 * 100)
    assert catalog_service.get_by_id(dish.id) == dish
    stored = json.loads(store.items[FOODS_KEY])[-1]
    assert stored["isDish"] is True
    assert stored["ingredients"][1] == {"foodId": "olive-oil", "grams": 10}


def test_create_dish_rejects_unknown_food(catalog_service) -> None:
    with pytest.raises(UnknownFoodError):
        catalog_service.create_dish("Mystery", [Ingredient("missing", 50)])

    assert len(catalog_service.foods) == len(TEST_FOODS)


def test_create_dish_rejects_negative_grams(catalog_service) -> None:
    with pytest.raises(InvalidIngredientError):
        catalog_service.create_dish("Bad", [Ingredient("rice", -5)])


def test_create_dish_with_zero_grams_has_zero_nutrition(catalog_service) -> None:
    dish = catalog_service.create_dish("Air", [Ingredient("rice", 0)])

    assert dish.total_grams == 0
    assert dish.nutrition_per_100g == Nutrition.zero()


def test_dish_nutrition_patch_is_ignored(catalog_service) -> None:
    dish = catalog_service.create_dish("Rice bowl", [Ingredient("rice", 200)])

    catalog_service.update(
        dish.id, FoodPatch(name="Bowl", nutrition_per_100g=Nutrition(protein=99))
    )

    updated = catalog_service.get_by_id(dish.id)
    assert updated is not None
    assert updated.name == "Bowl"
    assert updated.nutrition_per_100g == dish.nutrition_per_100g


def test_recalculate_dish_after_ingredient_deleted(catalog_service) -> None:
    dish = catalog_service.create_dish(
        "Salad", [Ingredient("lettuce", 100), Ingredient("olive-oil", 10)]
    )
    catalog_service.remove("olive-oil")

    updated = catalog_service.recalculate_dish(dish.id)

    assert updated is not None
    assert updated.nutrition_per_100g.calories == pytest.approx(15 / 110 * 100)
    assert catalog_service.recalculate_dish("lettuce") is None


def test_batch_coalesces_writes(catalog_service, store) -> None:
    with catalog_service.batch():
        catalog_service.add("A", "misc", Nutrition())
        catalog_service.touch_last_used("rice")
        catalog_service.remove("lettuce")
        assert store.writes == []

    assert store.writes == [FOODS_KEY]


def test_write_failure_keeps_memory_state(caplog) -> None:
    store = FailingKeyValueStore(fail_reads=False, fail_writes=True)
    service = FoodCatalogService(
        store, id_factory=SequentialIds(), clock=FakeClock(), default_foods=TEST_FOODS
    )
    service.load()

    food = service.add("Tofu", "protein", Nutrition(protein=8))

    assert service.get_by_id(food.id) == food
    assert "Failed to save foods" in caplog.text

    store.fail_writes = False
    service.touch_last_used(food.id)

    assert food.id in store.items[FOODS_KEY]


def test_mutations_before_load_are_not_persisted() -> None:
    store = InMemoryKeyValueStore()
    service = FoodCatalogService(store)

    service.add("Early", "misc", Nutrition())

    assert store.writes == []


def test_reload_discards_unsaved_state() -> None:
    store = InMemoryKeyValueStore()
    service = FoodCatalogService(store, default_foods=TEST_FOODS)
    service.load()
    store.items[FOODS_KEY] = json.dumps([dump_food(TEST_FOODS[0])])

    assert service.reload() == [TEST_FOODS[0]]


def test_read_failure_suppresses_writes_until_reload() -> None:
    mine = Food("mine", "My Granola", "carbs", Nutrition(carbs=60), user_added=True)
    store = FailingKeyValueStore(
        fail_reads=True,
        fail_writes=False,
        items={FOODS_KEY: json.dumps([dump_food(mine)])},
    )
    service = FoodCatalogService(store, clock=FakeClock(), default_foods=TEST_FOODS)

    assert service.load() == list(TEST_FOODS)
    assert service.loaded is False
    service.touch_last_used("rice")
    service.add("Tofu", "protein", Nutrition(protein=8))

    assert store.write_attempts == 0
    assert [row["id"] for row in json.loads(store.items[FOODS_KEY])] == ["mine"]

    store.fail_reads = False
    assert service.reload() == [mine]
    assert service.loaded is True
