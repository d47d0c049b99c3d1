"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from nutrilog.config import Settings
from nutrilog.containers import AppContainer, build_container
from nutrilog.domain.foods import Food
from nutrilog.domain.nutrition import Nutrition
from nutrilog.services.catalog import FoodCatalogService
from nutrilog.services.storage import KeyValueStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store that records writes."""

    items: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.items[key] = value


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store whose reads and/or writes raise."""

    fail_reads: bool = True
    fail_writes: bool = True
    items: dict[str, str] = field(default_factory=dict)
    write_attempts: int = 0

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("storage unavailable")
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise OSError("disk full")
        self.items[key] = value


@dataclass
class FakeClock:
    """Clock returning a controllable time."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class SequentialIds:
    """Id factory producing predictable ids."""

    prefix: str = "food"
    counter: int = 0

    def __call__(self) -> str:
        self.counter += 1
        return f"{self.prefix}-{self.counter}"


LETTUCE = Food(
    id="lettuce",
    name="Lettuce",
    category="vegetables",
    nutrition_per_100g=Nutrition(
        calories=15, protein=1.4, carbs=2.9, fat=0.2, fiber=1.3, vitamin_c=9.2
    ),
)
OLIVE_OIL = Food(
    id="olive-oil",
    name="Olive Oil",
    category="fats",
    nutrition_per_100g=Nutrition(
        calories=884, fat=100, saturated_fat=13.8, monounsaturated_fat=73
    ),
)
CHICKEN = Food(
    id="chicken",
    name="Chicken Breast",
    category="protein",
    nutrition_per_100g=Nutrition(
        calories=165, protein=31, fat=3.6, sodium=74, iron=1.0
    ),
)
RICE = Food(
    id="rice",
    name="White Rice",
    category="carbs",
    nutrition_per_100g=Nutrition(calories=130, protein=2.7, carbs=28, fat=0.3),
)

TEST_FOODS = (LETTUCE, OLIVE_OIL, CHICKEN, RICE)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog_service(
    store: InMemoryKeyValueStore, clock: FakeClock
) -> FoodCatalogService:
    service = FoodCatalogService(
        store,
        id_factory=SequentialIds(),
        clock=clock,
        default_foods=TEST_FOODS,
    )
    service.load()
    store.writes.clear()
    return service


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_backend="file", data_dir=tmp_path, timezone="UTC")


@pytest.fixture
def container(settings: Settings, store: InMemoryKeyValueStore) -> AppContainer:
    return build_container(settings, store=store)


@pytest.fixture(autouse=True)
def _reset_app_logger():
    yield
    logger = logging.getLogger("nutrilog")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
