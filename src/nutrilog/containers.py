"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrilog.adapters.json_file_store import JsonFileKeyValueStore
from nutrilog.adapters.supabase_kv_store import SupabaseKeyValueStore
from nutrilog.config import Settings
from nutrilog.services.catalog import FoodCatalogService
from nutrilog.services.meal_plans import MealPlanService
from nutrilog.services.storage import KeyValueStore
from nutrilog.services.targets import TargetProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    catalog_service: FoodCatalogService
    meal_plan_service: MealPlanService
    target_profile_service: TargetProfileService

    def load(self) -> None:
        """Restore persisted state into the stores."""
        self.catalog_service.load()
        self.meal_plan_service.load()


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by settings."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    if settings.storage_backend == "file":
        return JsonFileKeyValueStore(settings.data_dir)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(
    settings: Settings | None = None, store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store or build_store(resolved_settings)
    catalog_service = FoodCatalogService(resolved_store)
    meal_plan_service = MealPlanService(
        store=resolved_store,
        catalog=catalog_service,
        timezone_name=resolved_settings.timezone,
    )
    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        catalog_service=catalog_service,
        meal_plan_service=meal_plan_service,
        target_profile_service=TargetProfileService(resolved_store),
    )
