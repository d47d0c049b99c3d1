"""Domain models for meal definitions and logged meals."""

from dataclasses import dataclass
from datetime import datetime

from nutrilog.domain.nutrition import Nutrition

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


def atwater_calories(protein: float, carbs: float, fat: float) -> float:
    """Return calories derived from macros with Atwater factors."""
    return (
        protein * PROTEIN_KCAL_PER_G + carbs * CARBS_KCAL_PER_G + fat * FAT_KCAL_PER_G
    )


@dataclass(frozen=True)
class MacroTargets:
    """Macro goals in grams."""

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    @property
    def calories(self) -> int:
        """Calorie goal derived from the macro goals."""
        return round(atwater_calories(self.protein, self.carbs, self.fat))


@dataclass(frozen=True)
class MealDefinition:
    """A named meal slot with its own macro targets."""

    id: str
    name: str
    macro_targets: MacroTargets


@dataclass(frozen=True)
class SelectedFood:
    """A food eaten in a meal with its portion."""

    food_id: str
    portion_grams: float


@dataclass(frozen=True)
class MealPlan:
    """One logged instance of eating a meal."""

    id: str
    meal_id: str
    selected_foods: tuple[SelectedFood, ...]
    calculated_macros: Nutrition
    created_at: datetime
