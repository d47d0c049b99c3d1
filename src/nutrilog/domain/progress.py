"""Domain models for daily progress against targets."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from nutrilog.domain.meals import MacroTargets
from nutrilog.domain.nutrition import Nutrition


@dataclass(frozen=True)
class SubMacroTargets:
    """Fat, sugar and fiber targets in grams."""

    omega3: float = 1.6
    monounsaturated_fat: float = 25.0
    polyunsaturated_fat: float = 15.0
    min_fiber: float = 30.0
    max_saturated_fat: float = 20.0
    max_trans_fat: float = 2.0
    max_added_sugars: float = 25.0
    max_natural_sugars: float = 50.0


@dataclass(frozen=True)
class MicronutrientTargets:
    """Vitamin and mineral targets (mg, B12 and D in μg)."""

    iron: float = 18.0
    calcium: float = 1000.0
    zinc: float = 11.0
    magnesium: float = 400.0
    sodium: float = 2300.0
    potassium: float = 3400.0
    vitamin_b6: float = 1.3
    vitamin_b12: float = 2.4
    vitamin_c: float = 90.0
    vitamin_d: float = 15.0


@dataclass(frozen=True)
class TargetProfile:
    """The three target groupings for a user."""

    targets: MacroTargets = MacroTargets(protein=150.0, carbs=200.0, fat=65.0)
    sub_macro_targets: SubMacroTargets = SubMacroTargets()
    micronutrient_targets: MicronutrientTargets = MicronutrientTargets()


DEFAULT_TARGET_PROFILE = TargetProfile()


@dataclass(frozen=True)
class DailyProgress:
    """Consumed nutrients for a day next to the active targets."""

    day: date
    consumed: Nutrition
    targets: MacroTargets
    sub_macro_targets: SubMacroTargets
    micronutrient_targets: MicronutrientTargets
    meal_count: int = 0


class ProgressStatus(Enum):
    """Classification of a nutrient's percentage of target."""

    UNDER = "under"
    COMPLETE = "complete"
    SLIGHTLY_OVER = "slightly_over"
    SIGNIFICANTLY_OVER = "significantly_over"


@dataclass(frozen=True)
class NutrientRow:
    """Declarative dashboard row for a tracked nutrient."""

    nutrient: str
    label: str
    group: str
    target_field: str
    is_max: bool = False


class TrackedNutrient(Enum):
    """Enum of dashboard nutrient rows (single source of truth)."""

    CALORIES = NutrientRow("calories", "Calories", "targets", "calories")
    PROTEIN = NutrientRow("protein", "Protein", "targets", "protein")
    CARBS = NutrientRow("carbs", "Carbs", "targets", "carbs")
    FAT = NutrientRow("fat", "Fat", "targets", "fat")
    OMEGA3 = NutrientRow("omega3", "Omega-3", "sub_macro_targets", "omega3")
    MONOUNSATURATED = NutrientRow(
        "monounsaturated_fat",
        "Monounsaturated",
        "sub_macro_targets",
        "monounsaturated_fat",
    )
    POLYUNSATURATED = NutrientRow(
        "polyunsaturated_fat",
        "Polyunsaturated",
        "sub_macro_targets",
        "polyunsaturated_fat",
    )
    FIBER = NutrientRow("fiber", "Fiber", "sub_macro_targets", "min_fiber")
    SATURATED_FAT = NutrientRow(
        "saturated_fat",
        "Saturated Fat",
        "sub_macro_targets",
        "max_saturated_fat",
        is_max=True,
    )
    TRANS_FAT = NutrientRow(
        "trans_fat", "Trans Fat", "sub_macro_targets", "max_trans_fat", is_max=True
    )
    ADDED_SUGARS = NutrientRow(
        "added_sugars",
        "Added Sugars",
        "sub_macro_targets",
        "max_added_sugars",
        is_max=True,
    )
    NATURAL_SUGARS = NutrientRow(
        "natural_sugars",
        "Natural Sugars",
        "sub_macro_targets",
        "max_natural_sugars",
        is_max=True,
    )
    IRON = NutrientRow("iron", "Iron", "micronutrient_targets", "iron")
    CALCIUM = NutrientRow("calcium", "Calcium", "micronutrient_targets", "calcium")
    ZINC = NutrientRow("zinc", "Zinc", "micronutrient_targets", "zinc")
    MAGNESIUM = NutrientRow(
        "magnesium", "Magnesium", "micronutrient_targets", "magnesium"
    )
    SODIUM = NutrientRow(
        "sodium", "Sodium", "micronutrient_targets", "sodium", is_max=True
    )
    POTASSIUM = NutrientRow(
        "potassium", "Potassium", "micronutrient_targets", "potassium"
    )
    VITAMIN_B6 = NutrientRow(
        "vitamin_b6", "Vitamin B6", "micronutrient_targets", "vitamin_b6"
    )
    VITAMIN_B12 = NutrientRow(
        "vitamin_b12", "Vitamin B12", "micronutrient_targets", "vitamin_b12"
    )
    VITAMIN_C = NutrientRow(
        "vitamin_c", "Vitamin C", "micronutrient_targets", "vitamin_c"
    )
    VITAMIN_D = NutrientRow(
        "vitamin_d", "Vitamin D", "micronutrient_targets", "vitamin_d"
    )


MAX_TYPE_NUTRIENTS = frozenset(
    member.value.nutrient for member in TrackedNutrient if member.value.is_max
)


@dataclass(frozen=True)
class NutrientProgress:
    """Progress of one nutrient toward its target."""

    nutrient: str
    label: str
    unit: str
    current: float
    target: float
    percentage: float
    display_percentage: float
    status: ProgressStatus
    is_max: bool

    @property
    def is_over_limit(self) -> bool:
        """True when a max-type nutrient exceeds its limit."""
        return self.is_max and self.percentage > 100

    @property
    def within_limit(self) -> bool:
        """True when a max-type nutrient stays at or under its limit."""
        return self.is_max and self.percentage <= 100


@dataclass(frozen=True)
class MacroDifference:
    """Rounded actual-minus-target values for a logged meal."""

    calories: int
    protein: int
    carbs: int
    fat: int
