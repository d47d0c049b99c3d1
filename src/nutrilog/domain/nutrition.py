"""Nutrition domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace

# Attribute name -> persisted key, in display order.
NUTRIENT_KEYS: dict[str, str] = {
    "calories": "calories",
    "protein": "protein",
    "carbs": "carbs",
    "fat": "fat",
    "omega3": "omega3",
    "monounsaturated_fat": "monounsaturatedFat",
    "polyunsaturated_fat": "polyunsaturatedFat",
    "saturated_fat": "saturatedFat",
    "trans_fat": "transFat",
    "added_sugars": "addedSugars",
    "natural_sugars": "naturalSugars",
    "fiber": "fiber",
    "iron": "iron",
    "calcium": "calcium",
    "zinc": "zinc",
    "magnesium": "magnesium",
    "sodium": "sodium",
    "potassium": "potassium",
    "vitamin_b6": "vitaminB6",
    "vitamin_b12": "vitaminB12",
    "vitamin_c": "vitaminC",
    "vitamin_d": "vitaminD",
}

NUTRIENT_UNITS: dict[str, str] = {
    "calories": "kcal",
    "iron": "mg",
    "calcium": "mg",
    "zinc": "mg",
    "magnesium": "mg",
    "sodium": "mg",
    "potassium": "mg",
    "vitamin_b6": "mg",
    "vitamin_b12": "μg",
    "vitamin_c": "mg",
    "vitamin_d": "μg",
}


def nutrient_unit(name: str) -> str:
    """Return the display unit for a nutrient attribute."""
    return NUTRIENT_UNITS.get(name, "g")


@dataclass(frozen=True)
class Nutrition:
    """Nutrient amounts, either per 100g or absolute."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    omega3: float = 0.0
    monounsaturated_fat: float = 0.0
    polyunsaturated_fat: float = 0.0
    saturated_fat: float = 0.0
    trans_fat: float = 0.0
    added_sugars: float = 0.0
    natural_sugars: float = 0.0
    fiber: float = 0.0
    iron: float = 0.0
    calcium: float = 0.0
    zinc: float = 0.0
    magnesium: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0
    vitamin_b6: float = 0.0
    vitamin_b12: float = 0.0
    vitamin_c: float = 0.0
    vitamin_d: float = 0.0

    @classmethod
    def zero(cls) -> "Nutrition":
        """Return a record with every nutrient set to zero."""
        return cls()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object] | None) -> "Nutrition":
        """Build from a dict keyed by persisted or attribute names.

        Unknown keys are ignored, missing or non-numeric values become zero.
        """
        if not mapping:
            return cls()
        values: dict[str, float] = {}
        for attr, key in NUTRIENT_KEYS.items():
            raw = mapping.get(key, mapping.get(attr))
            values[attr] = _to_float(raw)
        return cls(**values)

    def to_dict(self) -> dict[str, float]:
        """Return a dict keyed by persisted nutrient names."""
        return {key: getattr(self, attr) for attr, key in NUTRIENT_KEYS.items()}

    def scaled(self, factor: float) -> "Nutrition":
        """Return a copy with every nutrient multiplied by ``factor``."""
        return Nutrition(
            **{field.name: getattr(self, field.name) * factor for field in fields(self)}
        )

    def with_calories(self, calories: float) -> "Nutrition":
        """Return a copy with calories replaced."""
        return replace(self, calories=calories)

    def __add__(self, other: object) -> "Nutrition":
        if not isinstance(other, Nutrition):
            return NotImplemented
        return Nutrition(
            **{
                field.name: getattr(self, field.name) + getattr(other, field.name)
                for field in fields(self)
            }
        )


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
