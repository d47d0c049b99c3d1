"""Default meal slots."""

from nutrilog.domain.meals import MacroTargets, MealDefinition

DEFAULT_MEALS: tuple[MealDefinition, ...] = (
    MealDefinition(
        id="breakfast",
        name="Breakfast",
        macro_targets=MacroTargets(protein=35, carbs=50, fat=15),
    ),
    MealDefinition(
        id="lunch",
        name="Lunch",
        macro_targets=MacroTargets(protein=45, carbs=60, fat=20),
    ),
    MealDefinition(
        id="dinner",
        name="Dinner",
        macro_targets=MacroTargets(protein=50, carbs=55, fat=20),
    ),
    MealDefinition(
        id="snack",
        name="Snack",
        macro_targets=MacroTargets(protein=20, carbs=35, fat=10),
    ),
)
