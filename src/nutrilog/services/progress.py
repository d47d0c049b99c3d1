"""Daily progress against target profiles."""

from collections.abc import Iterable
from datetime import date

from nutrilog.domain.meals import MealDefinition, MealPlan
from nutrilog.domain.nutrition import Nutrition, nutrient_unit
from nutrilog.domain.progress import (
    DailyProgress,
    MacroDifference,
    NutrientProgress,
    ProgressStatus,
    TargetProfile,
    TrackedNutrient,
)
from nutrilog.services.aggregation import (
    Catalog,
    calculate_meal_nutrition,
    index_catalog,
)

DISPLAY_CAP_PERCENT = 150.0
COMPLETE_LOWER_PERCENT = 95.0
COMPLETE_UPPER_PERCENT = 105.0
SLIGHTLY_OVER_UPPER_PERCENT = 120.0


def get_daily_progress(
    todays_meals: Iterable[MealPlan],
    catalog: Catalog,
    target_profile: TargetProfile,
    day: date,
) -> DailyProgress:
    """Sum the logged meals for ``day`` and pair them with the active targets.

    ``day`` is the caller's local calendar date; this module has no clock.

    Meals logged before macros were cached are computed from the catalog.
    """
    foods = index_catalog(catalog)
    consumed = Nutrition.zero()
    meal_count = 0
    for plan in todays_meals:
        consumed = consumed + _meal_macros(plan, foods)
        meal_count += 1
    return DailyProgress(
        day=day,
        consumed=consumed,
        targets=target_profile.targets,
        sub_macro_targets=target_profile.sub_macro_targets,
        micronutrient_targets=target_profile.micronutrient_targets,
        meal_count=meal_count,
    )


def actual_percentage(current: float, target: float) -> float:
    """Return current as an uncapped percentage of target."""
    if target <= 0:
        return 0.0
    return current / target * 100.0


def display_percentage(percentage: float, cap: float = DISPLAY_CAP_PERCENT) -> float:
    """Cap a percentage for bounded visuals."""
    return min(cap, percentage)


def classify_percentage(percentage: float) -> ProgressStatus:
    """Classify a percentage into a progress band."""
    if percentage < COMPLETE_LOWER_PERCENT:
        return ProgressStatus.UNDER
    if percentage <= COMPLETE_UPPER_PERCENT:
        return ProgressStatus.COMPLETE
    if percentage <= SLIGHTLY_OVER_UPPER_PERCENT:
        return ProgressStatus.SLIGHTLY_OVER
    return ProgressStatus.SIGNIFICANTLY_OVER


def classify(current: float, target: float) -> ProgressStatus:
    """Classify progress of ``current`` toward ``target``."""
    return classify_percentage(actual_percentage(current, target))


def nutrient_progress(
    nutrient: TrackedNutrient,
    progress: DailyProgress,
    cap: float = DISPLAY_CAP_PERCENT,
) -> NutrientProgress:
    """Build the progress entry for one tracked nutrient."""
    row = nutrient.value
    current = float(getattr(progress.consumed, row.nutrient))
    target = float(getattr(getattr(progress, row.group), row.target_field))
    percentage = actual_percentage(current, target)
    return NutrientProgress(
        nutrient=row.nutrient,
        label=row.label,
        unit=nutrient_unit(row.nutrient),
        current=current,
        target=target,
        percentage=percentage,
        display_percentage=display_percentage(percentage, cap),
        status=classify_percentage(percentage),
        is_max=row.is_max,
    )


def build_nutrient_report(
    progress: DailyProgress, cap: float = DISPLAY_CAP_PERCENT
) -> list[NutrientProgress]:
    """Return progress entries for every tracked nutrient in dashboard order."""
    return [nutrient_progress(nutrient, progress, cap) for nutrient in TrackedNutrient]


def meal_target_differences(
    plan: MealPlan, meal: MealDefinition | None
) -> MacroDifference:
    """Return rounded actual-minus-target macros for a logged meal."""
    actual = plan.calculated_macros
    targets = meal.macro_targets if meal else None
    return MacroDifference(
        calories=round(actual.calories) - (targets.calories if targets else 0),
        protein=round(actual.protein) - round(targets.protein if targets else 0),
        carbs=round(actual.carbs) - round(targets.carbs if targets else 0),
        fat=round(actual.fat) - round(targets.fat if targets else 0),
    )


def _meal_macros(plan: MealPlan, foods: Catalog) -> Nutrition:
    if plan.calculated_macros == Nutrition.zero() and plan.selected_foods:
        return calculate_meal_nutrition(plan.selected_foods, foods)
    return plan.calculated_macros
