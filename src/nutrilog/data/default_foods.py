"""Default food catalog used to seed an empty store."""

from nutrilog.domain.foods import Food
from nutrilog.domain.nutrition import Nutrition

DEFAULT_FOODS: tuple[Food, ...] = (
    Food(
        id="chicken-breast",
        name="Chicken Breast",
        category="protein",
        nutrition_per_100g=Nutrition(
            calories=165,
            protein=31,
            fat=3.6,
            omega3=0.03,
            monounsaturated_fat=1.2,
            polyunsaturated_fat=0.8,
            saturated_fat=1.0,
            iron=1.0,
            calcium=15,
            zinc=1.0,
            magnesium=29,
            sodium=74,
            potassium=256,
            vitamin_b6=0.6,
            vitamin_b12=0.3,
            vitamin_d=0.1,
        ),
    ),
    Food(
        id="salmon",
        name="Salmon",
        category="protein",
        nutrition_per_100g=Nutrition(
            calories=208,
            protein=20,
            fat=13,
            omega3=2.3,
            monounsaturated_fat=3.8,
            polyunsaturated_fat=3.9,
            saturated_fat=3.1,
            iron=0.3,
            calcium=9,
            zinc=0.4,
            magnesium=27,
            sodium=59,
            potassium=363,
            vitamin_b6=0.6,
            vitamin_b12=3.2,
            vitamin_d=11,
        ),
    ),
    Food(
        id="egg",
        name="Egg",
        category="protein",
        nutrition_per_100g=Nutrition(
            calories=155,
            protein=13,
            carbs=1.1,
            fat=11,
            omega3=0.1,
            monounsaturated_fat=4.1,
            polyunsaturated_fat=1.9,
            saturated_fat=3.3,
            natural_sugars=1.1,
            iron=1.8,
            calcium=56,
            zinc=1.3,
            magnesium=12,
            sodium=124,
            potassium=126,
            vitamin_b6=0.2,
            vitamin_b12=1.1,
            vitamin_d=2.0,
        ),
    ),
    Food(
        id="white-rice",
        name="White Rice (cooked)",
        category="carbs",
        nutrition_per_100g=Nutrition(
            calories=130,
            protein=2.7,
            carbs=28,
            fat=0.3,
            fiber=0.4,
            iron=0.2,
            calcium=10,
            zinc=0.5,
            magnesium=12,
            sodium=1,
            potassium=35,
            vitamin_b6=0.1,
        ),
    ),
    Food(
        id="oats",
        name="Oats",
        category="carbs",
        nutrition_per_100g=Nutrition(
            calories=389,
            protein=16.9,
            carbs=66.3,
            fat=6.9,
            monounsaturated_fat=2.2,
            polyunsaturated_fat=2.5,
            saturated_fat=1.2,
            natural_sugars=1.0,
            fiber=10.6,
            iron=4.7,
            calcium=54,
            zinc=4.0,
            magnesium=177,
            sodium=2,
            potassium=429,
            vitamin_b6=0.1,
        ),
    ),
    Food(
        id="banana",
        name="Banana",
        category="fruits",
        nutrition_per_100g=Nutrition(
            calories=89,
            protein=1.1,
            carbs=22.8,
            fat=0.3,
            natural_sugars=12.2,
            fiber=2.6,
            iron=0.3,
            calcium=5,
            zinc=0.2,
            magnesium=27,
            sodium=1,
            potassium=358,
            vitamin_b6=0.4,
            vitamin_c=8.7,
        ),
    ),
    Food(
        id="broccoli",
        name="Broccoli",
        category="vegetables",
        nutrition_per_100g=Nutrition(
            calories=34,
            protein=2.8,
            carbs=6.6,
            fat=0.4,
            natural_sugars=1.7,
            fiber=2.6,
            iron=0.7,
            calcium=47,
            zinc=0.4,
            magnesium=21,
            sodium=33,
            potassium=316,
            vitamin_b6=0.2,
            vitamin_c=89.2,
        ),
    ),
    Food(
        id="lettuce",
        name="Lettuce",
        category="vegetables",
        nutrition_per_100g=Nutrition(
            calories=15,
            protein=1.4,
            carbs=2.9,
            fat=0.2,
            natural_sugars=0.8,
            fiber=1.3,
            iron=0.9,
            calcium=36,
            zinc=0.2,
            magnesium=13,
            sodium=28,
            potassium=194,
            vitamin_c=9.2,
        ),
    ),
    Food(
        id="olive-oil",
        name="Olive Oil",
        category="fats",
        nutrition_per_100g=Nutrition(
            calories=884,
            fat=100,
            omega3=0.8,
            monounsaturated_fat=73,
            polyunsaturated_fat=10.5,
            saturated_fat=13.8,
            iron=0.6,
            calcium=1,
            potassium=1,
        ),
    ),
    Food(
        id="greek-yogurt",
        name="Greek Yogurt",
        category="dairy",
        nutrition_per_100g=Nutrition(
            calories=59,
            protein=10,
            carbs=3.6,
            fat=0.4,
            saturated_fat=0.1,
            natural_sugars=3.2,
            calcium=110,
            zinc=0.5,
            magnesium=11,
            sodium=36,
            potassium=141,
            vitamin_b12=0.8,
        ),
    ),
)
