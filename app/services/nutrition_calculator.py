import math
from types import MappingProxyType
from typing import Dict, Optional, Union

from app.core.errors import InvalidInputError
from app.models.health_assessment import (
    ActivityLevelEnum,
    BMICategoryEnum,
    GenderEnum,
    HealthGoalEnum,
    MacroRatioEnum,
)


def round_half_up(value: float) -> int:
    """Integer rounding where .5 always goes up (round() would go to even)."""
    return int(math.floor(value + 0.5))


def coerce_enum(enum_cls, value, field: str):
    """Map a raw string (or enum member) onto enum_cls, InvalidInputError otherwise."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidInputError(f"Invalid {field} '{value}'. Must be one of: {allowed}")


class NutritionCalculator:
    ACTIVITY_MULTIPLIERS = MappingProxyType({
        ActivityLevelEnum.sedentary: 1.2,
        ActivityLevelEnum.light: 1.375,
        ActivityLevelEnum.moderate: 1.55,
        ActivityLevelEnum.active: 1.725,
        ActivityLevelEnum.very_active: 1.9,
    })

    PROTEIN_PER_KG = MappingProxyType({
        HealthGoalEnum.muscle_gain: 2.0,
        HealthGoalEnum.weight_loss: 2.2,
        HealthGoalEnum.maintenance: 1.6,
    })

    MACRO_RATIOS = MappingProxyType({
        MacroRatioEnum.moderate_carb: MappingProxyType({"carbs": 0.50, "fats": 0.50}),
        MacroRatioEnum.lower_carb: MappingProxyType({"carbs": 0.25, "fats": 0.75}),
        MacroRatioEnum.higher_carb: MappingProxyType({"carbs": 0.70, "fats": 0.30}),
    })

    # Older clients still send "fat_loss"
    GOAL_ALIASES = MappingProxyType({"fat_loss": HealthGoalEnum.weight_loss})

    CALORIE_SURPLUS = 500
    CALORIE_DEFICIT = 500
    MIN_DAILY_CALORIES = 1200
    MIN_CARB_GRAMS = 130
    MIN_FAT_GRAMS_PER_KG = 0.5
    ADJUSTED_WEIGHT_FACTOR = 0.25

    @staticmethod
    def _require_positive(value, field: str) -> float:
        if value is None or isinstance(value, bool) or value <= 0:
            raise InvalidInputError(f"Invalid {field} value")
        return value

    @classmethod
    def parse_goal(cls, goal: Union[str, HealthGoalEnum, None]) -> HealthGoalEnum:
        if goal is None:
            return HealthGoalEnum.maintenance
        if isinstance(goal, str) and goal in cls.GOAL_ALIASES:
            return cls.GOAL_ALIASES[goal]
        return coerce_enum(HealthGoalEnum, goal, "health goal")

    @classmethod
    def parse_macro_ratio(cls, macro_ratio: Union[str, MacroRatioEnum, None]) -> MacroRatioEnum:
        if macro_ratio is None:
            return MacroRatioEnum.moderate_carb
        return coerce_enum(MacroRatioEnum, macro_ratio, "macro ratio")

    @classmethod
    def calculate_bmi(cls, weight: float, height: float) -> float:
        cls._require_positive(weight, "weight")
        cls._require_positive(height, "height")
        height_m = height / 100
        return round(weight / (height_m * height_m), 2)

    @classmethod
    def get_bmi_category(cls, bmi: float) -> BMICategoryEnum:
        if bmi < 18.5:
            return BMICategoryEnum.underweight
        if bmi < 25:
            return BMICategoryEnum.normal
        if bmi < 30:
            return BMICategoryEnum.overweight
        return BMICategoryEnum.obese

    @classmethod
    def calculate_bmr(cls, weight: float, height: float, age: int, gender: Union[str, GenderEnum]) -> int:
        cls._require_positive(weight, "weight")
        cls._require_positive(height, "height")
        cls._require_positive(age, "age")
        gender = coerce_enum(GenderEnum, gender, "gender")

        base = 10 * weight + 6.25 * height - 5 * age
        if gender == GenderEnum.male:
            return round_half_up(base + 5)
        return round_half_up(base - 151)

    @classmethod
    def calculate_tdee(cls, bmr: int, activity_level: Union[str, ActivityLevelEnum]) -> int:
        level = coerce_enum(ActivityLevelEnum, activity_level, "activity level")
        return round_half_up(bmr * cls.ACTIVITY_MULTIPLIERS[level])

    @classmethod
    def calculate_final_calories(cls, tdee: int, goal: Union[str, HealthGoalEnum, None]) -> int:
        goal = cls.parse_goal(goal)
        if goal == HealthGoalEnum.muscle_gain:
            return round_half_up(tdee + cls.CALORIE_SURPLUS)
        if goal == HealthGoalEnum.weight_loss:
            return round_half_up(max(tdee - cls.CALORIE_DEFICIT, cls.MIN_DAILY_CALORIES))
        return round_half_up(tdee)

    @staticmethod
    def calculate_ideal_weight(height: float) -> float:
        """Devine-style ideal weight in kg; height is converted to inches."""
        return 48.0 + 2.7 * (height / 2.54 - 60)

    @classmethod
    def calculate_macronutrients(
        cls,
        weight: float,
        height: float,
        goal: Union[str, HealthGoalEnum, None],
        bmi_category: Union[str, BMICategoryEnum],
        macro_ratio: Union[str, MacroRatioEnum, None],
        final_cal: int,
    ) -> Dict[str, int]:
        cls._require_positive(weight, "weight")
        cls._require_positive(height, "height")
        goal = cls.parse_goal(goal)
        bmi_category = coerce_enum(BMICategoryEnum, bmi_category, "BMI category")
        ratio = cls.MACRO_RATIOS[cls.parse_macro_ratio(macro_ratio)]

        protein_per_kg = cls.PROTEIN_PER_KG[goal]

        adjusted_weight = weight
        if bmi_category in (BMICategoryEnum.overweight, BMICategoryEnum.obese):
            ideal_weight = cls.calculate_ideal_weight(height)
            adjusted_weight = ideal_weight + cls.ADJUSTED_WEIGHT_FACTOR * (weight - ideal_weight)

        protein_grams = max(0, round_half_up(adjusted_weight * protein_per_kg))
        remaining_cals = final_cal - protein_grams * 4

        carb_cals = remaining_cals * ratio["carbs"]
        fat_cals = remaining_cals * ratio["fats"]

        carb_grams = max(cls.MIN_CARB_GRAMS, round_half_up(carb_cals / 4))
        fat_grams = max(round_half_up(weight * cls.MIN_FAT_GRAMS_PER_KG), round_half_up(fat_cals / 9))

        return {
            "protein": protein_grams,
            "carbs": carb_grams,
            "fats": fat_grams,
        }

    @classmethod
    def calculate_metrics(
        cls,
        weight: float,
        height: float,
        age: int,
        gender: Union[str, GenderEnum],
        activity_level: Union[str, ActivityLevelEnum],
        goal: Optional[Union[str, HealthGoalEnum]] = None,
        macro_ratio: Optional[Union[str, MacroRatioEnum]] = None,
    ) -> Dict:
        """Full pipeline from body measurements to the stored metrics record."""
        bmi = cls.calculate_bmi(weight, height)
        bmi_category = cls.get_bmi_category(bmi)
        bmr = cls.calculate_bmr(weight, height, age, gender)
        tdee = cls.calculate_tdee(bmr, activity_level)
        final_cal = cls.calculate_final_calories(tdee, goal)
        macronutrients = cls.calculate_macronutrients(
            weight, height, goal, bmi_category, macro_ratio, final_cal
        )

        return {
            "bmi": bmi,
            "bmi_category": bmi_category.value,
            "bmr": bmr,
            "tdee": tdee,
            "final_cal": final_cal,
            "macronutrients": macronutrients,
        }
