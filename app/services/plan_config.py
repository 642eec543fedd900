from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Union

from app.models.meal_plan import PlanTypeEnum
from app.services.nutrition_calculator import coerce_enum


@dataclass(frozen=True)
class PlanConfig:
    plan_type: PlanTypeEnum
    description: str
    min_menus: int
    max_menus: int
    calorie_ratio: float
    duration_days: int = 1
    # Fixed ceiling for plans that do not scale with the daily target
    fixed_max_calories: Optional[float] = None

    def max_total_calories(self, daily_calories: float) -> float:
        if self.fixed_max_calories is not None:
            return self.fixed_max_calories
        return daily_calories * self.calorie_ratio


PLAN_CONFIGS = MappingProxyType({
    PlanTypeEnum.single: PlanConfig(
        plan_type=PlanTypeEnum.single,
        description="Single meal plan",
        min_menus=1,
        max_menus=1,
        calorie_ratio=0.3,
        fixed_max_calories=600,
    ),
    PlanTypeEnum.half_day: PlanConfig(
        plan_type=PlanTypeEnum.half_day,
        description="Half-day meal plan",
        min_menus=1,
        max_menus=4,
        calorie_ratio=0.5,
    ),
    PlanTypeEnum.full_day: PlanConfig(
        plan_type=PlanTypeEnum.full_day,
        description="Full-day meal plan",
        min_menus=2,
        max_menus=8,
        calorie_ratio=0.9,
    ),
})


def get_plan_config(plan_type: Union[str, PlanTypeEnum]) -> PlanConfig:
    return PLAN_CONFIGS[coerce_enum(PlanTypeEnum, plan_type, "plan type")]
