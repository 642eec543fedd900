from pydantic import BaseModel
from typing import List, Optional

from app.models.meal_plan import PlanTypeEnum


class NutritionBreakdown(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0


class MacroTargets(BaseModel):
    protein: float
    carbs: float
    fats: float


class MenuCategoryRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class MenuRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    calories_per_serving: float
    protein_per_serving: float
    carbs_per_serving: float
    fats_per_serving: float
    serving_size: Optional[str] = None
    preparation_time: Optional[int] = None
    category: Optional[MenuCategoryRead] = None
    allergen_types: List[str] = []

    class Config:
        from_attributes = True


class ScoredMenu(MenuRead):
    score: float


class PlanDetails(BaseModel):
    plan_type: PlanTypeEnum
    min_menus: int
    max_menus: int
    calorie_ratio: float
    max_total_calories: Optional[float] = None


class TargetNutrition(BaseModel):
    daily_calories: float
    plan_calories: float
    macros: MacroTargets


class RecommendationFilters(BaseModel):
    excluded_allergens: List[str] = []


class RecommendationResponse(BaseModel):
    plan_type: PlanTypeEnum
    recommendations: List[ScoredMenu]
    plan_details: PlanDetails
    target_nutrition: TargetNutrition
    filters: RecommendationFilters


class MenuSelectionRequest(BaseModel):
    plan_type: str
    menu_ids: List[int] = []


class ValidationDetails(BaseModel):
    nutrition_score: float
    score_threshold: float
    message: str = ""


class SelectionValidation(BaseModel):
    is_valid: bool
    validation_details: ValidationDetails
    total_nutrition: NutritionBreakdown
    target_nutrition: NutritionBreakdown
    plan_details: PlanDetails
    recommendations: str
