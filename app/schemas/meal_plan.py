from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from app.models.meal_plan import PlanTypeEnum, PlanStatusEnum
from app.schemas.common import Pagination
from app.schemas.menu import MenuRead, NutritionBreakdown, SelectionValidation


class PlanInitializeRequest(BaseModel):
    plan_type: str


class PlanCreateRequest(BaseModel):
    plan_type: str
    menu_ids: List[int] = []


class PlanStatusUpdate(BaseModel):
    status: str


class MealPlanRead(BaseModel):
    id: int
    user_id: int
    plan_type: PlanTypeEnum
    status: PlanStatusEnum
    start_date: datetime
    end_date: datetime
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fats: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MealPlanWithMenus(MealPlanRead):
    menus: List[MenuRead] = []


class PlanCreateResponse(BaseModel):
    plan: MealPlanRead
    validation: SelectionValidation


class NutritionSummary(BaseModel):
    planned: NutritionBreakdown
    actual: NutritionBreakdown


class PlanHistoryItem(BaseModel):
    id: int
    plan_type: PlanTypeEnum
    status: PlanStatusEnum
    start_date: datetime
    end_date: datetime
    nutrition_summary: NutritionSummary
    menus: List[MenuRead] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PlanHistoryResponse(BaseModel):
    success: bool = True
    data: List[PlanHistoryItem]
    pagination: Pagination
