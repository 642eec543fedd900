from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_current_user, get_meal_plan_service, get_menu_service
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.meal_plan import (
    MealPlanRead, MealPlanWithMenus, PlanCreateRequest, PlanCreateResponse,
    PlanHistoryResponse, PlanInitializeRequest, PlanStatusUpdate
)
from app.schemas.menu import RecommendationResponse
from app.services.meal_plan_service import MealPlanService
from app.services.menu_service import MenuService

router = APIRouter(prefix="/meal-plans", tags=["meal-plans"])


@router.post("/initialize", response_model=ApiResponse[RecommendationResponse])
async def initialize_plan(
        data: PlanInitializeRequest,
        current_user: User = Depends(get_current_user),
        menus: MenuService = Depends(get_menu_service),
):
    """Start composing a plan: recommendations and targets for the plan type"""
    return ApiResponse(data=await menus.get_recommendations(current_user.id, data.plan_type))


@router.post("/create", response_model=ApiResponse[PlanCreateResponse], status_code=status.HTTP_201_CREATED)
async def create_plan(
        data: PlanCreateRequest,
        current_user: User = Depends(get_current_user),
        service: MealPlanService = Depends(get_meal_plan_service),
):
    result = await service.create_plan(current_user.id, data.plan_type, data.menu_ids)
    return ApiResponse(data=result)


@router.get("/active", response_model=ApiResponse[List[MealPlanWithMenus]])
async def get_active_plans(
        current_user: User = Depends(get_current_user),
        service: MealPlanService = Depends(get_meal_plan_service),
):
    return ApiResponse(data=await service.get_active_plans(current_user.id))


@router.put("/{plan_id}/status", response_model=ApiResponse[MealPlanRead])
async def update_plan_status(
        plan_id: int,
        data: PlanStatusUpdate,
        current_user: User = Depends(get_current_user),
        service: MealPlanService = Depends(get_meal_plan_service),
):
    plan = await service.update_status(plan_id, current_user.id, data.status)
    return ApiResponse(data=plan)


@router.get("/history", response_model=PlanHistoryResponse)
async def get_plan_history(
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        current_user: User = Depends(get_current_user),
        service: MealPlanService = Depends(get_meal_plan_service),
):
    """Paginated plan history with planned vs. actual nutrition"""
    return await service.get_history(current_user.id, status=status, limit=limit, offset=offset)
