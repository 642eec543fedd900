from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_current_user, get_menu_service, get_plan_validator
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.menu import (
    MenuRead, MenuSelectionRequest, RecommendationResponse, SelectionValidation
)
from app.services.menu_service import MenuService
from app.services.plan_validator import PlanValidator

router = APIRouter(prefix="/menus", tags=["menus"])


@router.get("/search", response_model=ApiResponse[List[MenuRead]])
async def search_menus(
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        min_calories: Optional[float] = None,
        max_calories: Optional[float] = None,
        service: MenuService = Depends(get_menu_service),
):
    """Search active menus by name or description"""
    menus = await service.search(
        search,
        category_id=category_id,
        min_calories=min_calories,
        max_calories=max_calories,
    )
    return ApiResponse(data=[MenuRead.model_validate(menu) for menu in menus])


@router.get("/category/{category}", response_model=ApiResponse[List[MenuRead]])
async def get_menus_by_category(
        category: str,
        min_calories: Optional[float] = None,
        max_calories: Optional[float] = None,
        min_protein: Optional[float] = None,
        exclude_allergens: Optional[str] = Query(None, description="Comma separated allergen types"),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        service: MenuService = Depends(get_menu_service),
):
    allergens = [a.strip() for a in exclude_allergens.split(",") if a.strip()] if exclude_allergens else []
    menus = await service.get_by_category(
        category,
        min_calories=min_calories,
        max_calories=max_calories,
        min_protein=min_protein,
        exclude_allergens=allergens,
        page=page,
        limit=limit,
    )
    return ApiResponse(data=[MenuRead.model_validate(menu) for menu in menus])


@router.get("/recommended", response_model=ApiResponse[RecommendationResponse])
async def get_recommended_menus(
        plan_type: str = "single",
        current_user: User = Depends(get_current_user),
        service: MenuService = Depends(get_menu_service),
):
    """Active menus ranked by how well they fit the user's macro targets"""
    return ApiResponse(data=await service.get_recommendations(current_user.id, plan_type))


@router.post("/validate-selection", response_model=ApiResponse[SelectionValidation])
async def validate_menu_selection(
        data: MenuSelectionRequest,
        current_user: User = Depends(get_current_user),
        validator: PlanValidator = Depends(get_plan_validator),
):
    """Check a selection against the plan rules; an invalid result is still a 200"""
    result = await validator.validate(current_user.id, data.menu_ids, data.plan_type)
    return ApiResponse(data=result)
