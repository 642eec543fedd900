import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from app.core.errors import ForbiddenError, InvalidInputError, ResourceNotFoundError
from app.models.meal_plan import MealPlan, PlanStatusEnum
from app.repositories.meal_plan_repository import MealPlanRepository
from app.schemas.common import Pagination
from app.schemas.meal_plan import (
    MealPlanRead, MealPlanWithMenus, NutritionSummary, PlanCreateResponse,
    PlanHistoryItem, PlanHistoryResponse
)
from app.schemas.menu import MenuRead, NutritionBreakdown, SelectionValidation
from app.services.nutrition_calculator import coerce_enum
from app.services.plan_config import get_plan_config
from app.services.plan_validator import PlanValidator, sum_nutrition

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 100


def _plan_menus(plan: MealPlan) -> List[MenuRead]:
    return [MenuRead.model_validate(pm.menu) for pm in plan.plan_menus if pm.menu is not None]


class MealPlanService:
    def __init__(self, plan_repo: MealPlanRepository, validator: PlanValidator):
        self.plan_repo = plan_repo
        self.validator = validator

    async def create_plan(
        self, user_id: int, plan_type: str, menu_ids: Sequence[int]
    ) -> PlanCreateResponse:
        validation = await self.validator.validate(user_id, menu_ids, plan_type)
        if not validation.is_valid:
            raise InvalidInputError(
                "Invalid menu selection",
                data=validation.model_dump(mode="json"),
            )

        plan = await self.persist_plan(user_id, plan_type, menu_ids, validation)
        logger.info(f"Meal plan {plan.id} ({plan.plan_type.value}) created for user {user_id}")

        return PlanCreateResponse(
            plan=MealPlanRead.model_validate(plan),
            validation=validation,
        )

    async def persist_plan(
        self,
        user_id: int,
        plan_type: str,
        menu_ids: Sequence[int],
        validation: SelectionValidation,
    ) -> MealPlan:
        config = get_plan_config(plan_type)
        total = validation.total_nutrition
        start_date = datetime.utcnow()

        plan = MealPlan(
            user_id=user_id,
            plan_type=config.plan_type,
            status=PlanStatusEnum.active,
            start_date=start_date,
            end_date=start_date + timedelta(days=config.duration_days),
            total_calories=total.calories,
            total_protein=total.protein,
            total_carbs=total.carbs,
            total_fats=total.fats,
            created_at=start_date,
        )
        return await self.plan_repo.create_with_menus(plan, list(menu_ids))

    async def update_status(self, plan_id: int, user_id: int, status: str) -> MealPlanRead:
        new_status = coerce_enum(PlanStatusEnum, status, "status")

        plan = await self.plan_repo.get_by_id(plan_id)
        if plan is None:
            raise ResourceNotFoundError("Meal plan not found")
        if plan.user_id != user_id:
            raise ForbiddenError("You can only update your own meal plans")

        plan = await self.plan_repo.update_status(plan, new_status)
        return MealPlanRead.model_validate(plan)

    async def get_active_plans(self, user_id: int) -> List[MealPlanWithMenus]:
        plans = await self.plan_repo.list_active(user_id)
        return [
            MealPlanWithMenus(
                **MealPlanRead.model_validate(plan).model_dump(),
                menus=_plan_menus(plan),
            )
            for plan in plans
        ]

    async def get_history(
        self,
        user_id: int,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> PlanHistoryResponse:
        limit = DEFAULT_HISTORY_LIMIT if limit is None else limit
        offset = 0 if offset is None else offset

        if limit < 1 or limit > MAX_HISTORY_LIMIT:
            raise InvalidInputError(f"Limit must be between 1 and {MAX_HISTORY_LIMIT}")
        if offset < 0:
            raise InvalidInputError("Offset cannot be negative")

        status_filter = coerce_enum(PlanStatusEnum, status, "status filter") if status else None

        plans, total = await self.plan_repo.list_history(user_id, status_filter, limit, offset)

        items = []
        for plan in plans:
            actual = sum_nutrition([pm.menu for pm in plan.plan_menus if pm.menu is not None])
            items.append(PlanHistoryItem(
                id=plan.id,
                plan_type=plan.plan_type,
                status=plan.status,
                start_date=plan.start_date,
                end_date=plan.end_date,
                nutrition_summary=NutritionSummary(
                    planned=NutritionBreakdown(
                        calories=plan.total_calories,
                        protein=plan.total_protein,
                        carbs=plan.total_carbs,
                        fats=plan.total_fats,
                    ),
                    actual=actual,
                ),
                menus=_plan_menus(plan),
                created_at=plan.created_at,
                updated_at=plan.updated_at,
            ))

        return PlanHistoryResponse(
            data=items,
            pagination=Pagination(total=total, limit=limit, offset=offset),
        )
