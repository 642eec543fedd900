"""
Unit tests for MealPlanService.

Covered:
- create_plan: invalid selections are not stored, valid ones are persisted
  with the nutrition snapshot and a one-day window
- update_status: unknown status, missing plan, foreign plan
- get_history: pagination bounds, status filter, planned vs actual nutrition
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock

from app.core.errors import (
    ErrorCode, ForbiddenError, InvalidInputError, ResourceNotFoundError, ValidationError
)
from app.models.meal_plan import PlanStatusEnum, PlanTypeEnum
from app.repositories.health_assessment_repository import HealthAssessmentRepository
from app.repositories.meal_plan_repository import MealPlanRepository
from app.repositories.menu_repository import MenuRepository
from app.services.meal_plan_service import MealPlanService
from app.services.plan_validator import PlanValidator
from tests.factories import make_assessment, make_menu, make_plan

pytestmark = pytest.mark.unit


@pytest.fixture
def plan_repo():
    repo = AsyncMock(spec=MealPlanRepository)

    async def store(plan, menu_ids):
        plan.id = 42
        return plan

    repo.create_with_menus.side_effect = store
    return repo


@pytest.fixture
def menu_repo():
    repo = AsyncMock(spec=MenuRepository)
    repo.get_by_ids.return_value = [
        make_menu(1, calories=900, protein=70, carbs=90, fats=27),
        make_menu(2, calories=900, protein=65, carbs=90, fats=27),
    ]
    return repo


@pytest.fixture
def service(plan_repo, menu_repo):
    assessments = AsyncMock(spec=HealthAssessmentRepository)
    assessments.get_by_user_id.return_value = make_assessment(user_id=1)
    return MealPlanService(plan_repo, PlanValidator(assessments, menu_repo))


# ---------------------------------------------------------------------------
# create_plan
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_plan_persists_snapshot(service, plan_repo):
    result = await service.create_plan(1, "full_day", [1, 2])

    plan_repo.create_with_menus.assert_awaited_once()
    stored, menu_ids = plan_repo.create_with_menus.await_args.args
    assert menu_ids == [1, 2]
    assert stored.user_id == 1
    assert stored.plan_type == PlanTypeEnum.full_day
    assert stored.status == PlanStatusEnum.active
    assert stored.end_date - stored.start_date == timedelta(days=1)
    assert stored.total_calories == pytest.approx(1800)
    assert stored.total_protein == pytest.approx(135)

    assert result.plan.id == 42
    assert result.validation.is_valid is True


@pytest.mark.asyncio
async def test_create_plan_with_invalid_selection_is_not_stored(service, plan_repo, menu_repo):
    menu_repo.get_by_ids.return_value = [
        make_menu(1, calories=500, protein=70, carbs=90, fats=27),
        make_menu(2, calories=500, protein=65, carbs=90, fats=27),
    ]

    with pytest.raises(InvalidInputError) as exc_info:
        await service.create_plan(1, "full_day", [1, 2])

    assert exc_info.value.message == "Invalid menu selection"
    assert exc_info.value.data["is_valid"] is False
    assert "too far from target" in exc_info.value.data["validation_details"]["message"]
    plan_repo.create_with_menus.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_plan_propagates_structural_errors(service, plan_repo):
    with pytest.raises(ValidationError):
        await service.create_plan(1, "full_day", [1])
    plan_repo.create_with_menus.assert_not_awaited()


# ---------------------------------------------------------------------------
# update_status
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_status_changes_own_plan(service, plan_repo):
    plan = make_plan(id=5, user_id=1)
    plan_repo.get_by_id.return_value = plan

    async def apply(target, status):
        target.status = status
        return target

    plan_repo.update_status.side_effect = apply

    result = await service.update_status(5, 1, "completed")

    assert result.status == PlanStatusEnum.completed
    plan_repo.update_status.assert_awaited_once_with(plan, PlanStatusEnum.completed)


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(service, plan_repo):
    with pytest.raises(InvalidInputError):
        await service.update_status(5, 1, "paused")
    plan_repo.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_status_missing_plan(service, plan_repo):
    plan_repo.get_by_id.return_value = None

    with pytest.raises(ResourceNotFoundError):
        await service.update_status(5, 1, "cancelled")


@pytest.mark.asyncio
async def test_update_status_foreign_plan_is_forbidden(service, plan_repo):
    plan_repo.get_by_id.return_value = make_plan(id=5, user_id=2)

    with pytest.raises(ForbiddenError) as exc_info:
        await service.update_status(5, 1, "cancelled")

    assert exc_info.value.code == ErrorCode.FORBIDDEN
    plan_repo.update_status.assert_not_awaited()


# ---------------------------------------------------------------------------
# get_active_plans / get_history
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_active_plans_includes_menus(service, plan_repo):
    menus = [make_menu(1, 900, 70, 90, 27), make_menu(2, 900, 65, 90, 27)]
    plan_repo.list_active.return_value = [make_plan(id=3, menus=menus)]

    plans = await service.get_active_plans(1)

    assert len(plans) == 1
    assert [menu.id for menu in plans[0].menus] == [1, 2]


@pytest.mark.asyncio
async def test_get_history_defaults(service, plan_repo):
    plan_repo.list_history.return_value = ([], 0)

    response = await service.get_history(1)

    plan_repo.list_history.assert_awaited_once_with(1, None, 10, 0)
    assert response.data == []
    assert response.pagination.model_dump() == {"total": 0, "limit": 10, "offset": 0}


@pytest.mark.asyncio
async def test_get_history_reports_planned_and_actual_nutrition(service, plan_repo):
    menus = [make_menu(1, 800, 60, 90, 25), make_menu(2, 900, 65, 90, 27)]
    plan = make_plan(id=3, status=PlanStatusEnum.completed, menus=menus, totals=(1800, 135, 180, 54))
    plan_repo.list_history.return_value = ([plan], 1)

    response = await service.get_history(1, status="completed", limit=5, offset=0)

    plan_repo.list_history.assert_awaited_once_with(1, PlanStatusEnum.completed, 5, 0)
    item = response.data[0]
    assert item.nutrition_summary.planned.calories == pytest.approx(1800)
    assert item.nutrition_summary.actual.calories == pytest.approx(1700)
    assert item.nutrition_summary.actual.protein == pytest.approx(125)
    assert response.pagination.total == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("limit,offset", [(0, 0), (101, 0), (10, -1)])
async def test_get_history_rejects_out_of_range_paging(service, plan_repo, limit, offset):
    with pytest.raises(InvalidInputError):
        await service.get_history(1, limit=limit, offset=offset)
    plan_repo.list_history.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_history_rejects_unknown_status_filter(service):
    with pytest.raises(InvalidInputError):
        await service.get_history(1, status="archived")
