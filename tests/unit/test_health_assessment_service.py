"""Unit tests for HealthAssessmentService on a mocked repository."""

import pytest
from unittest.mock import AsyncMock

from app.core.errors import InvalidInputError, MissingFieldError
from app.models.health_assessment import (
    ActivityLevelEnum, GenderEnum, HealthGoalEnum, MacroRatioEnum
)
from app.repositories.health_assessment_repository import HealthAssessmentRepository
from app.schemas.health_assessment import HealthAssessmentCreate, HealthHistory
from app.services.health_assessment_service import HealthAssessmentService
from tests.factories import make_assessment

pytestmark = pytest.mark.unit


@pytest.fixture
def repo():
    repo = AsyncMock(spec=HealthAssessmentRepository)
    repo.get_by_user_id.return_value = None
    repo.upsert.side_effect = lambda user_id, values: make_assessment(user_id=user_id)
    return repo


@pytest.fixture
def service(repo):
    return HealthAssessmentService(repo)


def assessment_input(**overrides) -> HealthAssessmentCreate:
    data = dict(
        height=175,
        weight=70,
        age=30,
        gender="male",
        activity_level="sedentary",
        health_goal="weight_loss",
        macro_ratio="moderate_carb",
        health_history=HealthHistory(allergies=["nuts"]),
    )
    data.update(overrides)
    return HealthAssessmentCreate(**data)


@pytest.mark.asyncio
async def test_submit_stores_computed_metrics(service, repo):
    _, created = await service.submit(1, assessment_input())

    assert created is True
    user_id, values = repo.upsert.await_args.args
    assert user_id == 1
    assert values["gender"] == GenderEnum.male
    assert values["activity_level"] == ActivityLevelEnum.sedentary
    assert values["health_goal"] == HealthGoalEnum.weight_loss
    assert values["health_history"]["allergies"] == ["nuts"]
    assert values["metrics"]["final_cal"] == 1479
    assert values["metrics"]["macronutrients"] == {"protein": 154, "carbs": 130, "fats": 48}


@pytest.mark.asyncio
async def test_resubmit_reports_update(service, repo):
    repo.get_by_user_id.return_value = make_assessment(user_id=1)

    _, created = await service.submit(1, assessment_input(weight=72))

    assert created is False
    repo.upsert.assert_awaited_once()


@pytest.mark.asyncio
async def test_submit_defaults_goal_and_macro_ratio(service, repo):
    await service.submit(1, assessment_input(health_goal=None, macro_ratio=None))

    values = repo.upsert.await_args.args[1]
    assert values["health_goal"] == HealthGoalEnum.maintenance
    assert values["macro_ratio"] == MacroRatioEnum.moderate_carb
    assert values["metrics"]["final_cal"] == values["metrics"]["tdee"]


@pytest.mark.asyncio
async def test_submit_lists_missing_fields(service, repo):
    with pytest.raises(MissingFieldError) as exc_info:
        await service.submit(1, assessment_input(height=None, gender=None))

    assert exc_info.value.message == "Missing required fields: height, gender"
    repo.upsert.assert_not_awaited()


@pytest.mark.asyncio
async def test_submit_rejects_non_positive_weight(service):
    with pytest.raises(InvalidInputError) as exc_info:
        await service.submit(1, assessment_input(weight=0))
    assert exc_info.value.message == "Invalid weight value"


@pytest.mark.asyncio
async def test_submit_rejects_unknown_activity_level(service, repo):
    with pytest.raises(InvalidInputError):
        await service.submit(1, assessment_input(activity_level="extreme"))
    repo.upsert.assert_not_awaited()
