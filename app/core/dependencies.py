from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.errors import AppError, ErrorCode, UnauthorizedError
from app.models.user import User
from app.repositories.health_assessment_repository import HealthAssessmentRepository
from app.repositories.meal_plan_repository import MealPlanRepository
from app.repositories.menu_repository import MenuRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.services.auth_service import auth_service
from app.services.health_assessment_service import HealthAssessmentService
from app.services.meal_plan_service import MealPlanService
from app.services.menu_service import MenuService
from app.services.plan_validator import PlanValidator


security = HTTPBearer(auto_error=False)


# Repository factories, injected into endpoints through Depends and
# replaced by mocks in tests.

def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_session_repository(db: AsyncSession = Depends(get_db)) -> SessionRepository:
    return SessionRepository(db)


def get_health_assessment_repository(db: AsyncSession = Depends(get_db)) -> HealthAssessmentRepository:
    return HealthAssessmentRepository(db)


def get_menu_repository(db: AsyncSession = Depends(get_db)) -> MenuRepository:
    return MenuRepository(db)


def get_meal_plan_repository(db: AsyncSession = Depends(get_db)) -> MealPlanRepository:
    return MealPlanRepository(db)


def get_plan_validator(
        assessments: HealthAssessmentRepository = Depends(get_health_assessment_repository),
        menus: MenuRepository = Depends(get_menu_repository),
) -> PlanValidator:
    return PlanValidator(assessments, menus)


def get_health_assessment_service(
        assessments: HealthAssessmentRepository = Depends(get_health_assessment_repository),
) -> HealthAssessmentService:
    return HealthAssessmentService(assessments)


def get_menu_service(
        menus: MenuRepository = Depends(get_menu_repository),
        validator: PlanValidator = Depends(get_plan_validator),
) -> MenuService:
    return MenuService(menus, validator)


def get_meal_plan_service(
        plans: MealPlanRepository = Depends(get_meal_plan_repository),
        validator: PlanValidator = Depends(get_plan_validator),
) -> MealPlanService:
    return MealPlanService(plans, validator)


def get_bearer_token(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")
    return credentials.credentials


async def get_current_user(
        token: str = Depends(get_bearer_token),
        users: UserRepository = Depends(get_user_repository),
        sessions: SessionRepository = Depends(get_session_repository),
) -> User:
    user_id = auth_service.decode_access_token(token)

    session = await sessions.get_active(user_id, token)
    if session is None:
        raise AppError("Session expired or invalid", ErrorCode.SESSION_INVALID, 401)

    user = await users.get_by_id(user_id)
    if user is None:
        raise AppError("User not found", ErrorCode.USER_NOT_FOUND, 404)

    return user
