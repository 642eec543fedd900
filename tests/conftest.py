"""
Shared fixtures for the meal planner backend tests.

Strategy:
- The test FastAPI app is built without startup events (no database, no seeding).
- Every repository factory is replaced by an AsyncMock specced on the repository class,
  so services run for real on top of mocked storage.
- Authenticated clients override get_current_user with a fixed user; the
  auth tests go through the real bearer/session dependency instead.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from typing import AsyncGenerator

from app.api.router import api_router
from app.core.errors import register_exception_handlers
from app.core.dependencies import (
    get_current_user,
    get_health_assessment_repository,
    get_meal_plan_repository,
    get_menu_repository,
    get_session_repository,
    get_user_repository,
)
from app.models.user import User
from app.repositories.health_assessment_repository import HealthAssessmentRepository
from app.repositories.meal_plan_repository import MealPlanRepository
from app.repositories.menu_repository import MenuRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.services.auth_service import auth_service
from tests.factories import make_user


def create_test_app() -> FastAPI:
    """Test FastAPI app without startup events."""
    test_app = FastAPI(title="Meal Planner Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    return make_user(id=1, username="tester01", email="test@example.com")


@pytest.fixture
def other_user_fixture() -> User:
    return make_user(id=2, username="someone2", email="other@example.com")


# ---------------------------------------------------------------------------
# Mocked repositories
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_user_repo() -> AsyncMock:
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_session_repo() -> AsyncMock:
    repo = AsyncMock(spec=SessionRepository)
    repo.list_active.return_value = []
    return repo


@pytest.fixture
def mock_assessment_repo() -> AsyncMock:
    return AsyncMock(spec=HealthAssessmentRepository)


@pytest.fixture
def mock_menu_repo() -> AsyncMock:
    repo = AsyncMock(spec=MenuRepository)
    repo.list_active.return_value = []
    repo.get_by_ids.return_value = []
    return repo


@pytest.fixture
def mock_plan_repo() -> AsyncMock:
    return AsyncMock(spec=MealPlanRepository)


@pytest.fixture
def test_app(
    mock_user_repo, mock_session_repo, mock_assessment_repo, mock_menu_repo, mock_plan_repo
) -> FastAPI:
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_user_repo
    app.dependency_overrides[get_session_repository] = lambda: mock_session_repo
    app.dependency_overrides[get_health_assessment_repository] = lambda: mock_assessment_repo
    app.dependency_overrides[get_menu_repository] = lambda: mock_menu_repo
    app.dependency_overrides[get_meal_plan_repository] = lambda: mock_plan_repo
    return app


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Client without an authenticated user; tokens are checked for real."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(test_app, user_fixture) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as user_fixture."""
    test_app.dependency_overrides[get_current_user] = lambda: user_fixture
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


def make_auth_headers(user: User) -> dict:
    """Bearer header with a freshly issued token for user."""
    token, _ = auth_service.issue_token(user)
    return {"Authorization": f"Bearer {token}"}
