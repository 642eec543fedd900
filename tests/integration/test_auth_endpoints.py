"""
Integration tests for /api/v1/auth/*.

Covered:
- POST /auth/register: success, duplicate, invalid username, invalid email
- POST /auth/login: success, wrong password, unknown email
- POST /auth/logout: success, no active session
- PUT /auth/update-password
- bearer token checks done by get_current_user

Strategy: UserRepository and SessionRepository are AsyncMocks from conftest.
"""

import pytest
from datetime import timedelta

from app.services.auth_service import auth_service
from tests.conftest import make_auth_headers
from tests.factories import DEFAULT_PASSWORD, make_session

pytestmark = pytest.mark.integration


def assign_id(user):
    user.id = 10
    return user


# ---------------------------------------------------------------------------
# POST /auth/register
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register_success_returns_token(client, mock_user_repo, mock_session_repo):
    mock_user_repo.find_by_email_or_username.return_value = None
    mock_user_repo.create_user.side_effect = assign_id

    response = await client.post("/api/v1/auth/register", json={
        "username": "newuser1",
        "email": "new@test.com",
        "password": DEFAULT_PASSWORD,
    })

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["token"]
    assert body["data"]["token_type"] == "bearer"
    assert body["data"]["user"]["id"] == 10
    assert "password" not in body["data"]["user"]
    mock_session_repo.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_register_duplicate_returns_409(client, mock_user_repo, user_fixture):
    mock_user_repo.find_by_email_or_username.return_value = user_fixture

    response = await client.post("/api/v1/auth/register", json={
        "username": "another1",
        "email": user_fixture.email,
        "password": DEFAULT_PASSWORD,
    })

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "RESOURCE_EXISTS"
    assert error["message"] == "User already exists with this email"


@pytest.mark.asyncio
async def test_register_short_username_returns_400(client, mock_user_repo):
    response = await client.post("/api/v1/auth/register", json={
        "username": "abc",
        "email": "new@test.com",
        "password": DEFAULT_PASSWORD,
    })

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Username must be between 6 and 30 characters",
        },
    }
    mock_user_repo.create_user.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_invalid_email_returns_400(client, mock_user_repo):
    response = await client.post("/api/v1/auth/register", json={
        "username": "newuser1",
        "email": "not-an-email",
        "password": DEFAULT_PASSWORD,
    })

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_INPUT"
    assert error["data"][0]["field"] == "email"
    mock_user_repo.create_user.assert_not_awaited()


# ---------------------------------------------------------------------------
# POST /auth/login
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login_success(client, mock_user_repo, mock_session_repo, user_fixture):
    mock_user_repo.get_by_email.return_value = user_fixture

    response = await client.post("/api/v1/auth/login", json={
        "email": user_fixture.email,
        "password": DEFAULT_PASSWORD,
    })

    assert response.status_code == 200
    token = response.json()["data"]["token"]
    assert auth_service.decode_access_token(token) == user_fixture.id
    assert mock_session_repo.create.await_args.args[1] == token


@pytest.mark.asyncio
async def test_login_wrong_password_returns_401(client, mock_user_repo, user_fixture):
    mock_user_repo.get_by_email.return_value = user_fixture

    response = await client.post("/api/v1/auth/login", json={
        "email": user_fixture.email,
        "password": "Wrong1!x",
    })

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_unknown_email_returns_404(client, mock_user_repo):
    mock_user_repo.get_by_email.return_value = None

    response = await client.post("/api/v1/auth/login", json={
        "email": "ghost@test.com",
        "password": DEFAULT_PASSWORD,
    })

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


# ---------------------------------------------------------------------------
# Bearer token handling
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_protected_endpoint_without_token_returns_401(client):
    response = await client.get("/api/v1/profile")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_expired_token_returns_401(client, user_fixture):
    expired = auth_service.create_access_token(
        {"sub": str(user_fixture.id)}, expires_delta=timedelta(seconds=-1)
    )

    response = await client.get("/api/v1/profile", headers={"Authorization": f"Bearer {expired}"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_without_active_session_returns_401(client, mock_session_repo, user_fixture):
    mock_session_repo.get_active.return_value = None

    response = await client.get("/api/v1/profile", headers=make_auth_headers(user_fixture))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_INVALID"


# ---------------------------------------------------------------------------
# POST /auth/logout
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_logout_success(client, mock_user_repo, mock_session_repo, user_fixture):
    headers = make_auth_headers(user_fixture)
    token = headers["Authorization"].split()[1]
    session = make_session(user_fixture.id, token)
    mock_session_repo.get_active.return_value = session
    mock_user_repo.get_by_id.return_value = user_fixture

    response = await client.post("/api/v1/auth/logout", headers=headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Successfully logged out"
    mock_session_repo.deactivate.assert_awaited_once_with(session)


# ---------------------------------------------------------------------------
# PUT /auth/update-password
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_password_returns_new_token(user_client, mock_user_repo, mock_session_repo, user_fixture):
    mock_user_repo.update_password.side_effect = lambda user, hashed: user

    response = await user_client.put("/api/v1/auth/update-password", json={
        "current_password": DEFAULT_PASSWORD,
        "new_password": "N3wPassw0rd#",
    })

    assert response.status_code == 200
    assert response.json()["data"]["token"]
    mock_session_repo.deactivate_all.assert_awaited_once_with(user_fixture.id)


@pytest.mark.asyncio
async def test_update_password_missing_field_returns_400(user_client):
    response = await user_client.put("/api/v1/auth/update-password", json={
        "current_password": DEFAULT_PASSWORD,
    })

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MISSING_FIELD"
