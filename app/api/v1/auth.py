from fastapi import APIRouter, Depends, status

from app.core.dependencies import (
    get_bearer_token, get_current_user, get_session_repository, get_user_repository
)
from app.models.user import User
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.schemas.auth import AuthResponse, PasswordUpdate, UserLogin, UserPublic, UserRegister
from app.schemas.common import ApiResponse
from app.services.auth_service import auth_service

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
async def register(
        data: UserRegister,
        users: UserRepository = Depends(get_user_repository),
        sessions: SessionRepository = Depends(get_session_repository),
):
    """Register a new user and open their first session"""
    user = await auth_service.register_user(users, data)
    token = await auth_service.open_session(sessions, user)

    return ApiResponse(data=AuthResponse(token=token, user=UserPublic.model_validate(user)))


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
        data: UserLogin,
        users: UserRepository = Depends(get_user_repository),
        sessions: SessionRepository = Depends(get_session_repository),
):
    """Check credentials and issue a session token"""
    user = await auth_service.authenticate_user(users, data)
    token = await auth_service.open_session(sessions, user)

    return ApiResponse(data=AuthResponse(token=token, user=UserPublic.model_validate(user)))


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
        current_user: User = Depends(get_current_user),
        token: str = Depends(get_bearer_token),
        sessions: SessionRepository = Depends(get_session_repository),
):
    await auth_service.logout(sessions, current_user, token)
    return ApiResponse(message="Successfully logged out")


@router.put("/update-password", response_model=ApiResponse[AuthResponse])
async def update_password(
        data: PasswordUpdate,
        current_user: User = Depends(get_current_user),
        users: UserRepository = Depends(get_user_repository),
        sessions: SessionRepository = Depends(get_session_repository),
):
    """Change the password; every previous session is closed"""
    user, token = await auth_service.update_password(users, sessions, current_user, data)
    return ApiResponse(
        message="Password updated successfully",
        data=AuthResponse(token=token, user=UserPublic.model_validate(user)),
    )
