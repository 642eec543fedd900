import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple

import bcrypt
from jose import jwt, JWTError

from app.core.config import settings
from app.core.errors import (
    AppError, ErrorCode, MissingFieldError, ResourceExistsError, UnauthorizedError, ValidationError
)
from app.core.validators import validate_password, validate_username
from app.models.user import User
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.schemas.auth import PasswordUpdate, UserLogin, UserRegister

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.MAX_ACTIVE_SESSIONS = settings.MAX_ACTIVE_SESSIONS

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not plain_password or not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_access_token(self, token: str) -> int:
        """Return the user id carried by a valid token."""
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
            user_id = payload.get("sub")
            if user_id is None:
                raise UnauthorizedError("Invalid access token")
            return int(user_id)
        except (JWTError, ValueError):
            raise UnauthorizedError("Invalid access token")

    def issue_token(self, user: User) -> Tuple[str, datetime]:
        lifetime = timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        token = self.create_access_token(
            data={"sub": str(user.id), "username": user.username, "jti": uuid.uuid4().hex},
            expires_delta=lifetime,
        )
        return token, datetime.utcnow() + lifetime

    async def open_session(self, sessions: SessionRepository, user: User) -> str:
        active = await sessions.list_active(user.id)
        if len(active) >= self.MAX_ACTIVE_SESSIONS:
            logger.info(f"User {user.id} reached {len(active)} active sessions, closing them")
            await sessions.deactivate_all(user.id)

        token, expires_at = self.issue_token(user)
        await sessions.create(user.id, token, expires_at)
        return token

    async def register_user(self, users: UserRepository, data: UserRegister) -> User:
        validate_username(data.username)
        validate_password(data.password)

        existing = await users.find_by_email_or_username(data.email, data.username)
        if existing:
            clashes = []
            if existing.email == data.email:
                clashes.append("email")
            if existing.username == data.username:
                clashes.append("username")
            raise ResourceExistsError(f"User already exists with this {' and '.join(clashes)}")

        now = datetime.utcnow()
        user = User(
            username=data.username,
            email=data.email,
            password=self.hash_password(data.password),
            created_at=now,
            updated_at=now,
        )
        user = await users.create_user(user)
        logger.info(f"User {user.id} registered")
        return user

    async def authenticate_user(self, users: UserRepository, data: UserLogin) -> User:
        user = await users.get_by_email(data.email)
        if user is None:
            raise AppError("No user found with this email", ErrorCode.USER_NOT_FOUND, 404)
        if not self.verify_password(data.password, user.password):
            raise AppError("Invalid password", ErrorCode.INVALID_CREDENTIALS, 401)
        return user

    async def logout(self, sessions: SessionRepository, user: User, token: str) -> None:
        session = await sessions.get_active(user.id, token)
        if session is None:
            raise AppError(
                "User hasn't logged in. Please login first", ErrorCode.SESSION_INVALID, 400
            )
        await sessions.deactivate(session)

    async def update_password(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        user: User,
        data: PasswordUpdate,
    ) -> Tuple[User, str]:
        """Change the password, close existing sessions and open a fresh one."""
        if not data.current_password or not data.new_password:
            raise MissingFieldError("Both current password and new password are required")
        if not self.verify_password(data.current_password, user.password):
            raise AppError("Current password is incorrect", ErrorCode.INVALID_CREDENTIALS, 401)
        validate_password(data.new_password)
        if data.current_password == data.new_password:
            raise ValidationError("New password must be different from the current password")

        user = await users.update_password(user, self.hash_password(data.new_password))
        await sessions.deactivate_all(user.id)
        token = await self.open_session(sessions, user)
        logger.info(f"Password updated for user {user.id}")
        return user, token


auth_service = AuthService()
