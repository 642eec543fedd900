from datetime import datetime
from typing import Optional

from sqlalchemy import select, or_

from app.models.user import User
from app.repositories.base import BaseRepository, storage_errors


class UserRepository(BaseRepository):
    @storage_errors("Database error while finding user")
    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @storage_errors("Database error while finding user")
    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @storage_errors("Database error while finding user")
    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(or_(User.email == email, User.username == username)).limit(1)
        )
        return result.scalar_one_or_none()

    @storage_errors("Failed to create user")
    async def create_user(self, user: User) -> User:
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    @storage_errors("Failed to update password")
    async def update_password(self, user: User, hashed_password: str) -> User:
        user.password = hashed_password
        user.password_changed_at = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(user)
        return user
