from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update

from app.models.session import Session
from app.repositories.base import BaseRepository, storage_errors


class SessionRepository(BaseRepository):
    @storage_errors("Failed to fetch sessions")
    async def get_active(self, user_id: int, token: str) -> Optional[Session]:
        result = await self.db.execute(
            select(Session).where(
                Session.user_id == user_id,
                Session.token == token,
                Session.is_active == True,
                Session.expires_at > datetime.utcnow(),
            )
        )
        return result.scalar_one_or_none()

    @storage_errors("Failed to fetch sessions")
    async def list_active(self, user_id: int) -> List[Session]:
        result = await self.db.execute(
            select(Session).where(Session.user_id == user_id, Session.is_active == True)
        )
        return list(result.scalars().all())

    @storage_errors("Failed to create session")
    async def create(self, user_id: int, token: str, expires_at: datetime) -> Session:
        now = datetime.utcnow()
        session = Session(
            user_id=user_id,
            token=token,
            is_active=True,
            expires_at=expires_at,
            last_activity=now,
            created_at=now,
        )
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)
        return session

    @storage_errors("Failed to deactivate sessions")
    async def deactivate_all(self, user_id: int) -> None:
        now = datetime.utcnow()
        await self.db.execute(
            update(Session)
            .where(Session.user_id == user_id, Session.is_active == True)
            .values(is_active=False, logout_at=now, last_activity=now)
        )
        await self.db.commit()

    @storage_errors("Failed to deactivate session")
    async def deactivate(self, session: Session) -> Session:
        now = datetime.utcnow()
        session.is_active = False
        session.logout_at = now
        session.last_activity = now
        await self.db.commit()
        return session
