from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert

from app.models.health_assessment import HealthAssessment
from app.repositories.base import BaseRepository, storage_errors


class HealthAssessmentRepository(BaseRepository):
    @storage_errors("Error fetching health assessment data")
    async def get_by_user_id(self, user_id: int) -> Optional[HealthAssessment]:
        result = await self.db.execute(
            select(HealthAssessment).where(HealthAssessment.user_id == user_id)
        )
        return result.scalar_one_or_none()

    @storage_errors("Failed to save assessment")
    async def upsert(self, user_id: int, values: dict) -> HealthAssessment:
        """Insert or replace the user's assessment in one statement."""
        now = datetime.utcnow()
        values = {**values, "user_id": user_id, "updated_at": now}
        stmt = insert(HealthAssessment).values(created_at=now, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[HealthAssessment.user_id],
            set_={key: stmt.excluded[key] for key in values if key != "user_id"},
        ).returning(HealthAssessment)

        result = await self.db.execute(
            stmt, execution_options={"populate_existing": True}
        )
        assessment = result.scalar_one()
        await self.db.commit()
        return assessment
