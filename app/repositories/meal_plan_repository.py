from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.models.meal_plan import MealPlan, MealPlanMenu, PlanStatusEnum
from app.models.menu import Menu
from app.repositories.base import BaseRepository, storage_errors


def _with_menus(stmt):
    return stmt.options(
        selectinload(MealPlan.plan_menus)
        .selectinload(MealPlanMenu.menu)
        .selectinload(Menu.category)
    )


class MealPlanRepository(BaseRepository):
    @storage_errors("Failed to create meal plan")
    async def create_with_menus(self, plan: MealPlan, menu_ids: Sequence[int]) -> MealPlan:
        """Plan header and its menu rows are committed together or not at all."""
        self.db.add(plan)
        await self.db.flush()

        now = datetime.utcnow()
        self.db.add_all([
            MealPlanMenu(meal_plan_id=plan.id, menu_id=menu_id, created_at=now)
            for menu_id in menu_ids
        ])
        await self.db.commit()
        await self.db.refresh(plan)
        return plan

    @storage_errors("Failed to fetch meal plan")
    async def get_by_id(self, plan_id: int) -> Optional[MealPlan]:
        result = await self.db.execute(select(MealPlan).where(MealPlan.id == plan_id))
        return result.scalar_one_or_none()

    @storage_errors("Failed to update meal plan status")
    async def update_status(self, plan: MealPlan, status: PlanStatusEnum) -> MealPlan:
        plan.status = status
        plan.updated_at = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(plan)
        return plan

    @storage_errors("Failed to fetch meal plans")
    async def list_active(self, user_id: int) -> List[MealPlan]:
        result = await self.db.execute(
            _with_menus(
                select(MealPlan)
                .where(MealPlan.user_id == user_id, MealPlan.status == PlanStatusEnum.active)
                .order_by(MealPlan.created_at.desc())
            )
        )
        return list(result.scalars().all())

    @storage_errors("Failed to fetch meal plan history")
    async def list_history(
        self,
        user_id: int,
        status: Optional[PlanStatusEnum],
        limit: int,
        offset: int,
    ) -> Tuple[List[MealPlan], int]:
        filters = [MealPlan.user_id == user_id]
        if status is not None:
            filters.append(MealPlan.status == status)

        total = (
            await self.db.execute(select(func.count(MealPlan.id)).where(*filters))
        ).scalar_one()

        result = await self.db.execute(
            _with_menus(
                select(MealPlan)
                .where(*filters)
                .order_by(MealPlan.created_at.desc())
                .offset(offset)
                .limit(limit)
            )
        )
        return list(result.scalars().all()), total
