from typing import List, Optional, Sequence

from sqlalchemy import select, or_
from sqlalchemy.orm import selectinload

from app.models.menu import Menu, MenuCategory, MenuIngredient
from app.repositories.base import BaseRepository, storage_errors


def _with_details(stmt):
    return stmt.options(
        selectinload(Menu.category),
        selectinload(Menu.menu_ingredients).selectinload(MenuIngredient.ingredient),
    )


class MenuRepository(BaseRepository):
    @storage_errors("Failed to fetch menus")
    async def list_active(self) -> List[Menu]:
        result = await self.db.execute(
            _with_details(select(Menu).where(Menu.is_active == True).order_by(Menu.id))
        )
        return list(result.scalars().all())

    @storage_errors("Error fetching selected menus")
    async def get_by_ids(self, menu_ids: Sequence[int]) -> List[Menu]:
        result = await self.db.execute(
            _with_details(select(Menu).where(Menu.id.in_(list(menu_ids))))
        )
        return list(result.scalars().all())

    @storage_errors("Failed to fetch menus by category")
    async def list_by_category(
        self,
        category_name: str,
        min_calories: Optional[float] = None,
        max_calories: Optional[float] = None,
        min_protein: Optional[float] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Menu]:
        stmt = (
            select(Menu)
            .join(MenuCategory, Menu.category_id == MenuCategory.id)
            .where(Menu.is_active == True, MenuCategory.name == category_name)
        )
        if min_calories:
            stmt = stmt.where(Menu.calories_per_serving >= min_calories)
        if max_calories:
            stmt = stmt.where(Menu.calories_per_serving <= max_calories)
        if min_protein:
            stmt = stmt.where(Menu.protein_per_serving >= min_protein)
        stmt = stmt.order_by(Menu.id)
        if page and limit:
            stmt = stmt.offset((page - 1) * limit).limit(limit)

        result = await self.db.execute(_with_details(stmt))
        return list(result.scalars().all())

    @storage_errors("Failed to search menus")
    async def search(
        self,
        search_term: Optional[str] = None,
        category_id: Optional[int] = None,
        min_calories: Optional[float] = None,
        max_calories: Optional[float] = None,
    ) -> List[Menu]:
        stmt = select(Menu).where(Menu.is_active == True)
        if search_term and search_term.strip():
            pattern = f"%{search_term.strip().lower()}%"
            stmt = stmt.where(or_(Menu.name.ilike(pattern), Menu.description.ilike(pattern)))
        if category_id:
            stmt = stmt.where(Menu.category_id == category_id)
        if min_calories is not None and min_calories > 0:
            stmt = stmt.where(Menu.calories_per_serving >= min_calories)
        if max_calories is not None and max_calories > 0:
            stmt = stmt.where(Menu.calories_per_serving <= max_calories)

        result = await self.db.execute(_with_details(stmt.order_by(Menu.id)))
        return list(result.scalars().all())
