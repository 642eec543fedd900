"""
Load the starter menu catalogue into an empty database.
"""
import asyncio
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import AsyncSessionLocal
from app.core.initial_menus import INITIAL_CATEGORIES, INITIAL_INGREDIENTS, INITIAL_MENUS
from app.models.menu import Ingredient, Menu, MenuCategory, MenuIngredient

logger = logging.getLogger(__name__)


async def seed_menu_catalog(db: AsyncSession) -> int:
    """Insert the starter catalogue unless menus already exist. Returns the number of menus added."""
    existing = (await db.execute(select(func.count(Menu.id)))).scalar_one()
    if existing > 0:
        logger.info(f"Menu catalogue already holds {existing} menus, skipping seed")
        return 0

    categories = {c["name"]: MenuCategory(**c) for c in INITIAL_CATEGORIES}
    ingredients = {i["name"]: Ingredient(**i) for i in INITIAL_INGREDIENTS}
    db.add_all(list(categories.values()) + list(ingredients.values()))

    for menu_data in INITIAL_MENUS:
        data = dict(menu_data)
        category = categories[data.pop("category")]
        ingredient_rows = data.pop("ingredients")
        menu = Menu(category=category, is_active=True, **data)
        menu.menu_ingredients = [
            MenuIngredient(ingredient=ingredients[name], amount=amount, unit=unit)
            for name, amount, unit in ingredient_rows
        ]
        db.add(menu)

    await db.commit()
    logger.info(f"Seeded {len(INITIAL_MENUS)} menus")
    return len(INITIAL_MENUS)


async def main():
    async with AsyncSessionLocal() as db:
        await seed_menu_catalog(db)


if __name__ == "__main__":
    asyncio.run(main())
