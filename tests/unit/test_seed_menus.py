"""Unit tests for the starter menu catalogue and its seeding routine."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.initial_menus import INITIAL_CATEGORIES, INITIAL_INGREDIENTS, INITIAL_MENUS
from app.core.seed_menus import seed_menu_catalog

pytestmark = pytest.mark.unit


def mock_db(existing_menus: int) -> AsyncMock:
    db = AsyncMock(spec=AsyncSession)
    count = MagicMock()
    count.scalar_one.return_value = existing_menus
    db.execute.return_value = count
    return db


def test_catalogue_references_known_categories_and_ingredients():
    categories = {c["name"] for c in INITIAL_CATEGORIES}
    ingredients = {i["name"] for i in INITIAL_INGREDIENTS}

    for menu in INITIAL_MENUS:
        assert menu["category"] in categories
        for name, amount, unit in menu["ingredients"]:
            assert name in ingredients
            assert amount > 0


def test_allergen_ingredients_declare_a_type():
    for ingredient in INITIAL_INGREDIENTS:
        if ingredient.get("is_allergen"):
            assert ingredient["allergen_type"]


@pytest.mark.asyncio
async def test_seed_fills_empty_catalogue():
    db = mock_db(existing_menus=0)

    added = await seed_menu_catalog(db)

    assert added == len(INITIAL_MENUS)
    assert db.add.call_count == len(INITIAL_MENUS)
    menu = db.add.call_args_list[0].args[0]
    assert menu.name == INITIAL_MENUS[0]["name"]
    assert len(menu.menu_ingredients) == len(INITIAL_MENUS[0]["ingredients"])
    db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_seed_skips_existing_catalogue():
    db = mock_db(existing_menus=3)

    assert await seed_menu_catalog(db) == 0
    db.add.assert_not_called()
    db.commit.assert_not_awaited()
