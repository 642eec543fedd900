from typing import List, Optional

from app.core.errors import InvalidInputError, MissingFieldError
from app.models.menu import Menu
from app.repositories.menu_repository import MenuRepository
from app.schemas.menu import (
    MacroTargets, PlanDetails, RecommendationFilters, RecommendationResponse, TargetNutrition
)
from app.services.menu_scorer import MenuScorer
from app.services.nutrition_calculator import round_half_up
from app.services.plan_config import get_plan_config
from app.services.plan_validator import PlanValidator


class MenuService:
    def __init__(self, menu_repo: MenuRepository, validator: PlanValidator):
        self.menu_repo = menu_repo
        self.validator = validator

    async def get_recommendations(self, user_id: int, plan_type: str = "single") -> RecommendationResponse:
        """Rank every active menu for the user and describe the plan's targets."""
        config = get_plan_config(plan_type)
        profile = await self.validator.get_health_profile(user_id)

        metrics = profile.metrics
        macro_targets = metrics["macronutrients"]
        daily_calories = metrics["final_cal"]
        max_total_calories = config.max_total_calories(daily_calories)
        allergies = profile.allergies

        menus = await self.menu_repo.list_active()
        ranked = MenuScorer.rank_menus(menus, macro_targets, allergies)

        return RecommendationResponse(
            plan_type=config.plan_type,
            recommendations=ranked,
            plan_details=PlanDetails(
                plan_type=config.plan_type,
                min_menus=config.min_menus,
                max_menus=config.max_menus,
                calorie_ratio=config.calorie_ratio,
                max_total_calories=max_total_calories,
            ),
            target_nutrition=TargetNutrition(
                daily_calories=daily_calories,
                plan_calories=max_total_calories,
                macros=MacroTargets(
                    protein=round_half_up(macro_targets["protein"] * config.calorie_ratio),
                    carbs=round_half_up(macro_targets["carbs"] * config.calorie_ratio),
                    fats=round_half_up(macro_targets["fats"] * config.calorie_ratio),
                ),
            ),
            filters=RecommendationFilters(excluded_allergens=allergies),
        )

    async def get_by_category(
        self,
        category: str,
        min_calories: Optional[float] = None,
        max_calories: Optional[float] = None,
        min_protein: Optional[float] = None,
        exclude_allergens: Optional[List[str]] = None,
        page: int = 1,
        limit: int = 10,
    ) -> List[Menu]:
        if not category or not category.strip():
            raise MissingFieldError("Category is required")
        if min_calories is not None and min_calories < 0:
            raise InvalidInputError("Minimum calories must be positive")
        if min_calories is not None and max_calories is not None and max_calories < min_calories:
            raise InvalidInputError("Maximum calories must be greater than minimum calories")

        menus = await self.menu_repo.list_by_category(
            category,
            min_calories=min_calories,
            max_calories=max_calories,
            min_protein=min_protein,
            page=page,
            limit=limit,
        )
        if exclude_allergens:
            menus = MenuScorer.filter_allergens(menus, exclude_allergens)
        return menus

    async def search(
        self,
        search_term: Optional[str] = None,
        category_id: Optional[int] = None,
        min_calories: Optional[float] = None,
        max_calories: Optional[float] = None,
    ) -> List[Menu]:
        return await self.menu_repo.search(
            search_term,
            category_id=category_id,
            min_calories=min_calories,
            max_calories=max_calories,
        )
