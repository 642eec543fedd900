"""
Validation of a menu selection against a plan type and the user's targets.

Structural and allergen problems are raised as errors. Calorie deviation and
nutritional imbalance are business outcomes and come back as
SelectionValidation(is_valid=False).
"""
import logging
from typing import List, Sequence

from app.core.errors import InvalidInputError, ResourceNotFoundError, ValidationError
from app.models.health_assessment import HealthAssessment
from app.models.meal_plan import PlanTypeEnum
from app.models.menu import Menu
from app.repositories.health_assessment_repository import HealthAssessmentRepository
from app.repositories.menu_repository import MenuRepository
from app.schemas.menu import (
    NutritionBreakdown, PlanDetails, SelectionValidation, ValidationDetails
)
from app.services.menu_scorer import MenuScorer
from app.services.nutrition_calculator import round_half_up
from app.services.plan_config import PlanConfig, get_plan_config

logger = logging.getLogger(__name__)

CALORIE_TOLERANCE = 0.20
SCORE_THRESHOLD = 50


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def check_selection_size(menu_ids: Sequence[int], config: PlanConfig) -> None:
    name = config.plan_type.value
    if len(menu_ids) < config.min_menus:
        raise ValidationError(
            f"{name} plan requires at least {config.min_menus} menu selection(s)"
        )
    if len(menu_ids) > config.max_menus:
        if config.plan_type == PlanTypeEnum.single:
            raise ValidationError("Single meal plan can only have one menu selection")
        raise ValidationError(
            f"{name} plan allows at most {config.max_menus} menu selections"
        )


def sum_nutrition(menus: Sequence[Menu]) -> NutritionBreakdown:
    total = NutritionBreakdown()
    for menu in menus:
        total.calories += menu.calories_per_serving or 0
        total.protein += menu.protein_per_serving or 0
        total.carbs += menu.carbs_per_serving or 0
        total.fats += menu.fats_per_serving or 0
    return total


def evaluate_selection(
    menus: Sequence[Menu],
    config: PlanConfig,
    metrics: dict,
    allergies: Sequence[str],
) -> SelectionValidation:
    """Allergen check, aggregation and tolerance checks for already-fetched menus."""
    if not all(MenuScorer.is_allergen_safe(menu, allergies) for menu in menus):
        raise ValidationError("Selected menu contains allergens that match your profile")

    total = sum_nutrition(menus)

    macro_targets = metrics["macronutrients"]
    ratio = config.calorie_ratio
    target = NutritionBreakdown(
        calories=metrics["final_cal"] * ratio,
        protein=macro_targets["protein"] * ratio,
        carbs=macro_targets["carbs"] * ratio,
        fats=macro_targets["fats"] * ratio,
    )

    nutrition_score = MenuScorer.weighted_difference(
        total.protein, total.carbs, total.fats, macro_targets, ratio=ratio
    )

    is_valid = True
    message = ""
    enforce_targets = config.plan_type != PlanTypeEnum.single

    if enforce_targets and target.calories > 0:
        deviation = abs(total.calories - target.calories) / target.calories
        if deviation > CALORIE_TOLERANCE:
            is_valid = False
            message = (
                f"Total calories ({_format_number(total.calories)}) are too far from "
                f"target ({round_half_up(target.calories)})"
            )

    if enforce_targets and nutrition_score > SCORE_THRESHOLD:
        is_valid = False
        message = message or "Nutritional balance needs improvement"

    return SelectionValidation(
        is_valid=is_valid,
        validation_details=ValidationDetails(
            nutrition_score=nutrition_score,
            score_threshold=SCORE_THRESHOLD,
            message=message,
        ),
        total_nutrition=total,
        target_nutrition=target,
        plan_details=PlanDetails(
            plan_type=config.plan_type,
            min_menus=config.min_menus,
            max_menus=config.max_menus,
            calorie_ratio=config.calorie_ratio,
        ),
        recommendations=(
            "Selected meals are suitable for your nutritional needs"
            if is_valid
            else f"Improvement needed: {message}"
        ),
    )


class PlanValidator:
    def __init__(
        self,
        assessment_repo: HealthAssessmentRepository,
        menu_repo: MenuRepository,
    ):
        self.assessment_repo = assessment_repo
        self.menu_repo = menu_repo

    async def get_health_profile(self, user_id: int) -> HealthAssessment:
        profile = await self.assessment_repo.get_by_user_id(user_id)
        if profile is None:
            raise ResourceNotFoundError(
                "Health profile not found. Please complete health assessment first"
            )
        return profile

    async def fetch_selected_menus(self, menu_ids: Sequence[int]) -> List[Menu]:
        menus = await self.menu_repo.get_by_ids(menu_ids)
        by_id = {menu.id: menu for menu in menus}
        missing = [menu_id for menu_id in menu_ids if menu_id not in by_id]
        if missing:
            raise ResourceNotFoundError(
                f"Menu(s) not found: {', '.join(str(m) for m in missing)}"
            )
        return [by_id[menu_id] for menu_id in menu_ids]

    async def validate(
        self, user_id: int, menu_ids: Sequence[int], plan_type: str
    ) -> SelectionValidation:
        if not menu_ids:
            raise InvalidInputError("Valid menu selection is required")
        if len(set(menu_ids)) != len(menu_ids):
            raise InvalidInputError("Menu selection contains duplicate menu ids")

        config = get_plan_config(plan_type)
        check_selection_size(menu_ids, config)

        profile = await self.get_health_profile(user_id)
        menus = await self.fetch_selected_menus(menu_ids)

        result = evaluate_selection(menus, config, profile.metrics, profile.allergies)
        if not result.is_valid:
            logger.info(
                f"Selection {list(menu_ids)} for user {user_id} rejected: "
                f"{result.validation_details.message}"
            )
        return result
