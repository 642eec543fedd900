import logging
from typing import Tuple

from app.core.errors import InvalidInputError, MissingFieldError
from app.models.health_assessment import (
    ActivityLevelEnum, GenderEnum, HealthAssessment
)
from app.repositories.health_assessment_repository import HealthAssessmentRepository
from app.schemas.health_assessment import HealthAssessmentCreate
from app.services.nutrition_calculator import NutritionCalculator, coerce_enum

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("height", "weight", "age", "gender", "activity_level")


class HealthAssessmentService:
    def __init__(self, repo: HealthAssessmentRepository):
        self.repo = repo

    @staticmethod
    def _check_input(data: HealthAssessmentCreate) -> None:
        missing = [field for field in REQUIRED_FIELDS if getattr(data, field) in (None, "")]
        if missing:
            raise MissingFieldError(f"Missing required fields: {', '.join(missing)}")

        for field in ("height", "weight", "age"):
            if getattr(data, field) <= 0:
                raise InvalidInputError(f"Invalid {field} value")
        if data.target_weight is not None and data.target_weight <= 0:
            raise InvalidInputError("Invalid target_weight value")

    async def submit(self, user_id: int, data: HealthAssessmentCreate) -> Tuple[HealthAssessment, bool]:
        """
        Recompute every metric from the submitted measurements and store the
        assessment, replacing any previous one.

        Returns the stored row and whether it was newly created.
        """
        self._check_input(data)

        gender = coerce_enum(GenderEnum, data.gender, "gender")
        activity_level = coerce_enum(ActivityLevelEnum, data.activity_level, "activity level")
        goal = NutritionCalculator.parse_goal(data.health_goal)
        macro_ratio = NutritionCalculator.parse_macro_ratio(data.macro_ratio)

        metrics = NutritionCalculator.calculate_metrics(
            weight=data.weight,
            height=data.height,
            age=data.age,
            gender=gender,
            activity_level=activity_level,
            goal=goal,
            macro_ratio=macro_ratio,
        )

        existing = await self.repo.get_by_user_id(user_id)
        assessment = await self.repo.upsert(user_id, {
            "height": data.height,
            "weight": data.weight,
            "age": data.age,
            "gender": gender,
            "activity_level": activity_level,
            "health_goal": goal,
            "macro_ratio": macro_ratio,
            "target_weight": data.target_weight,
            "health_history": data.health_history.model_dump() if data.health_history else None,
            "specific_goals": data.specific_goals,
            "metrics": metrics,
        })

        created = existing is None
        logger.info(
            f"Health assessment {'created' if created else 'updated'} for user {user_id}: "
            f"final_cal={metrics['final_cal']}, bmi={metrics['bmi']}"
        )
        return assessment, created

    async def get_for_user(self, user_id: int):
        return await self.repo.get_by_user_id(user_id)
