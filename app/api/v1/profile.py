from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user, get_health_assessment_service
from app.models.user import User
from app.schemas.auth import UserPublic
from app.schemas.common import ApiResponse
from app.schemas.health_assessment import HealthAssessmentResponse
from app.schemas.profile import ProfileResponse
from app.services.health_assessment_service import HealthAssessmentService

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=ApiResponse[ProfileResponse])
async def get_profile(
    current_user: User = Depends(get_current_user),
    service: HealthAssessmentService = Depends(get_health_assessment_service),
):
    """Current user together with their health assessment, if any"""
    assessment = await service.get_for_user(current_user.id)

    return ApiResponse(data=ProfileResponse(
        user=UserPublic.model_validate(current_user),
        health_assessment=HealthAssessmentResponse.model_validate(assessment) if assessment else None,
    ))
