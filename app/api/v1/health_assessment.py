from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_current_user, get_health_assessment_service
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.health_assessment import HealthAssessmentCreate, HealthAssessmentResponse
from app.services.health_assessment_service import HealthAssessmentService

router = APIRouter(tags=["health-assessment"])


@router.post(
    "/health-assessment",
    response_model=ApiResponse[HealthAssessmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_assessment(
        data: HealthAssessmentCreate,
        current_user: User = Depends(get_current_user),
        service: HealthAssessmentService = Depends(get_health_assessment_service),
):
    """Submit (or resubmit) the health assessment; metrics are recomputed every time"""
    assessment, created = await service.submit(current_user.id, data)

    return ApiResponse(
        message="Assessment created successfully" if created else "Assessment updated successfully",
        data=HealthAssessmentResponse.model_validate(assessment),
    )
