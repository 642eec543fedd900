from pydantic import BaseModel
from typing import Optional

from app.schemas.auth import UserPublic
from app.schemas.health_assessment import HealthAssessmentResponse


class ProfileResponse(BaseModel):
    user: UserPublic
    health_assessment: Optional[HealthAssessmentResponse] = None
