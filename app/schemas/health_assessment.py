from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime

from app.models.health_assessment import (
    ActivityLevelEnum, GenderEnum, HealthGoalEnum, MacroRatioEnum
)


class HealthHistory(BaseModel):
    allergies: List[str] = []
    conditions: List[str] = []
    medications: List[str] = []
    notes: Optional[str] = None

    class Config:
        extra = "allow"


class HealthAssessmentCreate(BaseModel):
    # Presence and ranges are checked by the service so that missing values
    # are reported as MISSING_FIELD instead of a schema error.
    height: Optional[float] = None
    weight: Optional[float] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    activity_level: Optional[str] = None
    health_goal: Optional[str] = None
    macro_ratio: Optional[str] = None
    target_weight: Optional[float] = None
    health_history: Optional[HealthHistory] = None
    specific_goals: Optional[Any] = None


class Macronutrients(BaseModel):
    protein: int
    carbs: int
    fats: int


class Metrics(BaseModel):
    bmi: float
    bmi_category: str
    bmr: int
    tdee: int
    final_cal: int
    macronutrients: Macronutrients


class HealthAssessmentResponse(BaseModel):
    id: int
    user_id: int
    height: float
    weight: float
    age: int
    gender: GenderEnum
    activity_level: ActivityLevelEnum
    health_goal: HealthGoalEnum
    macro_ratio: MacroRatioEnum
    target_weight: Optional[float] = None
    health_history: Optional[Dict[str, Any]] = None
    specific_goals: Optional[Any] = None
    metrics: Metrics
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
