import enum
from datetime import datetime
from typing import List

from sqlalchemy import Column, Integer, Float, Enum, ForeignKey, JSON, DateTime
from sqlalchemy.orm import relationship

from app.core.base import Base


class GenderEnum(str, enum.Enum):
    male = "male"
    female = "female"


class ActivityLevelEnum(str, enum.Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


class HealthGoalEnum(str, enum.Enum):
    weight_loss = "weight_loss"
    muscle_gain = "muscle_gain"
    maintenance = "maintenance"


class MacroRatioEnum(str, enum.Enum):
    moderate_carb = "moderate_carb"
    lower_carb = "lower_carb"
    higher_carb = "higher_carb"


class BMICategoryEnum(str, enum.Enum):
    underweight = "Underweight"
    normal = "Normal"
    overweight = "Overweight"
    obese = "Obese"


class HealthAssessment(Base):
    __tablename__ = "health_assessments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    height = Column(Float, nullable=False)
    weight = Column(Float, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(Enum(GenderEnum), nullable=False)
    activity_level = Column(Enum(ActivityLevelEnum), nullable=False)
    health_goal = Column(Enum(HealthGoalEnum), nullable=False, default=HealthGoalEnum.maintenance)
    macro_ratio = Column(Enum(MacroRatioEnum), nullable=False, default=MacroRatioEnum.moderate_carb)
    target_weight = Column(Float, nullable=True)
    health_history = Column(JSON, nullable=True)
    specific_goals = Column(JSON, nullable=True)
    # bmi, bmi_category, bmr, tdee, final_cal, macronutrients{protein, carbs, fats}
    metrics = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="health_assessment")

    @property
    def allergies(self) -> List[str]:
        history = self.health_history or {}
        return list(history.get("allergies") or [])
