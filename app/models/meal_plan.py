import enum
from datetime import datetime

from sqlalchemy import Column, Integer, Float, Enum, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.core.base import Base


class PlanTypeEnum(str, enum.Enum):
    single = "single"
    half_day = "half_day"
    full_day = "full_day"


class PlanStatusEnum(str, enum.Enum):
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class MealPlan(Base):
    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    plan_type = Column(Enum(PlanTypeEnum), nullable=False)
    status = Column(Enum(PlanStatusEnum), nullable=False, default=PlanStatusEnum.active)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    # Nutrition snapshot taken when the plan was created
    total_calories = Column(Float, nullable=False)
    total_protein = Column(Float, nullable=False)
    total_carbs = Column(Float, nullable=False)
    total_fats = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="meal_plans")
    plan_menus = relationship("MealPlanMenu", back_populates="meal_plan", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_meal_plans_user_status', 'user_id', 'status'),
    )


class MealPlanMenu(Base):
    __tablename__ = "meal_plan_menus"

    id = Column(Integer, primary_key=True)
    meal_plan_id = Column(Integer, ForeignKey("meal_plans.id"), nullable=False, index=True)
    menu_id = Column(Integer, ForeignKey("menu.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    meal_plan = relationship("MealPlan", back_populates="plan_menus")
    menu = relationship("Menu")
