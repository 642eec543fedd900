from app.models.user import User
from app.models.session import Session
from app.models.health_assessment import HealthAssessment
from app.models.menu import MenuCategory, Menu, Ingredient, MenuIngredient
from app.models.meal_plan import MealPlan, MealPlanMenu

__all__ = [
    "User", "Session",
    "HealthAssessment",
    "MenuCategory", "Menu", "Ingredient", "MenuIngredient",
    "MealPlan", "MealPlanMenu",
]
