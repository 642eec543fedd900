from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.health_assessment import router as health_assessment_router
from app.api.v1.profile import router as profile_router
from app.api.v1.menus import router as menus_router
from app.api.v1.meal_plans import router as meal_plans_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(health_assessment_router)
api_router.include_router(profile_router)
api_router.include_router(menus_router)
api_router.include_router(meal_plans_router)
