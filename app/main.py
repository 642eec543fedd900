import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core import init_database, settings
from app.core.db import AsyncSessionLocal
from app.core.errors import register_exception_handlers
from app.core.logger import setup_logging
from app.core.seed_menus import seed_menu_catalog

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Meal Planner API - personalized nutrition and meal plans")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await init_database()

    if settings.SEED_MENU_CATALOG:
        async with AsyncSessionLocal() as session:
            await seed_menu_catalog(session)

    logger.info("Application started")


@app.get("/")
async def root():
    return {
        "app": "Meal Planner API",
        "message": "Personalized nutrition targets, menu recommendations and meal plans",
        "links": {
            "docs": "/docs",
            "redoc": "/redoc",
            "health_assessment": "/api/v1/health-assessment",
            "menus": "/api/v1/menus/recommended",
            "meal_plans": "/api/v1/meal-plans/active",
        }
    }
