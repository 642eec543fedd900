from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://mealplan_user:mealplan_password@db:5432/mealplan_db"
    SECRET_KEY: str = "SECRET_KEY_FOR_MEALPLAN"
    # Recreating the schema on every start is only meant for local development
    RESET_DATABASE: bool = False
    SEED_MENU_CATALOG: bool = True
    SQL_ECHO: bool = False
    DB_CONNECT_TIMEOUT: float = 10.0
    DB_COMMAND_TIMEOUT: float = 30.0
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    MAX_ACTIVE_SESSIONS: int = 2
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
