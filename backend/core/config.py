from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Tenant Maintenance Tracker"

    # Database
    DATABASE_URL: str = "sqlite:///./maintenance.db"
    DB_ECHO: bool = False

    # Auth
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    PASSWORD_BCRYPT_ROUNDS: int = 12

    CORS_ORIGINS: List[str] = ["https://localhost:8080", "http://localhost:8080"]

    LOG_LEVEL: str = "INFO"


settings = Settings()
