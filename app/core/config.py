# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (HS256 signing secret for access tokens)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - ACCESS_TOKEN_EXPIRE_MINUTES, BCRYPT_ROUNDS, CORS_ORIGINS, LOG_LEVEL
    """

    PROJECT_NAME: str = "TaskMaster Pro API"

    # Database
    DATABASE_URL: str = "sqlite:///./taskmaster.db"
    DATABASE_ECHO: bool = False

    # JWT signing / verification
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Work factor for bcrypt password hashes
    BCRYPT_ROUNDS: int = 10

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
