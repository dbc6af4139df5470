# /app/core/config.py

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load .env before any setting is read.
load_dotenv()


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration, read once from the environment.

    Every value has a default suitable for local development; production
    deployments are expected to set at least DATABASE_URL and JWT_SECRET_KEY.
    """
    # --- Application ---
    app_name: str = "Library Lending API"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # --- Database ---
    database_url: str = "sqlite:///./library.db"
    db_lock_timeout: float = 5.0

    # --- Security ---
    jwt_secret_key: str = "change-me-to-a-long-random-secret-value"
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            app_version=os.getenv("APP_VERSION", cls.app_version),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            db_lock_timeout=float(os.getenv("DB_LOCK_TIMEOUT", str(cls.db_lock_timeout))),
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", cls.jwt_secret_key),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", cls.jwt_algorithm),
            jwt_expiration_minutes=int(os.getenv("JWT_EXPIRATION_MINUTES", str(cls.jwt_expiration_minutes))),
        )


@lru_cache
def get_settings() -> Settings:
    """FastAPI dependency (and plain helper) returning the process-wide settings."""
    return Settings.from_env()
