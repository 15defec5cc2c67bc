"""
Central configuration for ProDirectory.

Values come from environment variables or a `.env` file at the project root.

Usage:
    from prodirectory.core.config import settings
    print(settings.DATABASE_URL)
"""
import json
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # === Environment ===
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    APP_NAME: str = "ProDirectory"
    APP_VERSION: str = "0.1.0"

    # === Database ===
    DATABASE_URL: str = "sqlite:///./prodirectory.db"

    # === Sessions ===
    SESSION_COOKIE_NAME: str = "prodirectory.sid"
    SESSION_MAX_AGE_HOURS: int = 24

    # === Passwords ===
    BCRYPT_ROUNDS: int = 12

    # Bootstrap account, created at startup when both are set
    SUPERADMIN_USERNAME: Optional[str] = None
    SUPERADMIN_PASSWORD: Optional[str] = None

    # === Recommendations ===
    RECOMMENDATION_LIMIT: int = 5

    # === CORS ===
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # === Logging ===
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Accept a JSON list or a single origin string."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [v]
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        allowed = ["development", "staging", "production", "test"]
        if v.lower() not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v.lower()

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_test(self) -> bool:
        return self.ENVIRONMENT == "test"

    @property
    def session_max_age_seconds(self) -> int:
        return self.SESSION_MAX_AGE_HOURS * 60 * 60

    @property
    def superadmin_configured(self) -> bool:
        return bool(self.SUPERADMIN_USERNAME and self.SUPERADMIN_PASSWORD)


@lru_cache()
def get_settings() -> Settings:
    """Load settings once and reuse them."""
    return Settings()


settings = get_settings()
