"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Runtime
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "auth_db"

    # JWT Configuration
    jwt_secret_key: str = "CHANGE_ME_IN_PRODUCTION_USE_STRONG_SECRET"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    # Password hashing
    bcrypt_rounds: int = 12

    # Password recovery
    otp_expire_minutes: int = 10
    reset_token_expire_minutes: int = 30
    reset_token_bytes: int = 20
    # None means "only in development"
    expose_recovery_code: bool | None = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local", "test")

    @property
    def recovery_code_in_response(self) -> bool:
        """Whether forgot-password echoes the one-time code back to the caller."""
        if self.expose_recovery_code is None:
            return self.is_development
        return self.expose_recovery_code


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
