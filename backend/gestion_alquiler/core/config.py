"""
Application configuration
"""

from functools import lru_cache
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings

from gestion_alquiler.core.exceptions import ConfigurationException


class Settings(BaseSettings):
    """Application settings"""

    # Logging Settings
    LOG_LEVEL: str = "INFO"

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "gestion-alquiler-api"
    VERSION: str = "1.0.0"

    # CORS Settings
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8000"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Database Settings
    DATABASE_URL: str = "sqlite:///./gestion_alquiler.db"

    # JWT Settings
    JWT_SECRET_KEY: str = "gestion_alquiler_secret_key_change_in_production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24

    # Credentials encryption (AES-256-CBC)
    CRYPT_KEY: str = "0123456789abcdef0123456789abcdef"
    CRYPT_IV: str = "abcdef9876543210"

    # Bootstrap admin user
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"
    ADMIN_EMAIL: str = "admin@api.com"

    # Max page size for list endpoints
    PAGINATION_LIMIT: int = 10

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    class Config:
        env_file = ".env"
        case_sensitive = True

    @model_validator(mode="after")
    def check_consistency(self) -> "Settings":
        if self.ENVIRONMENT == "production" and self.LOG_LEVEL.upper() == "DEBUG":
            raise ConfigurationException(
                "Debug log level is not allowed in production",
                error_code="INVALID_LOG_LEVEL"
            )
        if len(self.CRYPT_KEY.encode("utf-8")) != 32:
            raise ConfigurationException(
                "CRYPT_KEY must be 32 bytes long",
                error_code="INVALID_CRYPT_KEY"
            )
        if len(self.CRYPT_IV.encode("utf-8")) != 16:
            raise ConfigurationException(
                "CRYPT_IV must be 16 bytes long",
                error_code="INVALID_CRYPT_IV"
            )
        return self

    def get_cors_origins(self) -> List[str]:
        """Return the list of allowed CORS origins"""
        if self.BACKEND_CORS_ORIGINS:
            # Parse comma-separated string of origins
            origins = [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
            return origins if origins else self.CORS_ORIGINS
        return self.CORS_ORIGINS


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance
    """
    return Settings()
