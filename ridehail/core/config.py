"""
Configuration settings for the ride-hailing backend.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import List
import logging

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    """Application settings loaded from the environment and .env."""

    # Environment
    ENVIRONMENT: str = Field(default="development", description="Application environment")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Ride Hailing Dashboard"
    VERSION: str = "1.0.0"

    # Database Settings - No default credentials
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")

    # Geolocation Settings
    DEFAULT_SEARCH_RADIUS_KM: float = Field(default=10.0, gt=0.0)
    AVAILABLE_ORDERS_RADIUS_KM: float = Field(default=20.0, gt=0.0)

    # Subscription Settings
    SUBSCRIPTION_PERIOD_DAYS: int = Field(default=30, ge=1, le=366)

    # Payment Settings
    PAYMENT_AMOUNT_TOLERANCE: float = Field(default=0.01, ge=0.0)
    QRIS_REFERENCE_PREFIX: str = "QRIS"

    # Password Security
    PASSWORD_HASH_SCHEMES: List[str] = Field(default=["pbkdf2_sha256"])
    MIN_PASSWORD_LENGTH: int = 6
    MIN_PHONE_LENGTH: int = 10

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FILE: str = ""
    LOG_MAX_BYTES: int = Field(default=10485760, ge=1024)
    LOG_BACKUP_COUNT: int = Field(default=5, ge=0)

    # Security Headers
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000"], description="Allowed CORS origins")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        validate_assignment=True,
        extra="forbid",
    )

    @field_validator('DATABASE_URL')
    @classmethod
    def validate_database_url(cls, v):
        if not v.startswith(('postgresql://', 'postgresql+asyncpg://', 'sqlite+aiosqlite://')):
            raise ValueError("DATABASE_URL must be a PostgreSQL or sqlite+aiosqlite URL")
        return v

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        allowed_envs = ['development', 'staging', 'production', 'test']
        if v not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed_envs}")
        return v

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL with the asyncpg driver selected for plain PostgreSQL URLs."""
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.DATABASE_URL

# Global settings instance with error handling
try:
    settings = Settings()
    if settings.is_production() and settings.DEBUG:
        logger.warning("DEBUG mode is enabled in production environment")
except Exception as e:
    logger.error(f"Failed to load settings: {e}")
    raise
