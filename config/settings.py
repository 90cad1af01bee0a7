# config/settings.py

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, ValidationInfo, field_validator
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Garbage Tracker"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # Database
    DATABASE_URL: str = "sqlite:///./garbage_tracker.db"
    DB_POOL_SIZE: int = Field(default=20, ge=5, le=100)
    DB_MAX_OVERFLOW: int = Field(default=30, ge=5, le=100)
    DB_POOL_RECYCLE: int = Field(default=3600, ge=300)

    # "database" keeps reports/admins in DATABASE_URL, "memory" in process-local maps
    STORAGE_BACKEND: str = "database"

    # File uploads
    UPLOAD_DIR: str = "uploads"
    MAX_FILE_SIZE: int = Field(default=10 * 1024 * 1024, ge=1024)

    # CORS
    CORS_ORIGINS: str = ""

    # Admin sessions
    SESSION_TTL_HOURS: int = Field(default=24, ge=1, le=24 * 30)
    DEFAULT_ADMIN_EMAIL: str = "admin@garbagetracker.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    PORT: int = Field(default=8000, ge=1, le=65535)

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if self.DEBUG else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v):
        """Validate database URL format"""
        if not v.startswith(("postgresql://", "postgresql+psycopg2://", "postgresql+psycopg://", "sqlite://")):
            raise ValueError("Unsupported database URL format")
        return v

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v):
        if v not in ("database", "memory"):
            raise ValueError("STORAGE_BACKEND must be 'database' or 'memory'")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v, info: ValidationInfo):
        """Validate CORS origins in production"""
        # ENVIRONMENT is declared earlier, so it is already in info.data
        environment = info.data.get("ENVIRONMENT", "development")
        if environment == "production" and "*" in v:
            raise ValueError("Wildcard CORS origins not allowed in production")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def use_memory_storage(self) -> bool:
        return self.STORAGE_BACKEND == "memory"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
