"""
Environment configuration for the Smart SAC backend.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional, Union

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Application configuration
    APP_NAME: str = Field(default="Smart SAC", validation_alias=AliasChoices("APP_NAME", "PROJECT_NAME"))
    API_VERSION: str = Field(default="v1", validation_alias=AliasChoices("API_VERSION", "PROJECT_VERSION"))
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    # Comma lists are split by parse_cors_origins rather than decoded as JSON
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"], validation_alias=AliasChoices("CORS_ORIGINS", "BACKEND_CORS_ORIGINS")
    )

    # Database configuration - support both individual fields and DATABASE_URL
    DATABASE_URL: Optional[str] = None
    DATABASE_ECHO: bool = False
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "smart_sac"
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_SQL_QUERIES: bool = False

    # Equipment history
    HISTORY_RETENTION_MONTHS: int = 3
    HISTORY_PAGE_SIZE: int = 10
    HISTORY_PURGE_ENABLED: bool = True
    HISTORY_PURGE_INTERVAL_SECONDS: int = 3600
    HISTORY_PURGE_BATCH_SIZE: int = 500

    # Dashboards
    ANNOUNCEMENT_DEFAULT_TTL_DAYS: int = 90
    DASHBOARD_MAX_WORKERS: int = 4

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).upper()

    def get_database_url(self) -> str:
        """Construct database URL from components or use provided URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
