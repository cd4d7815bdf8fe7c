"""
Configuration settings for the Pricebook data store service.

Loads environment variables from .env file and provides typed configuration.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Store settings loaded from environment variables."""

    # API Configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:8081", "http://127.0.0.1:8081"],
        description="Allowed CORS origins",
    )
    API_KEY: Optional[str] = Field(
        default=None,
        validation_alias="PRICEBOOK_API_KEY",
        description="Shared key required in the X-API-Key header (disabled when empty)",
    )
    MAX_PAGE_SIZE: int = Field(
        default=100, description="Upper bound for the limit query parameter"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./data/pricebook.db", description="SQLAlchemy database URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ENABLE_FILE_LOGGING: bool = Field(
        default=False, description="Enable logging to file"
    )
    LOG_DIR: str = Field(default="./logs", description="Directory for log files")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True


# Global settings instance
settings = Settings()
