"""
Configuration for the Pricebook web front-end.

Values come from PRICEBOOK_* environment variables or a .env file.
"""

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class WebSettings(BaseSettings):
    """Front-end settings loaded from environment variables."""

    # Store endpoint
    API_URL: str = Field(
        default="http://localhost:8000", description="Base URL of the store API"
    )
    API_KEY: Optional[str] = Field(
        default=None, description="Key sent in the X-API-Key header"
    )
    API_TIMEOUT: float = Field(default=30.0, description="Request timeout in seconds")

    # Admin
    ADMIN_PASSWORD: str = Field(
        default="change-me", description="Shared admin password (not a security boundary)"
    )

    # Browsing
    PAGE_SIZE: int = Field(default=12, description="Products per category page")
    SKU_DEBOUNCE_SECONDS: float = Field(
        default=0.3, description="Quiet period before a SKU lookup is sent"
    )
    CURRENCY_SYMBOL: str = Field(default="₹", description="Prefix for rendered prices")

    # Image upload
    IMAGE_MAX_DIMENSION: int = Field(
        default=800, description="Longest side of uploaded images after downscaling"
    )
    IMAGE_JPEG_QUALITY: int = Field(default=80, ge=1, le=95)

    # UI
    STORAGE_SECRET: str = Field(
        default="pricebook-storage-secret", description="Secret for NiceGUI user storage"
    )
    PORT: int = Field(default=8081, description="Port of the NiceGUI server")
    TITLE: str = Field(default="Pricebook", description="Browser title")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ENABLE_FILE_LOGGING: bool = False
    LOG_DIR: str = "./logs"

    class Config:
        env_prefix = "PRICEBOOK_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = WebSettings()
