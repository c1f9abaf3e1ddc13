"""
Application configuration.

Centralized configuration management with environment variables
(prefixed with ``MATRIX_``).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="MATRIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "matrixops"
    APP_VERSION: str = "0.1.0"

    # Parsing
    NUMBER_TYPE: str = "i32"  # i32, i64 or f64
    SKIP_BLANK_LINES: bool = True

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
