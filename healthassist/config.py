"""
Configuration Management for Health Assistant Scoring Service

Environment-based configuration using Pydantic Settings.
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from .env file
    )

    # Application
    app_name: str = "Health Assistant Scoring API"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False, description="Enable debug mode")

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = Field(default="INFO", description="Root log level for the service")
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    # Medicine Safety
    max_single_dose_mg: float = Field(default=1000.0, description="Single dose above this is flagged")
    overdose_medium_count: int = Field(default=3, description="More medications than this is a medium overdose risk")
    overdose_high_count: int = Field(default=5, description="More medications than this is a high overdose risk")

    # Symptom Triage
    pain_escalation_level: int = Field(default=8, description="Pain level (1-10) that escalates triage to at least high")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
