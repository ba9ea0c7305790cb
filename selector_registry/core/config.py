"""
Configuration management for the Selector Registry service.
Handles environment variables and settings for loading the OpenChain signature export.
"""

from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Selector Registry"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    # OpenChain signature database export
    OPENCHAIN_EXPORT_URL: str = "https://api.openchain.xyz/signature-database/v1/export"
    SELECTOR_EXPORT_PATH: str = "data/openchain_export.txt"
    SELECTOR_FETCH_TIMEOUT: Optional[float] = None  # seconds, None = unbounded
    SELECTOR_DOWNLOAD_IF_MISSING: bool = False
    SELECTOR_LOAD_ON_STARTUP: bool = True

    # Raise on signatures eth_abi cannot parse instead of dropping the record
    STRICT_SIGNATURE_PARSING: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of {allowed_envs}")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Create global settings instance
settings = Settings()


def is_production() -> bool:
    """Check if running in production environment."""
    return settings.ENVIRONMENT == "production"
