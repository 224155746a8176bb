"""
Configuration management for supp_ix.

Uses pydantic-settings for environment variable loading and validation.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Compound data provider
    api_url: str = Field(
        default="https://api.truthstack.co",
        description="Base URL of the compound data API",
    )
    api_key: str | None = Field(default=None, description="API key sent as X-API-Key")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts per request on transport errors",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )

    @property
    def base_url(self) -> str:
        """API URL without a trailing slash."""
        return self.api_url.rstrip("/")


# Global settings instance
settings = Settings()
