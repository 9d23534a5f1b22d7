"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Upstream REST backend configuration."""

    model_config = SettingsConfigDict(env_prefix="BACKEND_")

    base_url: str = "http://localhost:5000"
    timeout: float = 30.0

    # Retry settings (idempotent calls only)
    max_retries: int = 3
    retry_delay: float = 0.5
    retry_multiplier: float = 2.0

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class PaystackSettings(BaseSettings):
    """Payment widget configuration."""

    model_config = SettingsConfigDict(env_prefix="PAYSTACK_")

    public_key: str = ""
    currency: str = "NGN"
    script_url: str = "https://js.paystack.co/v1/inline.js"
    load_timeout: float = 10.0

    # Load the widget script when the app starts
    preload_on_start: bool = True

    @property
    def is_configured(self) -> bool:
        return bool(self.public_key.strip())


class DisplaySettings(BaseSettings):
    """Presentation defaults shared by the view models."""

    model_config = SettingsConfigDict(env_prefix="DISPLAY_")

    currency_symbol: str = "₦"
    invoices_page_size: int = 5


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stockbook Dashboard"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    backend: BackendSettings = Field(default_factory=BackendSettings)
    paystack: PaystackSettings = Field(default_factory=PaystackSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
