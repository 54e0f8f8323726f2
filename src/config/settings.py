"""Application Settings - Pydantic Settings for environment configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file or environment variables.
    Validation is automatic via Pydantic.
    """

    # Flow endpoint encryption
    private_key: str = ""
    passphrase: str = ""
    app_secret: str = ""

    # Platform-reserved status codes
    signature_invalid_status_code: int = 432
    crypto_error_status_code: int = 421

    # Database (Supabase)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_key: str = ""
    database_url: str = ""

    # Observability
    otlp_endpoint: str = "http://localhost:4318/v1/traces"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    api_port: int = 3000
    api_host: str = "0.0.0.0"

    # Feature Flags
    enable_tracing: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("private_key")
    @classmethod
    def expand_newlines(cls, v: str) -> str:
        """Accept PEM keys stored on a single line with escaped newlines."""
        return v.replace("\\n", "\n").strip()

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def has_private_key(self) -> bool:
        return bool(self.private_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for performance - settings are loaded once.
    """
    return Settings()
