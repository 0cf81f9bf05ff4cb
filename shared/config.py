"""
Centralized configuration for IdP Auth.

All settings are loaded from environment variables with sensible defaults.
The session policy values default to the production policy and are only
overridden in tests or for providers with unusual token lifetimes.
"""

from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "IdP Auth"
    app_version: str = "0.1.0"

    # Secure storage
    keychain_service: str = "idp-auth"
    preferences_service: str = "idp-auth.preferences"
    secure_store_backend: str = "memory"  # "memory" or "file"
    secure_store_path: Path = Path(".idp-auth")
    secure_store_key: str = ""

    # Identity providers
    providers_config_path: Path = Path("identity_providers.yaml")

    # HTTP
    http_timeout: float = 30.0  # seconds

    # Session policy (seconds)
    token_refresh_lead_seconds: int = 300
    min_token_refresh_delay_seconds: int = 60
    session_timeout_seconds: int = 1800
    foreground_refresh_threshold_seconds: int = 600


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
