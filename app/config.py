# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are never read at import time. The app factory asks for them
# (or receives them injected) and passes them down through AppContext.
# =============================================================================

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Datastore (Supabase / Postgres)
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Startup Readiness
    # -------------------------------------------------------------------------

    DB_READY_RETRIES: int = Field(
        default=15,
        ge=1,
        description="How many times to probe the datastore before giving up"
    )

    DB_READY_DELAY_SECONDS: float = Field(
        default=3.0,
        ge=0.0,
        description="Delay between datastore readiness probes"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Sessions & Passwords
    # -------------------------------------------------------------------------

    SESSION_SECRET: str = Field(
        default="dev-session-secret-change-in-production",
        min_length=16,
        description="Secret used to sign session cookies"
    )

    SESSION_COOKIE_NAME: str = Field(
        default="flowershop.sid",
        description="Name of the session cookie"
    )

    SESSION_MAX_AGE_HOURS: int = Field(
        default=24,
        ge=1,
        description="Fixed session lifetime from creation (no sliding renewal)"
    )

    SESSION_COOKIE_SECURE: bool | None = Field(
        default=None,
        description="Send the cookie over HTTPS only (defaults to on in production)"
    )

    SESSION_BACKEND: Literal["datastore", "memory"] = Field(
        default="datastore",
        description="Where session records live"
    )

    SESSION_PRUNE_INTERVAL_SECONDS: int = Field(
        default=900,
        ge=0,
        description="How often expired sessions are purged (0 disables)"
    )

    BCRYPT_ROUNDS: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt cost factor for password hashes"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(hours=self.SESSION_MAX_AGE_HOURS)

    @property
    def session_cookie_secure(self) -> bool:
        if self.SESSION_COOKIE_SECURE is None:
            return self.is_production
        return self.SESSION_COOKIE_SECURE

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
