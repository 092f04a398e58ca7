"""
Application Configuration Module

Pydantic Settings gives us type-safe configuration loaded from environment
variables or a local .env file.

PATTERN: Settings Singleton
===========================
A single Settings instance is cached with @lru_cache, so the .env file is
read once and every module sees the same values.

Usage:
    from bookreview.config import get_settings

    settings = get_settings()
    print(settings.app_name)

The token signing key and lifetime used to be hard-coded constants of the
service; both are plain settings now (SECRET_KEY, TOKEN_EXPIRE_SECONDS).
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    SECURITY NOTE:
    ==============
    - secret_key has a validator; a placeholder value stops the app at startup
    - Passwords are stored as given (no hashing is part of this service)
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Book Review API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, auto-reload)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=5000,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    secret_key: str = Field(
        default="REPLACE_WITH_YOUR_GENERATED_SECRET_KEY",
        description="Key used to sign access tokens"
    )
    token_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    token_expire_seconds: int = Field(
        default=3600,
        description="Lifetime of an access token issued at login"
    )
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Session Settings
    # -------------------------------------------------------------------------
    session_cookie_name: str = Field(
        default="session",
        description="Cookie that carries the opaque session identifier"
    )
    session_path_prefix: str = Field(
        default="/customer",
        description="Sessions are only attached to requests under this path"
    )
    session_https_only: bool = Field(
        default=False,
        description="Mark the session cookie as Secure"
    )

    # -------------------------------------------------------------------------
    # Rate Limiting Settings
    # -------------------------------------------------------------------------
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable request rate limiting"
    )
    rate_limit_storage_uri: str = Field(
        default="memory://",
        description="Storage backend for rate limit counters"
    )
    rate_limit_default: str = Field(
        default="100/minute",
        description="Limit applied to read endpoints"
    )
    rate_limit_write: str = Field(
        default="30/minute",
        description="Limit applied to register, login and review writes"
    )

    # -------------------------------------------------------------------------
    # Simulated Store Latency
    # -------------------------------------------------------------------------
    # Off by default. Useful for demos of slow or flaky storage.
    simulated_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Artificial delay added to catalog reads, in milliseconds"
    )
    simulated_failure_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Probability that a catalog read fails with a store error"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate that secret_key is not a placeholder value.

        The application will fail to start if SECRET_KEY is not properly set.

        Raises:
            ValueError: If secret key is a placeholder or too short
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "SECRET_KEY contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v

    @field_validator("token_expire_seconds")
    @classmethod
    def validate_token_expiry(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("token_expire_seconds must be positive")
        return v

    @field_validator("session_path_prefix")
    @classmethod
    def validate_session_prefix(cls, v: str) -> str:
        """Normalize to a leading slash and no trailing slash."""
        return "/" + v.strip("/")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    First call creates and validates the Settings instance; subsequent
    calls return the cached one.
    """
    return Settings()
