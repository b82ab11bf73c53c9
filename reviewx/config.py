"""
Configuration Management Module

This module handles all application configuration using Pydantic Settings.
Configuration is loaded from environment variables with strong typing and validation.

Design Decisions:
- Use Pydantic Settings for automatic environment variable loading
- Provide sensible defaults for optional settings
- Validate configuration at startup (fail-fast approach)
- The Gemini credential is the only required value
"""

from functools import lru_cache
from typing import Any, List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class FatalConfigurationError(Exception):
    """Raised when the service cannot start with the current configuration."""
    pass


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values are loaded from environment variables only,
    never hardcoded or logged.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # =========================================================================
    # Gemini Configuration
    # =========================================================================
    google_gemini_key: str = Field(
        description="Google Gemini API key"
    )

    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used to generate reviews"
    )

    gemini_base_url: str = Field(
        default=GEMINI_OPENAI_BASE_URL,
        description="OpenAI-compatible endpoint serving the Gemini model"
    )

    system_instruction: Optional[str] = Field(
        default=None,
        description="Replaces the built-in reviewer instruction when set"
    )

    temperature: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature (provider default when unset)"
    )

    max_output_tokens: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on generated tokens (provider default when unset)"
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout for a single provider call in seconds"
    )

    # =========================================================================
    # Retry Configuration
    # =========================================================================
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retry attempts for transient provider failures"
    )

    retry_base_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Base delay between retries in seconds"
    )

    retry_max_delay: float = Field(
        default=30.0,
        ge=0.0,
        description="Maximum delay between retries in seconds"
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port to bind the server"
    )

    cors_origins: str = Field(
        default="http://localhost:5173,https://ReviewX.vercel.app",
        description="Comma-separated origins allowed to call the API"
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    log_json_format: bool = Field(
        default=True,
        description="Enable JSON logging format"
    )

    log_requests: bool = Field(
        default=False,
        description="Enable request/response logging"
    )

    # =========================================================================
    # Validators
    # =========================================================================
    @field_validator("google_gemini_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Reject blank credentials."""
        v = v.strip()
        if not v:
            raise ValueError("GOOGLE_GEMINI_KEY must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    # =========================================================================
    # Computed Properties
    # =========================================================================
    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of allowed CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings, turning validation failures into a fatal error.

    Args:
        **overrides: Values passed straight to the Settings constructor

    Returns:
        Validated Settings instance

    Raises:
        FatalConfigurationError: If a required value is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) or "settings"
            for error in e.errors()
        )
        raise FatalConfigurationError(f"Invalid configuration: {fields}") from e


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once,
    which is important for performance and consistency.

    Returns:
        Settings instance
    """
    return load_settings()
