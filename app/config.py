"""
Application configuration with Pydantic Settings for validation and type safety.
Settings are built once at process entry and passed to the app factory.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("mealai.config")


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="Meal AI Service", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, ge=1, le=65535, description="Server port")
    max_body_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1, description="Maximum request body size"
    )

    # Generative AI backend
    gemini_api_key: str = Field(..., min_length=1, description="Gemini API key")
    ai_timeout_sec: float = Field(
        default=30.0, gt=0, description="Timeout for a single backend call"
    )
    json_extraction_fallback: bool = Field(
        default=False,
        description="Extract the first {...} span when the reply is not pure JSON",
    )

    # Shared-secret auth between internal services
    require_internal_secret: bool = Field(
        default=False, description="Reject requests without the internal secret"
    )
    internal_secret: Optional[str] = Field(
        default=None, description="Shared secret expected in X-Internal-Secret"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    cors_allow_credentials: bool = Field(
        default=False, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_title: str = Field(
        default="Meal AI Service", description="API documentation title"
    )
    api_description: str = Field(
        default="Nutrition estimates for meal descriptions and photos",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def strip_api_key(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def check_internal_secret(self):
        if self.require_internal_secret and not self.internal_secret:
            raise ValueError(
                "INTERNAL_SECRET must be set when REQUIRE_INTERNAL_SECRET is enabled"
            )
        return self

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION


def load_settings(**overrides) -> Settings:
    """
    Build the process settings, exiting with status 1 when they are invalid.

    A missing GEMINI_API_KEY is the usual cause; the process must not start
    accepting connections without it.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "settings"
            for err in exc.errors()
        )
        logger.critical("Invalid configuration (%s): %s", fields, exc)
        raise SystemExit(1) from exc
