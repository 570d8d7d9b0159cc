"""
Configuration management for the Task API.

Settings are loaded from environment variables (or a `.env` file) and
validated once at import time.

Design decisions:
- Pydantic Settings for automatic env var loading and validation
- Separate sections for database, application, server and security
- Validators reject misconfiguration at startup rather than at first request
- Properties for computed values (is_production, is_development)
"""

from typing import Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables.
    Example: DATABASE_URL=postgresql://... uvicorn taskapi.main:app
    """

    # ===== Database Configuration =====
    database_url: str = Field(
        default="sqlite:///./tasks.db",
        description="SQLAlchemy database URL for the tasks table"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements emitted by the engine"
    )

    # ===== Application Settings =====
    app_env: str = Field(
        default="development",
        pattern="^(development|test|staging|production)$",
        description="Application environment"
    )
    api_prefix: str = Field(
        default="",
        description="Path prefix for the task routes (e.g. /api)"
    )
    log_level: str = Field(
        default="info",
        pattern="^(debug|info|warning|error|critical)$",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        pattern="^(json|console)$",
        description="Log output format (json for prod, console for dev)"
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind host"
    )
    server_port: int = Field(
        default=8000,
        ge=1024, le=65535,
        description="Server port"
    )

    # ===== Security Configuration =====
    cors_origins: Union[str, list[str]] = Field(
        default="",
        description="Allowed CORS origins - comma-separated string or list"
    )

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Prefix must be empty or an absolute path without trailing slash."""
        v = v.strip()
        if not v:
            return ""
        if not v.startswith("/"):
            raise ValueError("api_prefix must start with '/'")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_and_parse_settings(self):
        """Parse cors_origins from string to list and validate."""
        cors_value = self.cors_origins
        if isinstance(cors_value, str):
            if not cors_value or cors_value.strip() == "":
                self.cors_origins = []
            else:
                self.cors_origins = [origin.strip() for origin in cors_value.split(",") if origin.strip()]

        if self.app_env == "production":
            if not self.cors_origins:
                raise ValueError("CORS origins must be configured in production")
            if "*" in self.cors_origins:
                raise ValueError("CORS wildcard not allowed in production")

        # Local frontend dev server and the API itself
        if not self.cors_origins:
            self.cors_origins = ["http://localhost:5173", "http://localhost:8000"]

        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )


# Singleton instance - loaded once at module import
settings = Settings()
