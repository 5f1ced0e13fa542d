"""Centralized configuration management with environment-aware defaults.

This module implements the configuration system using Pydantic Settings,
providing type-safe configuration with validation and environment variable
support.

Features:
- **Type safety**: All configuration values are validated and typed
- **Environment variables**: Supports .env files and environment overrides
- **Nested configuration**: Uses __ delimiter for grouped settings
- **Required secrets**: The database URL and the write secret have no
  defaults, so a missing value fails startup instead of running half-configured
- **Caching**: Configuration is cached for performance

Configuration sources (in order of precedence):
1. Environment variables
2. .env file in project root
3. Default values in model definitions
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogConfig(BaseModel):
    """Logging configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_formatter_type: Literal["console", "json"] | None = Field(
        default=None,
        description="Log output formatter. Auto-detected if not specified.",
    )
    excluded_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Paths to exclude from request logging",
    )
    slow_request_threshold_ms: int = Field(
        default=1000,
        gt=0,
        description="Threshold for slow request warnings (milliseconds)",
    )
    sensitive_fields: list[str] = Field(
        default_factory=lambda: [
            "password",
            "token",
            "secret",
            "authorization",
        ],
        description="Field names to redact",
    )


class ObservabilityConfig(BaseModel):
    """OpenTelemetry tracing configuration."""

    enable_tracing: bool = Field(
        default=True,
        description="Enable OpenTelemetry tracing",
    )
    exporter_type: Literal["console", "otlp", "none"] = Field(
        default="console",
        description="Trace exporter type. Defaults to console for development.",
    )
    exporter_endpoint: str | None = Field(
        default=None,
        description="OTLP exporter endpoint",
    )
    trace_sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    @field_validator("exporter_endpoint", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v


class DatabaseConfig(BaseModel):
    """MongoDB connection settings."""

    database_url: str = Field(
        ...,
        description="MongoDB connection string (mongodb://... or mongodb+srv://...)",
    )
    database_name: str | None = Field(
        default=None,
        description="Database name. Defaults to the database named in the URL.",
    )
    server_selection_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="How long the driver waits for a reachable server",
    )
    operation_timeout_ms: int = Field(
        default=10000,
        gt=0,
        description="Upper bound for a single database operation",
    )
    projects_collection: str = Field(default="Projects")
    price_collection: str = Field(default="Price")
    questions_collection: str = Field(default="Questions")

    @field_validator("database_url", mode="after")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate that the URL points at MongoDB."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            msg = "Database URL must use the mongodb:// or mongodb+srv:// scheme"
            raise ValueError(msg)
        return v

    @field_validator("database_name", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v


class AccessConfig(BaseModel):
    """Shared secret guarding the write endpoints."""

    write_secret: SecretStr = Field(
        ...,
        description="Password that write requests must submit",
    )

    @field_validator("write_secret", mode="after")
    @classmethod
    def validate_not_blank(cls, v: SecretStr) -> SecretStr:
        """Reject an empty secret, which would let blank passwords through."""
        if not v.get_secret_value():
            msg = "Write secret must not be empty"
            raise ValueError(msg)
        return v


class PaginationConfig(BaseModel):
    """Page size limits for list endpoints."""

    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    price_list_cap: int = Field(
        default=100,
        ge=1,
        description="Maximum number of price items returned by GET /price",
    )


class Settings(BaseSettings):
    """Main settings class for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(default="Portfolio API", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment the application is running in",
    )
    debug: bool = Field(default=False, description="Debug mode flag")

    # API settings
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=4343, description="API port")
    docs_url: str | None = Field(default="/docs", description="Swagger UI URL")
    redoc_url: str | None = Field(default="/redoc", description="ReDoc URL")
    openapi_url: str | None = Field(
        default="/openapi.json", description="OpenAPI schema URL"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Allowed CORS origins"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Requests running longer than this are answered with 504",
    )

    # Filesystem locations
    images_dir: Path = Field(
        default=Path("images"), description="Root of the image folders"
    )
    static_dir: Path = Field(
        default=Path("static"), description="Directory holding the HTML forms"
    )

    log_config: LogConfig = Field(
        default_factory=LogConfig, description="Logging configuration"
    )
    observability_config: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig, description="Observability configuration"
    )
    pagination_config: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Pagination configuration"
    )

    # Required groups: no defaults, startup fails loudly without them
    database_config: DatabaseConfig = Field(description="Database configuration")
    access_config: AccessConfig = Field(description="Write access configuration")

    def model_post_init(self, __context: object) -> None:
        """Post initialization to set environment-based defaults."""
        super().model_post_init(__context)

        if self.log_config.log_formatter_type is None:
            self.log_config.log_formatter_type = self._detect_formatter()

        if self.environment == "production":
            if self.observability_config.exporter_type == "console":
                self.observability_config.exporter_type = "otlp"
            if self.observability_config.trace_sample_rate == 1.0:
                self.observability_config.trace_sample_rate = 0.1

    def _detect_formatter(self) -> Literal["console", "json"]:
        """Auto-detect log formatter based on environment."""
        if os.getenv("K_SERVICE") or os.getenv("AWS_EXECUTION_ENV"):
            return "json"
        if self.environment == "development":
            return "console"
        return "json"

    @field_validator("docs_url", "redoc_url", "openapi_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        _ = cls
        if v == "":
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
