"""Standardized error response schema.

Every error the API returns as JSON has this shape, whatever raised it:
a validation failure names the offending field in ``details``, a missing
document carries the identifier that was looked up, and internal failures
carry nothing beyond a generic message outside development.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Service information for error context."""

    name: str = Field(..., description="Name of the service", examples=["Portfolio API"])
    version: str = Field(..., description="Version of the service", examples=["1.0.0"])
    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "staging", "production"],
    )


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    error_code: str = Field(
        ...,
        description="Unique error code identifying the error type",
        examples=["VALIDATION_ERROR", "NOT_FOUND", "UNAUTHORIZED"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid value for 'status'", "Price item not found"],
    )

    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details, such as the offending field",
        examples=[{"field": "status", "reason": 'Value error, must be "true" or "false"'}],
    )

    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )

    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["LOW"],
    )

    service_info: ServiceInfo | None = Field(
        default=None,
        description="Information about the service that generated the error",
    )

    request_id: str | None = Field(
        default=None,
        description="Unique request identifier",
        examples=["req-550e8400-e29b-41d4-a716-446655440000"],
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error_code": "VALIDATION_ERROR",
                    "message": "Invalid value for 'price'",
                    "details": {
                        "field": "price",
                        "reason": "Input should be a valid number",
                    },
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2024-06-14T12:00:00+00:00",
                    "severity": "LOW",
                },
                {
                    "error_code": "NOT_FOUND",
                    "message": "Price item not found",
                    "details": {"item_id": "000000000000000000000000"},
                    "timestamp": "2024-06-14T12:00:01+00:00",
                    "severity": "LOW",
                },
            ]
        }
    }
