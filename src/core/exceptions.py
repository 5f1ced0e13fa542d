"""Structured exception hierarchy for consistent error handling.

This module defines the exception system for the portfolio API, providing a
rich error model that supports debugging, monitoring, and client
communication.

Key components:
- **ErrorCode enum**: Standardized error identifiers for programmatic handling
- **Severity enum**: Error classification for monitoring and alerting
- **PortfolioError**: Base exception with rich context and fingerprinting
- **Specialized exceptions**: One class per HTTP outcome the API produces

Every handler-level failure is raised as one of these classes and mapped to a
response by the global exception handlers in ``src.api.middleware``.
"""

import hashlib
import traceback
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for the portfolio API."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input validation failed due to invalid or malformed data."""

    NOT_FOUND = "NOT_FOUND"
    """The requested resource could not be found."""

    UNAUTHORIZED = "UNAUTHORIZED"
    """The submitted write secret is missing or wrong."""

    REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
    """The request did not complete within the configured time budget."""

    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
    """The database could not be reached."""


class Severity(Enum):
    """Severity levels for errors."""

    LOW = "LOW"
    """Expected errors caused by client input."""

    MEDIUM = "MEDIUM"
    """Errors that may affect some features but not critical ops."""

    HIGH = "HIGH"
    """Errors impacting critical functionality or security."""

    CRITICAL = "CRITICAL"
    """Errors requiring immediate attention."""


class PortfolioError(Exception):
    """Base exception class for all application exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        # Capture stack trace at creation time, excluding this frame
        self.stack_trace = traceback.format_stack()[:-1]
        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Generate a fingerprint for error grouping.

        Returns:
            str: A hash string built from the error type and raise location
        """
        max_frames = 5
        relevant_frames = self.stack_trace[-max_frames:]

        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"
        for frame in relevant_frames:
            if "site-packages" not in frame and "src/" in frame:
                lines = frame.strip().split("\n")
                if lines:
                    fingerprint_data += f":{lines[0]}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """Whether this error is part of normal operation (LOW or MEDIUM)."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        """Return a string representation of the exception."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return a detailed representation of the exception."""
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(PortfolioError):
    """Raised when a request field is missing or malformed.

    Args:
        message: Description of the validation failure
        field: Name of the offending field, reported back to the client
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.field = field
        merged = dict(context or {})
        if field is not None:
            merged.setdefault("field", field)
        super().__init__(
            ErrorCode.VALIDATION_ERROR, message, Severity.LOW, merged, cause
        )


class NotFoundError(PortfolioError):
    """Raised when an identifier does not exist or a listing is empty."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.NOT_FOUND, message, Severity.LOW, context, cause)


class UnauthorizedError(PortfolioError):
    """Raised when the submitted write secret does not match."""

    def __init__(
        self,
        message: str = "Unauthorized",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.UNAUTHORIZED, message, Severity.HIGH, context, cause
        )


class InternalError(PortfolioError):
    """Raised when a database or filesystem operation fails.

    The message is replaced by a generic one before it reaches the client;
    the cause is only logged.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.INTERNAL_ERROR, message, Severity.HIGH, context, cause
        )


class RequestTimeoutError(PortfolioError):
    """Raised when a request exceeds the configured time budget."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.REQUEST_TIMEOUT, message, Severity.MEDIUM, context, cause
        )


class DatabaseConnectionError(PortfolioError):
    """Raised when the database cannot be reached or is used before connecting."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.DATABASE_UNAVAILABLE, message, Severity.CRITICAL, context, cause
        )
