"""Global exception handlers for the FastAPI application.

Every failure a handler can produce ends here and is turned into one of:

- 400 ``ErrorResponse`` naming the offending field (``ValidationError`` and
  FastAPI's ``RequestValidationError``)
- 401 plain text (``UnauthorizedError``)
- 404 ``ErrorResponse`` (``NotFoundError`` and unknown routes)
- 500 ``ErrorResponse`` with a generic message (``InternalError`` and any
  unhandled exception); the cause is logged, never returned
- 503 / 504 ``ErrorResponse`` for an unavailable database or a timeout
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException

from src.api.constants import GENERIC_INTERNAL_ERROR_MESSAGE
from src.api.schemas.errors import ErrorResponse, ServiceInfo
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.context import RequestContext, generate_request_id
from src.core.error_context import sanitize_dict, sanitize_error_context
from src.core.exceptions import (
    DatabaseConnectionError,
    ErrorCode,
    InternalError,
    NotFoundError,
    PortfolioError,
    RequestTimeoutError,
    Severity,
    UnauthorizedError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[PortfolioError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    DatabaseConnectionError: status.HTTP_503_SERVICE_UNAVAILABLE,
    RequestTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
}


def get_service_info(settings: Settings) -> ServiceInfo:
    """Create ServiceInfo from application settings.

    Args:
        settings: Application settings

    Returns:
        ServiceInfo: Instance with current service metadata
    """
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def status_code_for(exc: PortfolioError) -> int:
    """Map an application exception to its HTTP status code."""
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(
    status_code: int,
    error_code: str,
    message: str,
    severity: str,
    details: dict[str, object] | None = None,
) -> ORJSONResponse:
    """Render an ``ErrorResponse`` for the current request."""
    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        correlation_id=RequestContext.get_correlation_id(),
        request_id=generate_request_id(),
        severity=severity,
        service_info=get_service_info(get_settings()),
    )
    return ORJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


async def portfolio_error_handler(request: Request, exc: Exception) -> Response:
    """Handle PortfolioError exceptions.

    Args:
        request: The FastAPI request that caused the exception
        exc: The PortfolioError exception to handle

    Returns:
        Response: Error response for the exception's status code

    Raises:
        TypeError: If exc is not a PortfolioError instance
    """
    if not isinstance(exc, PortfolioError):
        raise TypeError(f"Expected PortfolioError, got {type(exc).__name__}")

    status_code = status_code_for(exc)
    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "error_code": exc.error_code,
            "fingerprint": exc.fingerprint,
        },
    )

    if exc.is_expected:
        logger.warning(
            "Handling {exception_type}: {message}",
            exception_type=type(exc).__name__,
            message=exc.message,
            status_code=status_code,
            **error_context,
        )
    else:
        logger.opt(exception=exc.cause).error(
            "Handling {exception_type}: {message}",
            exception_type=type(exc).__name__,
            message=exc.message,
            status_code=status_code,
            **error_context,
        )

    if isinstance(exc, UnauthorizedError):
        return PlainTextResponse(exc.message, status_code=status_code)

    if isinstance(exc, InternalError):
        # Internal details stay in the log
        return build_error_response(
            status_code,
            exc.error_code,
            GENERIC_INTERNAL_ERROR_MESSAGE,
            exc.severity.value,
        )

    return build_error_response(
        status_code,
        exc.error_code,
        exc.message,
        exc.severity.value,
        details=sanitize_dict(exc.context) if exc.context else None,
    )


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Query parameters such as ``page=abc`` fail here. The response names the
    first offending field and lists every field-level message.

    Args:
        request: The FastAPI request that caused the exception
        exc: The RequestValidationError exception to handle

    Returns:
        Response: 400 response with validation error details

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # ('query', 'page') -> 'page'
        field_path = error.get("loc", ())
        field_name = ".".join(str(loc) for loc in field_path[1:]) or "root"
        field_errors.setdefault(field_name, []).append(error.get("msg", "Invalid value"))

    first_field = next(iter(field_errors), "root")

    logger.warning(
        "Request validation failed",
        path=str(request.url.path),
        method=request.method,
        status_code=status.HTTP_400_BAD_REQUEST,
        validation_errors=field_errors,
    )

    return build_error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.VALIDATION_ERROR.value,
        f"Invalid value for '{first_field}'",
        Severity.LOW.value,
        details={"field": first_field, "validation_errors": field_errors},
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException, such as unknown routes.

    Args:
        request: The FastAPI request that caused the exception
        exc: The HTTPException to handle

    Returns:
        Response: Error response with the exception's status code

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    error_code = ErrorCode.INTERNAL_ERROR.value
    severity = Severity.MEDIUM.value
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error_code = ErrorCode.NOT_FOUND.value
        severity = Severity.LOW.value
    elif exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        error_code = ErrorCode.VALIDATION_ERROR.value
        severity = Severity.LOW.value

    logger.warning(
        "HTTP exception",
        status_code=exc.status_code,
        method=request.method,
        path=str(request.url.path),
        detail=exc.detail,
    )

    response = build_error_response(
        exc.status_code, error_code, str(exc.detail), severity
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle any exception no other handler claimed.

    Args:
        request: The FastAPI request that caused the exception
        exc: The unhandled exception

    Returns:
        Response: 500 response with a generic message
    """
    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
        },
    )
    logger.exception(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        **error_context,
    )

    return build_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR.value,
        GENERIC_INTERNAL_ERROR_MESSAGE,
        Severity.CRITICAL.value,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(PortfolioError, portfolio_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
