"""Request-scoped context for correlation and request identifiers."""

import uuid
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class RequestContext:
    """Async-safe storage for request-scoped data.

    The correlation ID set by the request context middleware is read back by
    the exception handlers so error responses and logs share one identifier.
    """

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        """Set the correlation ID for the current context."""
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID from the current context, if any."""
        return _correlation_id_var.get()

    @staticmethod
    def clear() -> None:
        """Forget the correlation ID of the current context."""
        _correlation_id_var.set(None)


def generate_correlation_id() -> str:
    """Generate a correlation ID for a request that arrived without one.

    Returns:
        str: A UUID4 string.
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Generate a request ID for an individual response.

    Returns:
        str: A prefixed UUID4 string in format 'req-<uuid4>'.
    """
    return f"req-{uuid.uuid4()}"
