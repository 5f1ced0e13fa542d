"""Request timeout middleware.

Database calls have their own driver timeouts, but nothing else bounds a
request. This middleware cancels any request that runs past the configured
budget and answers 504 instead of leaving the client hanging.
"""

import asyncio

from fastapi import Request, Response, status
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.api.middleware.error_handler import build_error_response
from src.core.exceptions import ErrorCode, Severity


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 504 when a request exceeds ``timeout_seconds``.

    Args:
        app: The ASGI application.
        timeout_seconds: Time budget for one request.
    """

    def __init__(self, app: ASGIApp, *, timeout_seconds: float) -> None:
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Run the request under the time budget.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: The endpoint's response, or a 504 error response.
        """
        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await call_next(request)
        except TimeoutError:
            logger.warning(
                "Request timed out",
                method=request.method,
                path=request.url.path,
                timeout_seconds=self.timeout_seconds,
            )
            return build_error_response(
                status.HTTP_504_GATEWAY_TIMEOUT,
                ErrorCode.REQUEST_TIMEOUT.value,
                f"Request did not complete within {self.timeout_seconds:g} seconds",
                Severity.MEDIUM.value,
            )
