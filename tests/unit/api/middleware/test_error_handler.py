"""Unit tests for the global exception handlers."""

from typing import Any

import orjson
import pytest
from fastapi.exceptions import RequestValidationError
from pytest_mock import MockerFixture
from starlette.exceptions import HTTPException

from src.api.middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    portfolio_error_handler,
    status_code_for,
    validation_error_handler,
)
from src.core.context import RequestContext
from src.core.exceptions import (
    DatabaseConnectionError,
    InternalError,
    NotFoundError,
    PortfolioError,
    RequestTimeoutError,
    UnauthorizedError,
    ValidationError,
)


@pytest.fixture
def request_stub(mocker: MockerFixture) -> Any:
    request = mocker.Mock()
    request.method = "POST"
    request.url.path = "/price"
    return request


@pytest.mark.unit
class TestStatusMapping:
    """Exception class to status code."""

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (ValidationError("bad"), 400),
            (UnauthorizedError(), 401),
            (NotFoundError("gone"), 404),
            (InternalError("boom"), 500),
            (DatabaseConnectionError("down"), 503),
            (RequestTimeoutError("slow"), 504),
            (PortfolioError("CUSTOM", "other"), 500),
        ],
    )
    def test_status_code_for(self, error: PortfolioError, status_code: int) -> None:
        assert status_code_for(error) == status_code


@pytest.mark.unit
class TestPortfolioErrorHandler:
    """Application exceptions."""

    async def test_validation_error_names_field(self, request_stub: Any) -> None:
        RequestContext.set_correlation_id("corr-1")

        response = await portfolio_error_handler(
            request_stub, ValidationError("Invalid value for 'price'", field="price")
        )

        assert response.status_code == 400
        body = orjson.loads(response.body)
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == {"field": "price"}
        assert body["correlation_id"] == "corr-1"
        assert body["severity"] == "LOW"

    async def test_unauthorized_is_plain_text(self, request_stub: Any) -> None:
        response = await portfolio_error_handler(request_stub, UnauthorizedError())

        assert response.status_code == 401
        assert response.media_type == "text/plain"
        assert response.body == b"Unauthorized"

    async def test_internal_error_hides_details(self, request_stub: Any) -> None:
        error = InternalError(
            "Database find failed",
            context={"collection": "Price"},
            cause=OSError("socket closed"),
        )

        response = await portfolio_error_handler(request_stub, error)

        body = orjson.loads(response.body)
        assert response.status_code == 500
        assert body["message"] == "Internal Server Error"
        assert body["details"] is None
        assert b"socket" not in response.body

    async def test_details_are_sanitized(self, request_stub: Any) -> None:
        error = NotFoundError("gone", context={"item_id": "1", "password": "p"})

        response = await portfolio_error_handler(request_stub, error)

        body = orjson.loads(response.body)
        assert body["details"] == {"item_id": "1", "password": "[REDACTED]"}

    async def test_rejects_other_exceptions(self, request_stub: Any) -> None:
        with pytest.raises(TypeError, match="Expected PortfolioError"):
            await portfolio_error_handler(request_stub, ValueError("x"))


@pytest.mark.unit
class TestFrameworkErrorHandlers:
    """Validation, HTTP and unhandled exceptions."""

    async def test_request_validation_error(self, request_stub: Any) -> None:
        error = RequestValidationError(
            [
                {"loc": ("query", "page"), "msg": "Input should be a valid integer"},
                {"loc": ("query", "limit"), "msg": "Input should be a valid integer"},
            ]
        )

        response = await validation_error_handler(request_stub, error)

        body = orjson.loads(response.body)
        assert response.status_code == 400
        assert body["message"] == "Invalid value for 'page'"
        assert body["details"]["field"] == "page"
        assert set(body["details"]["validation_errors"]) == {"page", "limit"}

    async def test_http_not_found(self, request_stub: Any) -> None:
        response = await http_exception_handler(
            request_stub, HTTPException(status_code=404, detail="Not Found")
        )

        assert response.status_code == 404
        assert orjson.loads(response.body)["error_code"] == "NOT_FOUND"

    async def test_http_method_not_allowed_keeps_headers(
        self, request_stub: Any
    ) -> None:
        response = await http_exception_handler(
            request_stub,
            HTTPException(status_code=405, headers={"Allow": "GET"}),
        )

        assert response.status_code == 405
        assert response.headers["allow"] == "GET"

    async def test_generic_exception(self, request_stub: Any) -> None:
        response = await generic_exception_handler(
            request_stub, RuntimeError("internal detail")
        )

        assert response.status_code == 500
        assert b"internal detail" not in response.body
        assert orjson.loads(response.body)["severity"] == "CRITICAL"
