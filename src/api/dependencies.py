"""Request-scoped FastAPI dependencies.

- **read_payload**: the request body as a dict, from JSON or form data
- **require_write_access**: the shared-secret guard for write endpoints
- **page_window**: validated ``page``/``limit`` query parameters

The write endpoints read their body through ``read_payload`` instead of a
pydantic body parameter. FastAPI validates body parameters before it runs
route dependencies, and the access guard must reject a request before any
field of it is validated.
"""

from secrets import compare_digest
from typing import Annotated, Any

import orjson
from fastapi import Depends, Query, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.api.constants import FORM_CONTENT_TYPES, PASSWORD_FIELD
from src.core.exceptions import UnauthorizedError, ValidationError
from src.domain.pagination import PageWindow
from src.infrastructure.database import AppSettings


async def read_payload(request: Request) -> dict[str, Any]:
    """Parse the request body into a dict.

    Form submissions (the add/edit HTML pages) and JSON bodies are both
    accepted. A missing body is an empty dict.

    Raises:
        ValidationError: If the body is not valid JSON or not a JSON object.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    body = await request.body()
    if not body.strip():
        return {}

    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        msg = "Request body is not valid JSON"
        raise ValidationError(msg, field="body", cause=e) from e

    if not isinstance(payload, dict):
        msg = "Request body must be a JSON object"
        raise ValidationError(msg, field="body")
    return payload


RequestPayload = Annotated[dict[str, Any], Depends(read_payload)]


def require_write_access(payload: RequestPayload, settings: AppSettings) -> None:
    """Reject the request unless the body carries the write secret.

    Raises:
        UnauthorizedError: If ``password`` is missing or wrong.
    """
    password = payload.get(PASSWORD_FIELD)
    expected = settings.access_config.write_secret.get_secret_value()
    if not isinstance(password, str) or not compare_digest(
        password.encode(), expected.encode()
    ):
        raise UnauthorizedError


def page_window(
    settings: AppSettings,
    page: Annotated[int | None, Query(ge=1, description="Page number")] = None,
    limit: Annotated[int | None, Query(ge=1, description="Items per page")] = None,
) -> PageWindow:
    """Resolve the page window of a listing request.

    Missing values default to the first page and the configured page size.

    Raises:
        ValidationError: If ``limit`` exceeds the configured maximum.
    """
    pagination = settings.pagination_config
    if limit is not None and limit > pagination.max_page_size:
        msg = f"limit must not exceed {pagination.max_page_size}"
        raise ValidationError(
            msg, field="limit", context={"max_page_size": pagination.max_page_size}
        )
    return PageWindow(page or 1, limit or pagination.default_page_size)


Pagination = Annotated[PageWindow, Depends(page_window)]


def validate_payload[ModelT: BaseModel](
    model: type[ModelT], payload: dict[str, Any]
) -> ModelT:
    """Validate a payload against a request model.

    Args:
        model: The pydantic model to validate against.
        payload: The parsed request body.

    Returns:
        ModelT: The validated model.

    Raises:
        ValidationError: Naming the first field that failed.
    """
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise ValidationError(
            f"Invalid value for '{field}'",
            field=field,
            context={"reason": first["msg"]},
            cause=e,
        ) from e
