"""Unit tests for sensitive data sanitization."""

import pytest

from src.core.constants import REDACTED
from src.core.error_context import (
    is_sensitive_field,
    sanitize_dict,
    sanitize_error_context,
    sanitize_value,
)
from src.core.exceptions import ValidationError


@pytest.mark.unit
class TestSanitization:
    """Redaction of sensitive keys."""

    @pytest.mark.parametrize(
        "field", ["password", "PASSWORD", "write_secret", "api_key", "Authorization"]
    )
    def test_sensitive_fields(self, field: str) -> None:
        assert is_sensitive_field(field)

    @pytest.mark.parametrize("field", ["title", "price", "services", "item_id"])
    def test_regular_fields(self, field: str) -> None:
        assert not is_sensitive_field(field)

    def test_sanitize_dict_is_recursive(self) -> None:
        data = {
            "title": "Kitchen",
            "password": "hunter2",
            "nested": {"token": "abc", "items": [{"secret": "x"}]},
        }

        assert sanitize_dict(data) == {
            "title": "Kitchen",
            "password": REDACTED,
            "nested": {"token": REDACTED, "items": [{"secret": REDACTED}]},
        }
        assert data["password"] == "hunter2"

    def test_deep_nesting_is_redacted(self) -> None:
        value: dict[str, object] = {}
        current = value
        for _ in range(15):
            current["child"] = {}
            current = current["child"]  # type: ignore[assignment]

        sanitized = sanitize_value(value)

        assert REDACTED in repr(sanitized)

    def test_error_context_skips_stack_trace(self) -> None:
        error = ValidationError("bad", field="title", context={"password": "p"})

        context = sanitize_error_context(error, {"request_path": "/price"})

        assert context["error_type"] == "ValidationError"
        assert context["request_path"] == "/price"
        assert "stack_trace" not in context["error_attributes"]
        assert context["error_attributes"]["context"]["password"] == REDACTED
