"""Root conftest.py for the portfolio API test suite.

This file contains project-wide fixtures and pytest configuration.
"""

from collections.abc import Generator

import pytest
from loguru import logger

from src.core.config import get_settings
from src.core.context import RequestContext
from src.core.error_context import _get_sensitive_fields
from src.core.logging import _state


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Clear cached settings before and after each test.

    Tests that change the environment get a fresh ``Settings`` built from it,
    and the change does not leak into the next test.
    """
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()

    yield

    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Keep correlation IDs from leaking between tests."""
    RequestContext.clear()

    yield

    RequestContext.clear()


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None]:
    """Keep application logs out of test output.

    Logging stays marked as configured so ``create_app`` does not add a
    stdout sink; tests that inspect records add their own sink.
    """
    logger.remove()
    _state.configured = True

    yield

    logger.remove()
    _state.configured = True
