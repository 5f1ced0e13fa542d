"""Shared fixtures for infrastructure unit tests."""

from tests.unit.fixtures.test_database_fixtures import fake_database

# Re-export fixtures for pytest discovery
__all__ = ["fake_database"]
