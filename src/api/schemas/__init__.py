"""Pydantic models for API request validation and response serialization."""
