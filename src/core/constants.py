"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Security and redaction
REDACTED = "[REDACTED]"

# Languages with localized document fields, and the fallback for anything else
SUPPORTED_LANGUAGES = ("en", "ru")
DEFAULT_LANGUAGE = "ru"
