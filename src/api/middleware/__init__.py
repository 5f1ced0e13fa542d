"""FastAPI middleware for cross-cutting request/response concerns.

- **RequestTimeoutMiddleware**: Bounds request duration, answering 504
- **RequestContextMiddleware**: Manages correlation IDs and request context
- **RequestLoggingMiddleware**: Structured logging with performance tracking
- **error_handler**: Centralized exception handling with consistent responses

Middleware run in reverse order of registration; see ``src.api.main``.
"""
