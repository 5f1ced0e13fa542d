"""HTTP API layer built on FastAPI.

Key components:
- **main**: Application factory and lifecycle management
- **routers**: Projects, price list, questions, images and the HTML forms
- **dependencies**: Body parsing, the write-access guard and page windows
- **middleware**: Cross-cutting concerns for all requests
  - Request timeouts
  - Request context with correlation ID tracking
  - Structured logging with performance metrics
  - Centralized error handling with consistent responses
- **schemas**: Pydantic models for validation and serialization
- **utils**: orjson-backed JSON responses
"""
