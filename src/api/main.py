"""FastAPI application initialization and configuration module.

This module serves as the main entry point for the portfolio API.
It handles:
- Application lifecycle management (database connect on startup, close on
  shutdown)
- Middleware registration in the correct order
- Exception handler registration
- Router registration and the static image mount
- Health check and monitoring endpoints
- OpenTelemetry instrumentation

Middleware are executed in reverse order of registration, so the last one
added is the first to see a request.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.middleware.timeout import RequestTimeoutMiddleware
from src.api.routers import images, pages, price, projects, questions
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.exceptions import DatabaseConnectionError
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.infrastructure.constants import IMAGES_URL_PREFIX
from src.infrastructure.database import DatabaseClient


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.

    Raises:
        DatabaseConnectionError: If the database is unreachable at startup.
    """
    settings: Settings = app_instance.state.settings
    database_client = DatabaseClient(settings.database_config)

    try:
        await database_client.connect()
    except DatabaseConnectionError as e:
        logger.critical("Database connection failed during startup: {}", e.message)
        raise

    app_instance.state.database_client = database_client
    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await database_client.close()
    app_instance.state.database_client = None
    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    application.state.settings = settings

    # Register exception handlers BEFORE middleware
    register_exception_handlers(application)

    # 4. Request timeout (innermost, so timeouts are still logged with context)
    application.add_middleware(
        RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds
    )

    # 3. Request logging middleware (logs requests/responses)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 2. Request context middleware (creates correlation ID)
    application.add_middleware(RequestContextMiddleware)

    # 1. CORS (outermost, answers preflight requests directly)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    application.include_router(projects.router)
    application.include_router(price.router)
    application.include_router(questions.router)
    application.include_router(pages.router)
    # The listing route must precede the mount, which would otherwise match
    application.include_router(images.router)
    application.mount(
        IMAGES_URL_PREFIX,
        StaticFiles(directory=settings.images_dir, check_dir=False),
        name="images",
    )

    @application.get("/health", tags=["monitoring"])
    async def health(request: Request) -> dict[str, object]:
        """Health check endpoint for monitoring and container orchestration.

        Returns:
            dict[str, object]: Status and database connectivity. The status is
                "degraded" rather than failing when the database ping fails.
        """
        health_status: dict[str, object] = {"status": "healthy", "database": False}

        database_client: DatabaseClient | None = getattr(
            request.app.state, "database_client", None
        )
        if database_client is None:
            is_healthy, error_msg = False, "Database client is not configured"
        else:
            is_healthy, error_msg = await database_client.check_connection()

        health_status["database"] = is_healthy
        if not is_healthy:
            logger.warning("Database health check failed: {}", error_msg)
            health_status["status"] = "degraded"

        return health_status

    @application.get("/info", tags=["monitoring"])
    async def info(
        app_settings: Annotated[Settings, Depends(get_settings)],
    ) -> dict[str, Any]:
        """Get application information.

        Args:
            app_settings: Application settings injected via dependency.

        Returns:
            dict[str, Any]: Application name, version, and environment.
        """
        return {
            "app_name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "debug": app_settings.debug,
        }

    instrument_app(application, settings)

    return application


app = create_app()
