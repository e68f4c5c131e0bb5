# 📄 File: marketplace/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the user and card service, connects the database, cache and
# login service, and makes sure every error comes back to callers in the same tidy format.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: logging setup and database initialization in the
# lifespan, middleware stack (request logging, error safety net, CORS, optional bearer auth),
# API v1 router registration and exception handlers mapping MarketplaceException and request
# validation errors to the standard error body.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - marketplace.shared.config.settings, marketplace.shared.utils.logging
# - marketplace.shared.infrastructure.database.connection, marketplace.shared.config.redis
# - marketplace.api.middleware.*, marketplace.api.v1.router
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup ("marketplace.main:app")
# - tests (create_application with dependency overrides)

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Sequence

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.api.middleware.authentication import AuthenticationMiddleware
from marketplace.api.middleware.error_handling import ErrorHandlingMiddleware, create_error_response
from marketplace.api.middleware.logging import RequestLoggingMiddleware
from marketplace.api.v1.router import api_v1_router
from marketplace.shared.config.settings import get_settings
from marketplace.shared.core.exceptions import MarketplaceException
from marketplace.shared.utils.logging import log_shutdown_event, log_startup_event, setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup initializes logging and the database engine. Shutdown closes the
    database engine, the Redis pool and the credential service session.
    """
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    log_startup_event(settings.APP_NAME, settings.APP_VERSION, {"environment": settings.ENVIRONMENT})

    from marketplace.shared.infrastructure.database.connection import init_database
    await init_database()
    logger.info("Database connection initialized")

    try:
        yield
    finally:
        log_shutdown_event(settings.APP_NAME)

        from marketplace.shared.infrastructure.database.connection import close_database
        await close_database()
        logger.info("Database connections closed")

        if settings.CACHE_ENABLED:
            from marketplace.shared.config.redis import redis_config
            await redis_config.close_connections()
            logger.info("Redis connections closed")

        from marketplace.modules.user_management.infrastructure.external.auth_service_client import (
            close_auth_service_client,
        )
        await close_auth_service_client()
        logger.info("Credential service client closed")


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    # Last added runs first: logging -> CORS -> error safety net -> authentication
    app.add_middleware(AuthenticationMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS.split(","),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(MarketplaceException)
    async def marketplace_exception_handler(
        request: Request,
        exc: MarketplaceException
    ) -> JSONResponse:
        """Handle domain and infrastructure exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return create_error_response(
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            request_id=getattr(request.state, "request_id", None)
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed requests as 400 with a field to message map."""
        return create_error_response(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            status_code=400,
            details={"errors": validation_errors_to_fields(exc.errors())},
            request_id=getattr(request.state, "request_id", None)
        )

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "health_check": f"{settings.API_V1_PREFIX}/health",
            "api_base": settings.API_V1_PREFIX,
        }

    return app


def validation_errors_to_fields(errors: Sequence[Dict[str, Any]]) -> Dict[str, str]:
    """
    Collapse pydantic errors into {field: message}.

    The location prefix (body, query, path) is dropped and the rest of the path
    is joined with dots, so a bad ``birthDate`` in the body becomes ``"birthDate"``.
    The first message per field wins.
    """
    fields: Dict[str, str] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        field = ".".join(loc) or "request"
        fields.setdefault(field, error.get("msg", "Invalid value"))
    return fields


# Create the FastAPI application
app = create_application()


def main():
    """Run the application with uvicorn (development entry point)."""
    uvicorn.run(
        "marketplace.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
