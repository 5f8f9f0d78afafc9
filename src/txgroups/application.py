"""
FastAPI application factory.

Creates and configures the FastAPI application with all middleware,
routers, and exception handlers.
"""

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from txgroups import __version__
from txgroups.config import get_settings
from txgroups.core.logging import logger
from txgroups.domain.errors import DomainError
from txgroups.exception_handlers import (
    domain_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from txgroups.lifespan import lifespan
from txgroups.middleware import TraceIDMiddleware
from txgroups.routes import register_routes
from txgroups.services.groups import GroupService


def create_app(group_service: GroupService | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        group_service: Service to use instead of building one from settings
            at startup (tests inject one backed by an in-memory store)

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    # Must be set BEFORE creating FastAPI instance
    docs_url = "/docs" if settings.enable_docs else None
    redoc_url = "/redoc" if settings.enable_docs else None
    openapi_url = "/openapi.json" if settings.enable_docs else None

    app = FastAPI(
        title="txgroups",
        description="Bounded-membership groups kept consistent with database transactions",
        version=__version__,
        lifespan=lifespan,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
    )
    app.state.group_service = group_service

    # Register exception handlers (RFC 7807 Problem Details)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.add_middleware(TraceIDMiddleware)

    register_routes(app)

    logger.info(f" FastAPI application created (v{__version__})")
    logger.info(
        f"Store provider: {settings.infrastructure_provider}, "
        f"transactions enabled: {settings.transactions_enabled}"
    )

    return app
