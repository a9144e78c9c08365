"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per domain, plus health)
- Error handlers (centralized failure-to-envelope mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Database schema creation at startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from aiblog.core.config import Settings, settings
from aiblog.domain.ai.controller import router as ai_router
from aiblog.domain.ai.dependencies import close_ai_clients
from aiblog.domain.category.controller import router as category_router
from aiblog.domain.post.controller import router as post_router
from aiblog.interfaces.health import router as health_router
from aiblog.shared.database import init_database
from aiblog.shared.errors.handlers import register_error_handlers
from aiblog.shared.logging import configure_logging
from aiblog.shared.security.headers import SecurityHeadersMiddleware
from aiblog.shared.security.rate_limiting import configure_limiter

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        app_settings: Settings to build the app with. Defaults to the
            environment-loaded settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        init_database(app_settings)
        logger.info("%s %s started", app_settings.project_name, app_settings.version)
        yield
        close_ai_clients()

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = configure_limiter(app_settings)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=app_settings.api_prefix)
    app.include_router(category_router, prefix=app_settings.api_prefix)
    app.include_router(post_router, prefix=app_settings.api_prefix)
    app.include_router(ai_router, prefix=app_settings.api_prefix)

    return app


app = create_app()
