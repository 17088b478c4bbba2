"""
FastAPI application entry point.

This is where:
- The FastAPI app is created (application factory: create_app)
- Logging is configured
- Routes are registered
- Startup/shutdown events are handled
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request

from app.api.routes_my_models import router as my_models_router
from app.core.config import Settings, settings as default_settings
from app.core.db import build_engine, build_sessionmaker

logger = logging.getLogger(__name__)


# =============================================================================
# LOGGING
# =============================================================================


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# =============================================================================
# LIFESPAN MANAGEMENT
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle application startup and shutdown.

    Shutdown disposes the engine's connection pool.
    """
    logger.info("Starting %s", app.state.settings.app_name)
    yield
    logger.info("Shutting down %s", app.state.settings.app_name)
    await app.state.engine.dispose()


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build a FastAPI application for the given settings.

    Tests call this with a testing configuration; production uses the
    environment-driven default.
    """
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title="MyModel API",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_sessionmaker(engine)

    app.include_router(my_models_router, prefix=settings.api_prefix)

    @app.get(
        f"{settings.api_prefix}/health",
        tags=["Health"],
        summary="Health check",
    )
    async def health_check(request: Request) -> dict[str, Any]:
        current = request.app.state.settings
        return {
            "status": "healthy",
            "service": current.app_name,
            "testing": current.testing,
        }

    logger.debug("Application created (testing=%s)", settings.testing)
    return app


app = create_app()
