"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from movie_listing import __version__
from movie_listing.api import api_router
from movie_listing.config import Settings, get_settings
from movie_listing.database import create_engine, create_session_factory, init_models
from movie_listing.frontend import setup_frontend
from movie_listing.services.base import ServiceError
from movie_listing.services.seed import init_data

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - owns the database engine from startup to shutdown."""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Environment: %s", settings.environment)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide driver details

    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    await init_models(engine)
    if settings.seed_database:
        await init_data(app.state.session_factory)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    await engine.dispose()


async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    """Handle ServiceError (and subclasses) globally."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc) or "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for ``settings`` (defaults to the environment)."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(ServiceError, service_error_handler)

    # Include API router
    app.include_router(api_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the API is running."""
        return {"status": "healthy", "version": __version__}

    setup_frontend(app, settings)

    return app


configure_logging(get_settings())
app = create_app()
