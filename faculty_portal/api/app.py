"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config.environment import IS_PRODUCTION_ENVIRONMENT
from ..config.cors import CORS_CONFIG
from ..utils.logging_config import setup_logging
from .dependencies import get_database
from .errors import register_exception_handlers
from .routes import admin, departments, faculty, health

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup, release the engine on shutdown."""
    database = app.dependency_overrides.get(get_database, get_database)()
    try:
        database.ensure_tables_exist()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise
    yield
    database.dispose()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Faculty Activity Portal API",
        description="Faculty and department event records, moderation and reports",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )

    app.add_middleware(CORSMiddleware, **CORS_CONFIG)
    register_exception_handlers(app)

    # Health check stays outside the /api prefix
    app.include_router(health.router)

    app.include_router(faculty.router, prefix="/api")
    app.include_router(departments.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    return app


app = create_application()
