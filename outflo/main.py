"""
OutFlo Backend - FastAPI Application
Main entry point with all routes configured.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from outflo import __version__
from outflo.config import Settings, get_settings
from outflo.context import AppContext
from outflo.core.handlers import register_exception_handlers
from outflo.core.logging_config import configure_logging
from outflo.database import init_db
from outflo.services.message_service import MessageGenerator

# Import all API routers
from outflo.api import campaigns, leads, messages, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    context: AppContext = app.state.context
    await init_db(context.engine)
    logger.info("Database ready")
    yield
    await context.dispose()


def create_app(
    settings: Optional[Settings] = None,
    message_generator: Optional[MessageGenerator] = None
) -> FastAPI:
    """
    Build the API around an explicit context.
    Fails fast when the database URL or the generation credential is missing.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="OutFlo API",
        description="Campaign management, lead search and AI outreach messages",
        version=__version__,
        lifespan=lifespan
    )
    app.state.context = AppContext.build(settings, message_generator=message_generator)

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # Include all routers
    app.include_router(campaigns.router, prefix=settings.API_PREFIX)
    app.include_router(leads.router, prefix=settings.API_PREFIX)
    app.include_router(messages.router, prefix=settings.API_PREFIX)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {
            "message": "OutFlo API is running",
            "version": __version__,
            "docs": "/docs"
        }

    return app
