"""User API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Middleware chain installed once per app: RequestId → RequestLogger → Recovery
    - Global error handlers map UserApiError / RequestValidationError → JSON responses
    - Database manager created in the lifespan and held on app.state;
      startup aborts when the database cannot be reached

Design Decisions:
    - create_app(settings) factory: tests build isolated apps with injected settings
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from userapi import __version__
from userapi.api.error_handlers import register_error_handlers
from userapi.api.middleware import register_middleware
from userapi.api.routes import health, users
from userapi.config import Settings, get_settings
from userapi.infrastructure.database import DatabaseSessionManager
from userapi.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not await db_manager.health_check():
        await db_manager.dispose()
        raise RuntimeError("Database connection failed")
    logger.info("Database connection established")
    app.state.db_manager = db_manager
    logger.info(f"User API started ({settings.app_env})")
    yield
    logger.info("User API shutting down")
    await db_manager.dispose()
    app.state.db_manager = None


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a configured FastAPI application."""
    app = FastAPI(title="User API", version=__version__, lifespan=lifespan)
    app.state.settings = settings or get_settings()
    app.state.db_manager = None

    register_middleware(app)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_app()


def run() -> None:
    """Console entry point — serve the app on APP_HOST:APP_PORT."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Server running on port {settings.app_port}")
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)
