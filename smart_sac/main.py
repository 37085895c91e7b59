from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smart_sac.api.v1.router import router as api_v1_router
from smart_sac.config.settings import settings
from smart_sac.core.exception_handlers import register_exception_handlers
from smart_sac.core.logging import get_logger, setup_logging
from smart_sac.core.middleware import register_middlewares
from smart_sac.db.init_db import init_db
from smart_sac.db.session import Database
from smart_sac.services.background import HistoryRetentionSweeper

logger = get_logger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    - Attaches the persistence handle; the engine is created on startup.

    Args:
        database: Handle to use instead of one built from settings
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS Configuration
    if settings.CORS_ORIGINS and settings.CORS_ORIGINS != ["*"]:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Permissive for development; tighten in production
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    app.state.database = database or Database()
    app.state.history_sweeper = None

    @app.on_event("startup")
    async def on_startup() -> None:
        db = app.state.database.init()
        if not settings.is_production():
            # Production schemas are managed by migrations
            init_db(db)

        if settings.HISTORY_PURGE_ENABLED:
            app.state.history_sweeper = HistoryRetentionSweeper(db)
            await app.state.history_sweeper.start()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        if app.state.history_sweeper is not None:
            await app.state.history_sweeper.stop()
        app.state.database.dispose()
        logger.info("Application shutdown complete")

    return app


app = create_app()
