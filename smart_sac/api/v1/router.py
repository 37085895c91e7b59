"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the Smart SAC backend
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text

from smart_sac.api.v1 import admin, students
from smart_sac.config.settings import settings
from smart_sac.core.logging import get_logger
from smart_sac.db.session import Database, get_database

logger = get_logger(__name__)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(admin.router)
router.include_router(students.router)


@router.get("/health", tags=["Health"])
def health_check(database: Database = Depends(get_database)):
    """Liveness plus a trivial database round trip"""
    database_status = "ok"
    try:
        with database.session() as db:
            db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        database_status = "unavailable"

    return {
        "status": "healthy" if database_status == "ok" else "degraded",
        "app_name": settings.APP_NAME,
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": database_status,
    }
