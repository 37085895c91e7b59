# smart_sac/db/init_db.py
"""Database initialization utilities."""
from sqlalchemy import inspect

from smart_sac.core.logging import get_logger
from smart_sac.db.session import Database
from smart_sac.models import Base

logger = get_logger(__name__)


def init_db(database: Database) -> None:
    """
    Create any missing tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations.
    """
    existing_tables = set(inspect(database.engine).get_table_names())
    Base.metadata.create_all(bind=database.engine)
    created = set(Base.metadata.tables) - existing_tables
    if created:
        logger.info("Database tables created", extra={"tables": sorted(created)})
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")

