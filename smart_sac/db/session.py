"""Database engine and session management."""
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from smart_sac.config.settings import settings
from smart_sac.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """
    Process-wide persistence handle.

    Owns the SQLAlchemy engine and session factory. `init()` is called once
    at application startup and `dispose()` at shutdown; services receive
    either this handle or a session produced by it.
    """

    def __init__(self, url: Optional[str] = None, *, echo: Optional[bool] = None):
        self.url = url or settings.get_database_url()
        self.echo = settings.DATABASE_ECHO if echo is None else echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"pool_pre_ping": True, "echo": self.echo}
        if self.is_sqlite:
            # Request handlers run on a threadpool, so connections cross threads.
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["pool_size"] = settings.DB_POOL_SIZE
            options["max_overflow"] = settings.DB_POOL_OVERFLOW
        return options

    def init(self) -> "Database":
        if self._engine is not None:
            return self

        self._engine = create_engine(self.url, **self._engine_options())
        if self.is_sqlite:
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database engine initialized", extra={"dialect": self._engine.dialect.name})
        return self

    def dispose(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database.init() has not been called")
        return self._engine

    def new_session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database.init() has not been called")
        return self._session_factory()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session scope that always closes; commit is the caller's job."""
        db = self.new_session()
        try:
            yield db
        finally:
            db.close()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the handle attached to the running app."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = get_database(request).new_session()
    try:
        yield db
    finally:
        db.close()
