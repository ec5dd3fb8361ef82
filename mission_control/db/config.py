"""Database configuration for the Mission Control backend."""
from typing import Generator

from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from mission_control.config import DATABASE_URL, SQL_ECHO
from mission_control.utils.logger import get_logger

logger = get_logger("mission_control.db")

IS_SQLITE = DATABASE_URL.startswith("sqlite")
IS_MEMORY = IS_SQLITE and (DATABASE_URL in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in DATABASE_URL)

if IS_SQLITE:
    logger.info("Using SQLite database", url=DATABASE_URL)
else:
    logger.info("Using server database", dialect=DATABASE_URL.split(":", 1)[0])

engine_kwargs = {"echo": SQL_ECHO}
if IS_SQLITE:
    # SQLite connections are shared with the request thread pool
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if IS_MEMORY:
        # A single connection keeps every session on the same in-memory database
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs["pool_pre_ping"] = True

engine = create_engine(DATABASE_URL, **engine_kwargs)

if IS_SQLITE:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if not IS_MEMORY:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session
