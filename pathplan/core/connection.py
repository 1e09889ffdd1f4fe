"""
Database connection and session management
"""

from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pathplan.core.config import db_config
from pathplan.core.exceptions import StorageError
from pathplan.core.logging import get_logger
from pathplan.models import Base

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create an engine; SQLite connections get foreign key enforcement"""
    url = url or db_config.database_url
    echo = db_config.pathplan_database_echo if echo is None else echo

    kwargs = {"echo": echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool

    db_engine = create_engine(url, **kwargs)
    if db_engine.dialect.name == "sqlite":
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("Created engine for %s", db_engine.url.render_as_string(hide_password=True))
    return db_engine


def init_storage(db_engine: Engine) -> None:
    """Create every table; run once before opening a store"""
    try:
        Base.metadata.create_all(bind=db_engine)
    except SQLAlchemyError as exc:
        logger.error("Could not initialise storage: %s", exc)
        raise StorageError("init_storage", str(exc)) from exc
    logger.info("Storage initialised")


engine = create_db_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Session generator (dependency injection style)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
