"""Database engine/session helpers."""

from __future__ import annotations

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

DB_URL_ENV_VAR = "RDD_DB_URL"


def resolve_db_url(cli_value: str | None, config_value: str) -> str:
    """Pick the database URL: explicit option, then environment, then config file."""
    if cli_value:
        return cli_value
    return os.environ.get(DB_URL_ENV_VAR) or config_value


def create_db_engine(db_url: str) -> Engine:
    """Create a SQLAlchemy engine; SQLite URLs get foreign-key enforcement."""
    engine = create_engine(db_url, pool_pre_ping=True, future=True)
    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
