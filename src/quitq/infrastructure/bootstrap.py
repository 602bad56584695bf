"""Wiring for the CLI: picks the database, builds the SQL unit of work.

Handlers only see the UnitOfWork ABC; this module is where the SQLAlchemy
implementation gets chosen.

Configuration comes from the environment:

    QUITQ_DATABASE_URL  SQLAlchemy URL (default: SQLite file ./data/quitq.db)
    QUITQ_LOG_LEVEL     default log level for the CLI (default: WARNING)
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from quitq.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from quitq.infrastructure.persistence.tables import Base

DATABASE_URL_ENV = "QUITQ_DATABASE_URL"
LOG_LEVEL_ENV = "QUITQ_LOG_LEVEL"

_DEFAULT_DATA_DIR = Path.cwd() / "data"


def database_url() -> str:
    url = os.environ.get(DATABASE_URL_ENV)
    if url:
        return url
    _DEFAULT_DATA_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{_DEFAULT_DATA_DIR / 'quitq.db'}"


def log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()


@lru_cache(maxsize=None)
def session_factory(url: str) -> sessionmaker[Session]:
    """Build the engine for *url* once, create missing tables, return a factory."""
    engine = create_engine(url, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


def unit_of_work() -> SqlUnitOfWork:
    return SqlUnitOfWork(session_factory(database_url()))
