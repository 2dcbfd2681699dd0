import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from boardstore.core.config import (
    BOARDS_DIRNAME,
    DB_FILENAME,
    LEGACY_INDEX_FILENAME,
    get_data_dir,
)
from boardstore.db.base import Base
from boardstore.db import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def get_boards_dir(data_dir: Optional[Path] = None) -> Path:
    boards_dir = Path(data_dir or get_data_dir()) / BOARDS_DIRNAME
    boards_dir.mkdir(parents=True, exist_ok=True)
    return boards_dir


def get_db_path(boards_dir: Path) -> Path:
    return boards_dir / DB_FILENAME


def get_index_path(boards_dir: Path) -> Path:
    return boards_dir / LEGACY_INDEX_FILENAME


def get_board_data_path(boards_dir: Path, board_id: str) -> Path:
    return boards_dir / f"{board_id}.json"


def _install_sqlite_hooks(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first DML statement; take over so that
    # every session transaction, reads included, is one real SQLite transaction.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


@lru_cache(maxsize=None)
def get_engine(db_path: str) -> Engine:
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
    )
    _install_sqlite_hooks(engine)
    init_db(engine)
    return engine


def init_db(engine: Engine) -> None:
    """Create missing tables and stamp ``user_version`` on a fresh file."""
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        version = conn.execute(text("PRAGMA user_version")).scalar()
        if version == 0:
            conn.execute(text(f"PRAGMA user_version = {SCHEMA_VERSION}"))
            logger.info(f"Initialized board store schema at {engine.url.database}")


def make_session(boards_dir: Path) -> Session:
    engine = get_engine(str(get_db_path(boards_dir)))
    session_factory = sessionmaker(engine, class_=Session, expire_on_commit=False)
    return session_factory()
