"""Connection to the item shop's PostgreSQL database."""

from __future__ import annotations

import logging
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker

from .config import DatabaseConfig

_log = logging.getLogger(__name__)
_instance: Database | None = None
_lock = threading.Lock()


def build_url(conf: DatabaseConfig) -> URL:
    """Build the PostgreSQL connection URL described by ``conf``."""
    return URL.create(
        "postgresql",
        username=conf.user,
        password=conf.password,
        host=conf.host,
        port=conf.port,
        database=conf.dbname,
        query={"sslmode": conf.sslmode, "options": f"-c search_path={conf.schema}"},
    )


class Database:
    """An open database with a factory for ORM sessions."""

    def __init__(self, url: str | URL) -> None:
        self.url = make_url(url)
        self.engine = create_engine(self.url)
        with self.engine.connect():
            pass
        self._sessions = sessionmaker(bind=self.engine)
        _log.info("Connected to database %s", self.url.database)

    def session(self) -> Session:
        """Return a new ORM session bound to this database."""
        return self._sessions()


def get_database(conf: DatabaseConfig) -> Database:
    """Return the process-wide database, connecting on first use."""
    global _instance
    with _lock:
        if _instance is None:
            _instance = Database(build_url(conf))
        return _instance