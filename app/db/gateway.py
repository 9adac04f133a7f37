# app/db/gateway.py
"""
Persistence gateway: the one object that owns the database engine.

A gateway is created per process, opened on startup and closed on shutdown,
and handed to the data-access layer explicitly. Nothing else in the service
creates engines or sessions on its own.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

import app.models  # noqa: F401  registers every table on Base.metadata
from app.db.base_class import Base

logger = logging.getLogger(__name__)


def _as_statement(query: Any) -> Any:
    if isinstance(query, str):
        return text(query)
    return query


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless asked per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _rows(result) -> list:
    if not result.returns_rows:
        return []
    return list(result.all())


class TransactionHandle:
    """
    One open database transaction.

    Statements issued through the handle share a single connection, so they
    either all become visible on ``commit()`` or none do after ``rollback()``.
    The underlying ORM session is exposed as ``session`` for unit-of-work
    style writes (``add`` + ``flush``).
    """

    def __init__(self, session: Session):
        self.session = session
        self._finished = False

    def execute(self, query: Any, params: Optional[Mapping[str, Any]] = None) -> list:
        result = self.session.execute(_as_statement(query), params or {})
        return _rows(result)

    def add(self, obj: Any) -> Any:
        self.session.add(obj)
        return obj

    def flush(self) -> None:
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()
        self._finished = True

    def rollback(self) -> None:
        self.session.rollback()
        self._finished = True

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "TransactionHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is not None or not self._finished:
                self.session.rollback()
        finally:
            self.close()


class PersistenceGateway:
    def __init__(self, url: str, *, echo: bool = False, **engine_options: Any):
        self.url = url
        self.echo = echo
        self.engine_options = engine_options
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Persistence gateway is not open")
        return self._engine

    def open(self) -> "PersistenceGateway":
        if self._engine is not None:
            return self

        options = dict(self.engine_options)
        if self.url.startswith("sqlite"):
            # Sessions are used from FastAPI's threadpool.
            options.setdefault("connect_args", {"check_same_thread": False})
        else:
            options.setdefault("pool_pre_ping", True)

        self._engine = create_engine(self.url, echo=self.echo, **options)
        if self.url.startswith("sqlite"):
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Persistence gateway opened (%s)", self._engine.url.render_as_string(hide_password=True))
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Persistence gateway closed")

    def create_all(self) -> None:
        """Create every mapped table. Used by tests and local bootstrapping."""
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def _new_session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Persistence gateway is not open")
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """A short-lived session for reads; always closed on exit."""
        db = self._new_session()
        try:
            yield db
        finally:
            db.close()

    def execute(self, query: Any, params: Optional[Mapping[str, Any]] = None) -> list:
        """Run a single statement in its own transaction and return its rows."""
        with self.begin_transaction() as tx:
            rows = tx.execute(query, params)
            tx.commit()
        return rows

    def begin_transaction(self) -> TransactionHandle:
        db = self._new_session()
        db.begin()
        return TransactionHandle(db)
