"""Database connection, session management and store-error translation."""

import logging
import threading
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from securenotes.core.config import Settings
from securenotes.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Pause between attempts of an idempotent read.
READ_RETRY_BACKOFF_SEC = 0.2


class Database:
    """
    Lazily-created engine and session factory.

    The engine is built on first use, once per Database, with double-checked
    locking so concurrent first callers share the same engine.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None
        self._lock = threading.Lock()

    @property
    def url(self) -> str:
        return self._settings.DATABASE_URL

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._engine is None:
                    engine = _create_engine(self._settings)
                    self._sessionmaker = sessionmaker(
                        autocommit=False,
                        autoflush=False,
                        expire_on_commit=False,
                        bind=engine,
                    )
                    self._engine = engine
                    logger.info(
                        "Database engine created",
                        extra={"database": make_url(self.url).render_as_string(hide_password=True)},
                    )
        return self._engine

    def session(self) -> Session:
        """Return a new session bound to the shared engine."""
        # Ensure engine and sessionmaker are initialized
        _ = self.engine
        assert self._sessionmaker is not None
        return self._sessionmaker()

    @contextmanager
    def transaction(self, operation: str) -> Generator[Session, None, None]:
        """
        Yield a session inside a transaction: commit on success, roll back on error.

        Driver, pool and timeout errors are raised as StoreUnavailable; the
        original exception is logged and kept as the cause.
        """
        try:
            session = self.session()
        except SQLAlchemyError as e:
            logger.error("Database engine unavailable for %s: %s", operation, e)
            raise StoreUnavailable(cause=e) from e
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database operation %s failed: %s", operation, e)
            raise StoreUnavailable(cause=e) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> None:
        """Run a trivial query; raises StoreUnavailable when unreachable."""
        with self.transaction("ping") as session:
            session.execute(text("SELECT 1"))

    def create_tables(self) -> None:
        # Import models so that Base.metadata contains every table.
        from securenotes.models import Base

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreUnavailable(cause=e) from e

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
                self._sessionmaker = None


def _create_engine(settings: Settings) -> Engine:
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() == "sqlite":
        connect_args = {
            "check_same_thread": False,
            # Seconds to wait on a locked database before failing.
            "timeout": settings.DB_OPERATION_TIMEOUT_SEC,
        }
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise each connection sees its own empty database.
            return create_engine(
                url,
                connect_args=connect_args,
                poolclass=StaticPool,
                echo=settings.DEBUG,
            )
        return create_engine(url, connect_args=connect_args, echo=settings.DEBUG)

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=settings.DB_POOL_TIMEOUT_SEC,
        connect_args={
            "connect_timeout": settings.DB_CONNECT_TIMEOUT_SEC,
            "options": f"-c statement_timeout={settings.DB_OPERATION_TIMEOUT_SEC * 1000}",
        },
        echo=settings.DEBUG,
    )


def retry_read(operation: Callable[[], T], retries: int, name: str = "read") -> T:
    """
    Run an idempotent read, retrying on StoreUnavailable up to `retries` extra times.

    Only for reads: a retried write could duplicate a note in one collection.
    """
    attempt = 0
    while True:
        try:
            return operation()
        except StoreUnavailable:
            if attempt >= retries:
                raise
            attempt += 1
            logger.warning("Retrying %s after store error (attempt %s of %s)", name, attempt, retries)
            time.sleep(READ_RETRY_BACKOFF_SEC * attempt)
