"""Shared helpers for tests: throwaway SQLite settings and a database that fails on demand."""

import os
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from pydantic import SecretStr
from sqlalchemy.orm import Session

from securenotes.core.config import Settings
from securenotes.core.database import Database
from securenotes.core.errors import StoreUnavailable


def make_settings(db_dir: str, **overrides: Any) -> Settings:
    """Settings pointing at a SQLite file in db_dir, with cheap bcrypt and plain-HTTP cookies."""
    values: dict[str, Any] = {
        "DATABASE_URL": f"sqlite:///{os.path.join(db_dir, 'notes.db')}",
        "DB_AUTO_CREATE_TABLES": True,
        "DB_READ_RETRIES": 0,
        "BCRYPT_ROUNDS": 4,
        "JWT_SECRET": SecretStr("test-secret"),
        "AUTH_COOKIE_SECURE": False,
        "AUTH_COOKIE_SAMESITE": "lax",
        "SESSION_BACKEND": "jwt",
        "OUTAGE_TOGGLE_ADMIN_ONLY": False,
    }
    values.update(overrides)
    return Settings(**values)


class TempDatabaseMixin:
    """unittest mixin: a fresh SQLite file with all tables for each test."""

    def setUp(self) -> None:
        super().setUp()
        self._tmpdir = tempfile.TemporaryDirectory()
        self.settings = make_settings(self._tmpdir.name)
        self.database = self.make_database(self.settings)
        self.database.create_tables()

    def tearDown(self) -> None:
        self.database.dispose()
        self._tmpdir.cleanup()
        super().tearDown()

    def make_database(self, settings: Settings) -> Database:
        return Database(settings)


class FlakyDatabase(Database):
    """Database whose transaction() raises StoreUnavailable for the named operations."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.failing: set[str] = set()

    @contextmanager
    def transaction(self, operation: str) -> Generator[Session, None, None]:
        if operation in self.failing:
            raise StoreUnavailable(cause=RuntimeError(f"simulated failure: {operation}"))
        with super().transaction(operation) as session:
            yield session
