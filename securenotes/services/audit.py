"""
Audit logger: fire-and-forget recording of security-relevant actions.

Handlers call record(), which stamps the event and puts it on a bounded queue;
a daemon worker thread writes queued events to the audit_logs table. Nothing
here raises into the caller: a full queue or a failed insert is logged and the
event is dropped.
"""

import logging
import queue
import threading
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy import select

from securenotes.core.database import Database, retry_read
from securenotes.models import AuditLog
from securenotes.schemas.audit import AuditAction, AuditEvent

logger = logging.getLogger(__name__)

# Seconds stop() waits for the worker to drain before giving up.
STOP_TIMEOUT_SEC = 5.0


class Actor(Protocol):
    username: str
    role: str


class AuditLogger:
    def __init__(self, database: Database, maxsize: int = 1000, read_retries: int = 0) -> None:
        self._database = database
        self._read_retries = read_retries
        self._queue: queue.Queue[AuditEvent | None] = queue.Queue(maxsize=maxsize)
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()

    def start(self) -> None:
        """Start the background writer if it is not running. Safe to call repeatedly."""
        with self._lock:
            if self._worker is not None and self._worker.is_alive():
                return
            self._worker = threading.Thread(target=self._run, name="audit-writer", daemon=True)
            self._worker.start()

    def stop(self, timeout: float = STOP_TIMEOUT_SEC) -> None:
        """Persist what is queued, then stop the writer."""
        with self._lock:
            worker = self._worker
            self._worker = None
        if worker is None or not worker.is_alive():
            return
        self._queue.put(None)
        worker.join(timeout)
        if worker.is_alive():
            logger.warning("Audit writer did not stop within %ss", timeout)

    def flush(self) -> None:
        """Block until every queued event has been handled."""
        self._queue.join()

    def record(self, actor: Actor, action: AuditAction) -> None:
        """Enqueue one event. Never raises."""
        try:
            event = AuditEvent(
                timestamp=datetime.now(UTC),
                username=actor.username,
                role=actor.role,
                action=action,
            )
            self.start()
            self._queue.put_nowait(event)
        except queue.Full:
            logger.error(
                "Audit queue full; dropping event",
                extra={"audit_action": action, "audit_username": getattr(actor, "username", None)},
            )
        except Exception:
            logger.exception("Failed to enqueue audit event %s", action)

    def list_all(self) -> list[AuditEvent]:
        """All persisted events, newest first."""

        def _select() -> list[AuditEvent]:
            with self._database.transaction("audit list") as session:
                rows = session.scalars(
                    select(AuditLog).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
                ).all()
                return [AuditEvent.model_validate(row) for row in rows]

        return retry_read(_select, self._read_retries, name="audit list")

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            try:
                if event is None:
                    return
                self._persist(event)
            except Exception:
                logger.exception(
                    "Audit event could not be persisted",
                    extra={"audit_action": event.action if event else None},
                )
            finally:
                self._queue.task_done()

    def _persist(self, event: AuditEvent) -> None:
        with self._database.transaction("audit insert") as session:
            session.add(AuditLog(**event.model_dump()))
