"""
Dual-write note store.

Every note is written to two collections, notes_primary and notes_fallback.
Reads go to one of them, chosen by the injected OutageFlag: primary normally,
fallback while the primary is simulated as down. Toggling moves no data; the
fallback is only a usable read path because every write already went to both.

There is no transaction spanning the two collections. A write that succeeds
on one and fails on the other raises ReplicationDivergence naming where the
note now lives; it is never retried, since a blind retry could double-insert.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy import delete, select

from securenotes.core.database import Database, retry_read
from securenotes.core.errors import NotFound, ReplicationDivergence, StoreUnavailable
from securenotes.models import FALLBACK_COLLECTION, NOTE_MODELS, PRIMARY_COLLECTION
from securenotes.schemas.notes import Note
from securenotes.services.outage import OutageFlag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplicationReport:
    """Note ids present in only one collection. Empty lists mean the collections agree."""

    only_in_primary: list[int] = field(default_factory=list)
    only_in_fallback: list[int] = field(default_factory=list)
    in_both: int = 0

    @property
    def consistent(self) -> bool:
        return not self.only_in_primary and not self.only_in_fallback


class NoteIdGenerator:
    """
    Creation-time ids in milliseconds, bumped to stay strictly increasing.

    Two notes created in the same millisecond get consecutive ids instead of
    colliding.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate


class DualWriteNoteStore:
    def __init__(
        self,
        database: Database,
        outage: OutageFlag,
        read_retries: int = 0,
        id_generator: NoteIdGenerator | None = None,
    ) -> None:
        self._database = database
        self._outage = outage
        self._read_retries = read_retries
        self._ids = id_generator or NoteIdGenerator()

    @property
    def active_collection(self) -> str:
        return FALLBACK_COLLECTION if self._outage.is_down else PRIMARY_COLLECTION

    def list_notes(self) -> list[Note]:
        """Notes in the active collection, newest first."""
        collection = self.active_collection
        model = NOTE_MODELS[collection]

        def _select() -> list[Note]:
            with self._database.transaction(f"list {collection}") as session:
                rows = session.scalars(
                    select(model).order_by(model.created_at.desc(), model.id.desc())
                ).all()
                return [Note.model_validate(row) for row in rows]

        return retry_read(_select, self._read_retries, name=f"list {collection}")

    def get_note(self, note_id: int) -> Note | None:
        """Look up one note in the active collection."""
        collection = self.active_collection
        model = NOTE_MODELS[collection]

        def _select() -> Note | None:
            with self._database.transaction(f"get {collection}") as session:
                row = session.get(model, note_id)
                return Note.model_validate(row) if row is not None else None

        return retry_read(_select, self._read_retries, name=f"get {collection}")

    def create_note(self, content: str, author_id: int, author_username: str) -> Note:
        """Write a new note to primary, then fallback."""
        note = Note(
            id=self._ids.next_id(),
            content=content,
            author_id=author_id,
            author_username=author_username,
            created_at=datetime.now(UTC),
        )
        self._insert(PRIMARY_COLLECTION, note)
        try:
            self._insert(FALLBACK_COLLECTION, note)
        except StoreUnavailable as e:
            logger.error(
                "Dual-write divergence: note %s stored in %s only",
                note.id,
                PRIMARY_COLLECTION,
                extra={"note_id": note.id, "present_in": [PRIMARY_COLLECTION]},
            )
            raise ReplicationDivergence(
                "Note was saved but could not be replicated",
                note_id=note.id,
                present_in=(PRIMARY_COLLECTION,),
                cause=e.cause,
            ) from e
        logger.info("Note %s created by %s", note.id, author_username)
        return note

    def delete_note(self, note_id: int) -> None:
        """
        Delete from both collections.

        Raises NotFound when the note is not in the active collection. Both
        deletes are always attempted; failures are raised afterwards.
        """
        if self.get_note(note_id) is None:
            raise NotFound("Note not found")

        failures: dict[str, StoreUnavailable] = {}
        for collection in (PRIMARY_COLLECTION, FALLBACK_COLLECTION):
            try:
                removed = self._delete(collection, note_id)
            except StoreUnavailable as e:
                failures[collection] = e
                continue
            if removed == 0:
                logger.warning(
                    "Note %s was already missing from %s",
                    note_id,
                    collection,
                    extra={"note_id": note_id, "collection": collection},
                )

        if not failures:
            logger.info("Note %s deleted", note_id)
            return
        first = next(iter(failures.values()))
        if len(failures) == len(NOTE_MODELS):
            logger.error("Note %s could not be deleted from any collection", note_id)
            raise StoreUnavailable(cause=first.cause) from first
        present_in = tuple(failures)
        logger.error(
            "Dual-write divergence: note %s still present in %s after delete",
            note_id,
            ", ".join(present_in),
            extra={"note_id": note_id, "present_in": list(present_in)},
        )
        raise ReplicationDivergence(
            "Note could not be deleted from every store",
            note_id=note_id,
            present_in=present_in,
            cause=first.cause,
        ) from first

    def find_divergence(self) -> ReplicationReport:
        """Compare the id sets of both collections. Read-only; repairs nothing."""

        def _select() -> ReplicationReport:
            with self._database.transaction("replication check") as session:
                primary = set(session.scalars(select(NOTE_MODELS[PRIMARY_COLLECTION].id)).all())
                fallback = set(session.scalars(select(NOTE_MODELS[FALLBACK_COLLECTION].id)).all())
            return ReplicationReport(
                only_in_primary=sorted(primary - fallback),
                only_in_fallback=sorted(fallback - primary),
                in_both=len(primary & fallback),
            )

        return retry_read(_select, self._read_retries, name="replication check")

    def _insert(self, collection: str, note: Note) -> None:
        model = NOTE_MODELS[collection]
        with self._database.transaction(f"insert {collection}") as session:
            session.add(model(**note.model_dump()))

    def _delete(self, collection: str, note_id: int) -> int:
        model = NOTE_MODELS[collection]
        with self._database.transaction(f"delete {collection}") as session:
            result = session.execute(delete(model).where(model.id == note_id))
            return result.rowcount
