"""Authorization policy for notes. Pure functions; no I/O."""

from collections.abc import Iterable

from securenotes.schemas.auth import Identity
from securenotes.schemas.notes import Note


def visible_notes(identity: Identity, notes: Iterable[Note]) -> list[Note]:
    """Admins see every note; everyone else sees only their own. Input order is kept."""
    if identity.is_admin:
        return list(notes)
    return [n for n in notes if n.author_id == identity.id]


def can_delete(identity: Identity, note: Note) -> bool:
    return note.author_id == identity.id or identity.is_admin
