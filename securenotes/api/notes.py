"""Notes routes: list visible notes, create, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from securenotes.api.auth import get_current_user
from securenotes.api.deps import ServicesDep
from securenotes.core.errors import Forbidden, InvalidInput, NotFound, ReplicationDivergence
from securenotes.schemas.auth import Identity, MessageResponse
from securenotes.schemas.notes import Note, NoteCreate
from securenotes.services.policy import can_delete, visible_notes

router = APIRouter()

# Ids are stored as signed 64-bit integers.
NoteId = Annotated[int, Path(ge=1, le=2**63 - 1)]


@router.get("", response_model=list[Note])
def list_notes(
    current_user: Annotated[Identity, Depends(get_current_user)],
    services: ServicesDep,
) -> list[Note]:
    """Notes from the active collection that the caller may see, newest first."""
    return visible_notes(current_user, services.notes.list_notes())


@router.post("", response_model=Note, status_code=status.HTTP_201_CREATED)
def create_note(
    body: NoteCreate,
    current_user: Annotated[Identity, Depends(get_current_user)],
    services: ServicesDep,
) -> Note:
    """Create a note owned by the caller; it is written to both collections."""
    if not body.content.strip():
        raise InvalidInput("Note content is required")
    try:
        note = services.notes.create_note(body.content, current_user.id, current_user.username)
    except ReplicationDivergence:
        # Stored in primary, so the creation is audited.
        services.audit.record(current_user, "CREATE_NOTE")
        raise
    services.audit.record(current_user, "CREATE_NOTE")
    return note


@router.delete("/{note_id}", response_model=MessageResponse)
def delete_note(
    note_id: NoteId,
    current_user: Annotated[Identity, Depends(get_current_user)],
    services: ServicesDep,
) -> MessageResponse:
    """Delete a note. Owners may delete their own notes; admins may delete any."""
    note = services.notes.get_note(note_id)
    if note is None:
        raise NotFound("Note not found")
    if not can_delete(current_user, note):
        services.audit.record(current_user, "DELETE_NOTE_DENIED")
        raise Forbidden("Access Denied")
    services.notes.delete_note(note_id)
    services.audit.record(current_user, "DELETE_NOTE")
    return MessageResponse(message="Note deleted")
