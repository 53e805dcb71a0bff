"""Pydantic request/response schemas."""

from securenotes.schemas.audit import AuditAction, AuditActor, AuditEvent
from securenotes.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    Role,
    SessionResponse,
)
from securenotes.schemas.health import HealthResponse
from securenotes.schemas.notes import Note, NoteCreate
from securenotes.schemas.outage import ToggleResponse

__all__ = [
    "AuditAction",
    "AuditActor",
    "AuditEvent",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Note",
    "NoteCreate",
    "Role",
    "SessionResponse",
    "ToggleResponse",
]
