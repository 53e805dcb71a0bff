"""SQLAlchemy ORM models."""

from securenotes.models.audit import AuditLog
from securenotes.models.base import Base
from securenotes.models.note import (
    FALLBACK_COLLECTION,
    NOTE_MODELS,
    PRIMARY_COLLECTION,
    NoteFallback,
    NotePrimary,
)

__all__ = [
    "AuditLog",
    "Base",
    "FALLBACK_COLLECTION",
    "NOTE_MODELS",
    "NoteFallback",
    "NotePrimary",
    "PRIMARY_COLLECTION",
]
