"""Pydantic schemas for audit events."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from securenotes.schemas.notes import as_utc

AuditAction = Literal[
    "LOGIN_SUCCESS",
    "LOGIN_FAILED",
    "LOGOUT",
    "CREATE_NOTE",
    "DELETE_NOTE",
    "DELETE_NOTE_DENIED",
    "TOGGLE_DB",
]

# Role recorded for actors that are not a known user (failed logins).
UNKNOWN_ROLE = "unknown"


class AuditActor(BaseModel):
    """Who performed an action. role is 'unknown' when the username did not authenticate."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    username: str
    role: str


class AuditEvent(BaseModel):
    """One immutable audit record."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    timestamp: datetime
    username: str
    role: str
    action: AuditAction

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, v: datetime) -> datetime:
        return as_utc(v)
