"""Pydantic schemas for notes. Wire names are camelCase (authorId, authorUsername, createdAt)."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

NOTE_CONTENT_MAX_LEN = 10_000


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; SQLite returns stored timestamps without tzinfo."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class NoteCreate(BaseModel):
    """Body for POST /notes."""

    # Missing and empty content are rejected by the route with one message.
    content: str = Field(default="", max_length=NOTE_CONTENT_MAX_LEN, description="Note text")


class Note(BaseModel):
    """A note as stored in both collections and returned by the API."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int = Field(..., description="Creation-time derived id, unique and increasing")
    content: str
    author_id: int
    author_username: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        return as_utc(v)
