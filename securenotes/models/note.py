"""ORM models for the two note collections (primary and fallback)."""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text

from securenotes.models.base import Base

PRIMARY_COLLECTION = "notes_primary"
FALLBACK_COLLECTION = "notes_fallback"


class NoteColumns:
    """
    Columns shared by both note tables.

    id is assigned by the application (creation-time milliseconds), never by
    the database, so the same row can be written to both tables.
    """

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, nullable=False, index=True)
    author_username = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


class NotePrimary(NoteColumns, Base):
    __tablename__ = PRIMARY_COLLECTION


class NoteFallback(NoteColumns, Base):
    __tablename__ = FALLBACK_COLLECTION


NOTE_MODELS: dict[str, type[NoteColumns]] = {
    PRIMARY_COLLECTION: NotePrimary,
    FALLBACK_COLLECTION: NoteFallback,
}
