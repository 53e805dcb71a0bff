"""ORM model for append-only audit events."""

from sqlalchemy import Column, DateTime, Integer, String

from securenotes.models.base import Base


class AuditLog(Base):
    """
    One security-relevant action. Rows are inserted, never updated or deleted.

    username is free text: failed logins record whatever name was attempted.
    """

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    username = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
    action = Column(String(64), nullable=False, index=True)
