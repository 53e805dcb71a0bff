"""Builds the service graph once per application from Settings."""

from dataclasses import dataclass

from securenotes.core.config import Settings
from securenotes.core.database import Database
from securenotes.services.audit import AuditLogger
from securenotes.services.auth import Authenticator
from securenotes.services.identity import BcryptVerifier, build_identity_store
from securenotes.services.note_store import DualWriteNoteStore
from securenotes.services.outage import OutageFlag
from securenotes.services.sessions import IdentitySession, build_identity_session


@dataclass
class Services:
    settings: Settings
    database: Database
    sessions: IdentitySession
    audit: AuditLogger
    outage: OutageFlag
    notes: DualWriteNoteStore
    authenticator: Authenticator


def build_services(settings: Settings) -> Services:
    # Nothing here touches the database; the engine is created on first use.
    database = Database(settings)
    identities = build_identity_store(BcryptVerifier(settings.BCRYPT_ROUNDS))
    sessions = build_identity_session(settings)
    audit = AuditLogger(
        database,
        maxsize=settings.AUDIT_QUEUE_MAXSIZE,
        read_retries=settings.DB_READ_RETRIES,
    )
    outage = OutageFlag()
    notes = DualWriteNoteStore(database, outage, read_retries=settings.DB_READ_RETRIES)
    return Services(
        settings=settings,
        database=database,
        sessions=sessions,
        audit=audit,
        outage=outage,
        notes=notes,
        authenticator=Authenticator(identities, sessions, audit),
    )
