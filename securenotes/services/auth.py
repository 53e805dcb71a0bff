"""Authenticator: credential check, identity assertion issue, and logout."""

import logging

from securenotes.core.errors import InvalidCredentials
from securenotes.schemas.audit import UNKNOWN_ROLE, AuditActor
from securenotes.schemas.auth import Identity
from securenotes.services.audit import AuditLogger
from securenotes.services.identity import IdentityStore
from securenotes.services.sessions import IdentitySession

logger = logging.getLogger(__name__)


class Authenticator:
    def __init__(
        self,
        identities: IdentityStore,
        sessions: IdentitySession,
        audit: AuditLogger,
    ) -> None:
        self._identities = identities
        self._sessions = sessions
        self._audit = audit

    def login(self, username: str, password: str) -> tuple[Identity, str]:
        """
        Check credentials and return the identity with its carrier.

        Unknown usernames and wrong passwords fail the same way; the failed
        attempt is audited under the attempted username with role 'unknown'.
        """
        user = self._identities.verify_credentials(username, password)
        if user is None:
            self._audit.record(AuditActor(username=username, role=UNKNOWN_ROLE), "LOGIN_FAILED")
            logger.info("Login failed", extra={"attempted_username": username[:255]})
            raise InvalidCredentials()
        identity = user.to_identity()
        carrier = self._sessions.establish(identity)
        self._audit.record(identity, "LOGIN_SUCCESS")
        logger.info("Login successful for %s", identity.username)
        return identity, carrier

    def logout(self, identity: Identity, carrier: str | None) -> None:
        if carrier:
            self._sessions.revoke(carrier)
        self._audit.record(identity, "LOGOUT")
        logger.info("Logout for %s", identity.username)
