"""
Identity sessions: how an authenticated identity is turned into a carrier and back.

Two interchangeable backends implement the same IdentitySession protocol:

- JwtIdentitySession: stateless signed token. revoke() cannot invalidate an
  issued token; it stays valid until it expires even after logout.
- ServerIdentitySession: opaque random session id mapped to the identity in
  process memory; revoke() removes it.

One backend is chosen per process from settings.SESSION_BACKEND.
"""

import logging
import secrets
import threading
import time
from typing import Protocol

import jwt

from securenotes.core.config import Settings
from securenotes.core.errors import InvalidAssertion
from securenotes.core.security import create_access_token, decode_access_token
from securenotes.schemas.auth import ROLE_VALUES, Identity

logger = logging.getLogger(__name__)


class IdentitySession(Protocol):
    max_age_seconds: int

    def establish(self, identity: Identity) -> str: ...

    def resolve(self, carrier: str) -> Identity: ...

    def revoke(self, carrier: str) -> None: ...


class JwtIdentitySession:
    def __init__(self, secret: str, algorithm: str, expire_minutes: int) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self.max_age_seconds = expire_minutes * 60

    def establish(self, identity: Identity) -> str:
        return create_access_token(
            {"sub": str(identity.id), "username": identity.username, "role": identity.role},
            self._secret,
            self._algorithm,
            self._expire_minutes,
        )

    def resolve(self, carrier: str) -> Identity:
        """Verify signature and expiry; raises InvalidAssertion otherwise."""
        try:
            payload = decode_access_token(carrier, self._secret, self._algorithm)
        except jwt.PyJWTError as e:
            logger.info("Rejected identity assertion: %s", e)
            raise InvalidAssertion() from e
        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidAssertion() from e
        username = payload.get("username")
        role = payload.get("role")
        if not isinstance(username, str) or not username or role not in ROLE_VALUES:
            raise InvalidAssertion()
        return Identity(id=user_id, username=username, role=role)

    def revoke(self, carrier: str) -> None:
        # Stateless: the client discards the token; nothing to revoke server-side.
        logger.debug("JWT logout is client-side only; token valid until expiry")


class ServerIdentitySession:
    def __init__(self, expire_minutes: int) -> None:
        self.max_age_seconds = expire_minutes * 60
        self._sessions: dict[str, tuple[Identity, float]] = {}
        self._lock = threading.Lock()

    def establish(self, identity: Identity) -> str:
        session_id = secrets.token_urlsafe(32)
        expires_at = time.monotonic() + self.max_age_seconds
        with self._lock:
            self._purge_expired()
            self._sessions[session_id] = (identity, expires_at)
        return session_id

    def resolve(self, carrier: str) -> Identity:
        with self._lock:
            entry = self._sessions.get(carrier)
            if entry is None:
                raise InvalidAssertion()
            identity, expires_at = entry
            if expires_at <= time.monotonic():
                del self._sessions[carrier]
                raise InvalidAssertion()
        return identity

    def revoke(self, carrier: str) -> None:
        with self._lock:
            self._sessions.pop(carrier, None)

    def _purge_expired(self) -> None:
        now = time.monotonic()
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
        for sid in expired:
            del self._sessions[sid]


def build_identity_session(settings: Settings) -> IdentitySession:
    if settings.SESSION_BACKEND == "server":
        return ServerIdentitySession(settings.JWT_EXPIRE_MINUTES)
    return JwtIdentitySession(
        settings.JWT_SECRET.get_secret_value(),
        settings.JWT_ALGORITHM,
        settings.JWT_EXPIRE_MINUTES,
    )
