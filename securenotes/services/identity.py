"""Identity store: a fixed, read-only table of accounts built at process start."""

import logging
from dataclasses import dataclass
from typing import Protocol

from securenotes.core.security import hash_password, verify_password
from securenotes.schemas.auth import Identity, Role

logger = logging.getLogger(__name__)

# Demo accounts: (id, username, password, role). Hashed on startup; plain values never stored.
SEED_ACCOUNTS: tuple[tuple[int, str, str, Role], ...] = (
    (1, "user1", "password1", "user"),
    (2, "user2", "password2", "user"),
    (99, "admin", "adminpass", "admin"),
)


@dataclass(frozen=True)
class User:
    """Account record. password_secret is whatever the CredentialVerifier understands."""

    id: int
    username: str
    password_secret: str
    role: Role

    def to_identity(self) -> Identity:
        return Identity(id=self.id, username=self.username, role=self.role)


class CredentialVerifier(Protocol):
    """Turns a password into a stored secret and checks a password against it."""

    def make_secret(self, password: str) -> str: ...

    def verify(self, password: str, secret: str) -> bool: ...


class BcryptVerifier:
    def __init__(self, rounds: int) -> None:
        self.rounds = rounds

    def make_secret(self, password: str) -> str:
        return hash_password(password, rounds=self.rounds)

    def verify(self, password: str, secret: str) -> bool:
        return verify_password(password, secret)


class IdentityStore:
    """
    In-memory account lookup keyed by username.

    Read-only after construction, so concurrent requests need no locking.
    """

    def __init__(self, users: list[User], verifier: CredentialVerifier) -> None:
        self._verifier = verifier
        self._users: dict[str, User] = {}
        for user in users:
            if user.username in self._users:
                raise ValueError(f"Duplicate username in identity store: {user.username!r}")
            self._users[user.username] = user

    def get(self, username: str) -> User | None:
        return self._users.get(username)

    def verify_credentials(self, username: str, password: str) -> User | None:
        """Return the user when username exists and password matches, else None."""
        user = self._users.get(username)
        if user is None:
            return None
        if not self._verifier.verify(password, user.password_secret):
            return None
        return user

    def __len__(self) -> int:
        return len(self._users)


def build_identity_store(
    verifier: CredentialVerifier,
    accounts: tuple[tuple[int, str, str, Role], ...] = SEED_ACCOUNTS,
) -> IdentityStore:
    """Hash the seed accounts with `verifier` and return the store."""
    users = [
        User(id=uid, username=username, password_secret=verifier.make_secret(password), role=role)
        for uid, username, password, role in accounts
    ]
    logger.info("Identity store loaded with %s accounts", len(users))
    return IdentityStore(users, verifier)
