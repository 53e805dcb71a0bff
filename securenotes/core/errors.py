"""Error taxonomy shared by services and routes. Each error carries a short user-facing message."""

from fastapi import status


class SecureNotesError(Exception):
    """Base error; status_code is the HTTP status the API maps it to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInput(SecureNotesError):
    """Missing or malformed request field."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentials(SecureNotesError):
    """Unknown username or wrong password. The message never says which."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class Unauthenticated(SecureNotesError):
    """No identity assertion was presented."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidAssertion(SecureNotesError):
    """Assertion is malformed, expired, revoked or has a bad signature."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class Forbidden(SecureNotesError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(SecureNotesError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreUnavailable(SecureNotesError):
    """Persistent store unreachable, timed out, or rejected the operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Data store unavailable", cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class ReplicationDivergence(StoreUnavailable):
    """
    A dual-write left the two note collections out of step.

    present_in lists the collections that still hold the note after the failed
    operation, so an operator can repair it by hand.
    """

    def __init__(
        self,
        message: str,
        note_id: int,
        present_in: tuple[str, ...],
        cause: Exception | None = None,
    ) -> None:
        self.note_id = note_id
        self.present_in = present_in
        super().__init__(message, cause=cause)
