"""Request/response schemas for login, logout and session endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from securenotes.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

Role = Literal["user", "admin"]

ROLE_VALUES: frozenset[str] = frozenset({"user", "admin"})


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password")


class Identity(BaseModel):
    """Authenticated caller (id, username, role) resolved from an identity assertion."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class LoginResponse(BaseModel):
    """
    Returned after a successful login.

    token is the same carrier set in the auth cookie, for clients that send it
    as a Bearer header instead.
    """

    message: str = "Login successful"
    user: Identity
    token: str | None = Field(default=None, description="Identity assertion (JWT or session id)")


class SessionResponse(BaseModel):
    """Response for GET /session."""

    user: Identity


class MessageResponse(BaseModel):
    """Plain acknowledgement or error body."""

    message: str
