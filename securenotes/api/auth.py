"""Login, logout and session routes plus the access guard (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from securenotes.api.deps import ServicesDep
from securenotes.core.config import Settings
from securenotes.core.errors import Forbidden, Unauthenticated
from securenotes.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SessionResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_carrier(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    cookie_name: str,
) -> str | None:
    """Identity carrier from the auth cookie, falling back to a Bearer header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    services: ServicesDep,
) -> Identity:
    """
    Dependency: resolve the caller's identity or stop the request with 401.

    The resolved identity and its carrier are also left on request.state for
    handlers that need them (logout).
    """
    carrier = get_carrier(request, credentials, services.settings.AUTH_COOKIE_NAME)
    if carrier is None:
        raise Unauthenticated()
    identity = services.sessions.resolve(carrier)
    request.state.identity = identity
    request.state.carrier = carrier
    return identity


def require_admin(
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> Identity:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if not current_user.is_admin:
        raise Forbidden("Admin access required")
    return current_user


def _set_auth_cookie(response: Response, settings: Settings, carrier: str, max_age: int) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=carrier,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, response: Response, services: ServicesDep) -> LoginResponse:
    """
    Authenticate with username and password.

    Sets the auth cookie and also returns the carrier as `token`, to be sent
    as `Authorization: Bearer <token>` by clients that cannot use cookies.
    """
    identity, carrier = services.authenticator.login(body.username, body.password)
    _set_auth_cookie(response, services.settings, carrier, services.sessions.max_age_seconds)
    return LoginResponse(user=identity, token=carrier)


@router.api_route("/logout", methods=["GET", "POST"], response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    current_user: Annotated[Identity, Depends(get_current_user)],
    services: ServicesDep,
) -> MessageResponse:
    """Revoke the session (server backend) and clear the auth cookie."""
    services.authenticator.logout(current_user, getattr(request.state, "carrier", None))
    settings = services.settings
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )
    return MessageResponse(message="Logged out")


@router.get("/session", response_model=SessionResponse)
def get_session(current_user: Annotated[Identity, Depends(get_current_user)]) -> SessionResponse:
    return SessionResponse(user=current_user)
