"""Audit log route (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from securenotes.api.auth import require_admin
from securenotes.api.deps import ServicesDep
from securenotes.schemas.audit import AuditEvent
from securenotes.schemas.auth import Identity

router = APIRouter()


@router.get("", response_model=list[AuditEvent])
def list_audit_events(
    _admin: Annotated[Identity, Depends(require_admin)],
    services: ServicesDep,
) -> list[AuditEvent]:
    """All audit events, newest first."""
    return services.audit.list_all()
