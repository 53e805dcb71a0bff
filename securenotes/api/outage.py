"""Outage toggle route: flips which note collection serves reads."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from securenotes.api.auth import get_current_user
from securenotes.api.deps import ServicesDep
from securenotes.core.errors import Forbidden
from securenotes.schemas.auth import Identity
from securenotes.schemas.outage import ToggleResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ToggleResponse)
def toggle_db(
    current_user: Annotated[Identity, Depends(get_current_user)],
    services: ServicesDep,
) -> ToggleResponse:
    """
    Simulate a primary-database outage (or recovery).

    Any authenticated user may toggle unless OUTAGE_TOGGLE_ADMIN_ONLY is set.
    """
    if services.settings.OUTAGE_TOGGLE_ADMIN_ONLY and not current_user.is_admin:
        raise Forbidden("Admin access required")
    is_down = services.outage.toggle()
    services.audit.record(current_user, "TOGGLE_DB")
    logger.info("Outage flag toggled by %s", current_user.username, extra={"is_down": is_down})
    return ToggleResponse(is_down=is_down)
