"""Ping endpoint with database connectivity check."""

import logging

from fastapi import APIRouter

from securenotes.api.deps import ServicesDep
from securenotes.core.database import retry_read
from securenotes.core.errors import StoreUnavailable
from securenotes.schemas.health import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=HealthResponse)
def ping(services: ServicesDep) -> HealthResponse:
    """
    Return service health and database connectivity. Used by load balancers and monitoring.
    The database check is retried before reporting 500.
    """
    try:
        retry_read(services.database.ping, services.settings.DB_READ_RETRIES, name="ping")
    except StoreUnavailable as e:
        logger.error("Ping failed: %s", e.cause)
        raise StoreUnavailable("Database not reachable", cause=e.cause) from e
    return HealthResponse(
        status="ok",
        environment=services.settings.APP_ENV,
        database="connected",
    )
