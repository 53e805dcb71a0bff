"""API routes."""

from fastapi import APIRouter

from securenotes.api import audit, auth, health, notes, outage

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
router.include_router(outage.router, prefix="/toggle_db", tags=["outage"])
router.include_router(health.router, prefix="/ping", tags=["health"])
