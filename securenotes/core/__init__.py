"""Core app configuration, database and errors."""

from securenotes.core.config import get_settings, settings
from securenotes.core.database import Database

__all__ = ["get_settings", "settings", "Database"]
