"""Core app configuration, database and security."""

from rideshare.core.config import get_settings, settings
from rideshare.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
