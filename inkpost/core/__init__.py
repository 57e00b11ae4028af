"""Core app configuration, database and security."""

from inkpost.core.config import get_settings, settings
from inkpost.core.database import get_db
from inkpost.core.security import TokenService

__all__ = ["get_settings", "settings", "get_db", "TokenService"]
