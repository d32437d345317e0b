"""Core app configuration, database, security and errors."""

from cosmos.core.config import Settings, get_settings, resolve_jwt_secret
from cosmos.core.database import get_db

__all__ = ["Settings", "get_settings", "resolve_jwt_secret", "get_db"]
