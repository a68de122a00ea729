"""Core app configuration, errors and database."""

from acquisitions.core.config import get_settings, settings
from acquisitions.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
