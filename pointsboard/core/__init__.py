"""Core app configuration, database, errors and security primitives."""

from pointsboard.core.config import get_settings, settings
from pointsboard.core.database import get_db
from pointsboard.core.errors import ErrorKind, ServiceError

__all__ = ["ErrorKind", "ServiceError", "get_settings", "settings", "get_db"]
