"""SQLAlchemy ORM models."""

from pointsboard.models.base import Base
from pointsboard.models.revoked_token import RevokedToken
from pointsboard.models.user import PRIVILEGED_ROLE, SELF_REGISTRABLE_ROLES, Role, User

__all__ = [
    "Base",
    "PRIVILEGED_ROLE",
    "RevokedToken",
    "Role",
    "SELF_REGISTRABLE_ROLES",
    "User",
]
