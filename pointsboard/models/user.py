"""ORM model for application users (auth, RBAC and points)."""

from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String, func

from pointsboard.models.base import Base


class Role(str, Enum):
    """Closed set of roles. ADMIN is the privileged role."""

    DEVELOPER = "developer"
    QATESTER = "qatester"
    ADMIN = "admin"


PRIVILEGED_ROLE = Role.ADMIN

# Roles a caller may pick for themselves at registration.
SELF_REGISTRABLE_ROLES = frozenset({Role.DEVELOPER, Role.QATESTER})


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: one of Role; fixed at creation.
    points: integer score, changed only by an admin.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.DEVELOPER.value, index=True)
    points = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
