"""Role rules evaluated against an already-authenticated identity."""

from pointsboard.core.errors import ErrorKind, ServiceError
from pointsboard.models import Role
from pointsboard.schemas.auth import CurrentUser


def require_role(user: CurrentUser, role: Role) -> CurrentUser:
    """Raise UNAUTHORIZED unless user has exactly this role."""
    if user.role != role.value:
        raise ServiceError(ErrorKind.UNAUTHORIZED, "Not authorized")
    return user


def listing_scope(user: CurrentUser) -> str:
    """Role filter for self-scoped listings. Always the caller's own role."""
    return user.role
