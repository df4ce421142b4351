"""User listing, leaderboard and admin mutations."""

import logging

from pointsboard.core.errors import ErrorKind, ServiceError
from pointsboard.schemas.auth import CurrentUser
from pointsboard.schemas.common import MessageResponse
from pointsboard.schemas.user import PublicUser
from pointsboard.services.authorization import listing_scope
from pointsboard.services.store import CredentialStore, SortOrder, StoreError

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


def parse_sort_order(order: str | None) -> SortOrder:
    """'asc' in any case selects ascending; anything else falls back to descending."""
    if order is not None and order.strip().upper() == "ASC":
        return "asc"
    return "desc"


def list_users_for(store: CredentialStore, user: CurrentUser) -> list[PublicUser]:
    """Users sharing the caller's role, ordered by id."""
    try:
        rows = store.find_users_by_role(listing_scope(user))
    except StoreError as e:
        raise ServiceError(ErrorKind.INTERNAL, "Database query error") from e
    return [PublicUser.from_record(u) for u in rows]


def leaderboard_for(
    store: CredentialStore, user: CurrentUser, order: str | None = None
) -> list[PublicUser]:
    """Users sharing the caller's role, ordered by points."""
    try:
        rows = store.find_users_by_role(listing_scope(user), order_by_points=parse_sort_order(order))
    except StoreError as e:
        raise ServiceError(ErrorKind.INTERNAL, "Failed to fetch users") from e
    return [PublicUser.from_record(u) for u in rows]


def list_all_users(store: CredentialStore) -> list[PublicUser]:
    try:
        rows = store.find_all_users()
    except StoreError as e:
        raise ServiceError(ErrorKind.INTERNAL, "Database query error") from e
    return [PublicUser.from_record(u) for u in rows]


def delete_user(store: CredentialStore, user_id: int, actor: CurrentUser) -> MessageResponse:
    try:
        deleted = store.delete_user(user_id)
    except StoreError as e:
        raise ServiceError(ErrorKind.INTERNAL, "Failed to delete user") from e
    if deleted == 0:
        raise ServiceError(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
    logger.info("User deleted", extra={"target_user_id": user_id, "actor_id": actor.id})
    return MessageResponse(message="User deleted successfully")


def update_points(
    store: CredentialStore, user_id: int, points: int | None, actor: CurrentUser
) -> MessageResponse:
    """Set a user's points to an absolute value."""
    if points is None or isinstance(points, bool) or not isinstance(points, int):
        raise ServiceError(ErrorKind.BAD_REQUEST, "Points must be an integer")
    try:
        updated = store.update_user_points(user_id, points)
    except StoreError as e:
        raise ServiceError(ErrorKind.INTERNAL, "Failed to update user points") from e
    if updated == 0:
        raise ServiceError(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
    logger.info(
        "User points updated",
        extra={"target_user_id": user_id, "points": points, "actor_id": actor.id},
    )
    return MessageResponse(message="User points updated successfully")
