"""Admin-only routes: full user listing, deletion, points updates, token revocation."""

from typing import Annotated

from fastapi import APIRouter, Depends

from pointsboard.api.v1.auth import get_auth_service, get_store, require_admin
from pointsboard.core.errors import ErrorKind, ServiceError
from pointsboard.schemas.auth import CurrentUser, RevokeTokenRequest
from pointsboard.schemas.common import MessageResponse
from pointsboard.schemas.user import PointsUpdateRequest, PublicUser
from pointsboard.services.auth_service import AuthService
from pointsboard.services.store import CredentialStore
from pointsboard.services.user_service import delete_user, list_all_users, update_points

router = APIRouter()


@router.get("/users", response_model=list[PublicUser])
def admin_list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_store)],
) -> list[PublicUser]:
    """List all users regardless of role."""
    return list_all_users(store)


@router.delete("/users/{user_id}", response_model=MessageResponse)
def admin_delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_store)],
) -> MessageResponse:
    return delete_user(store, user_id, admin)


@router.put("/users/{user_id}/points", response_model=MessageResponse)
def admin_update_points(
    user_id: int,
    body: PointsUpdateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_store)],
) -> MessageResponse:
    return update_points(store, user_id, body.points, admin)


@router.post("/tokens/revoke", response_model=MessageResponse)
def admin_revoke_token(
    body: RevokeTokenRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Revoke any token string. The admin's username is recorded as the owner label."""
    if not body.token:
        raise ServiceError(ErrorKind.BAD_REQUEST, "Token is required")
    return service.invalidate(body.token, admin.username)
