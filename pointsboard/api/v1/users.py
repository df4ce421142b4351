"""Self-scoped user listings: everyone sees only users that share their role."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from pointsboard.api.v1.auth import get_current_user, get_store
from pointsboard.schemas.auth import CurrentUser
from pointsboard.schemas.user import PublicUser
from pointsboard.services.store import CredentialStore
from pointsboard.services.user_service import leaderboard_for, list_users_for

router = APIRouter()


@router.get("/users", response_model=list[PublicUser])
def list_users(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_store)],
) -> list[PublicUser]:
    """Users with the caller's role. The filter is taken from the token, not the query string."""
    return list_users_for(store, current_user)


@router.get("/sortedusers", response_model=list[PublicUser])
def sorted_users(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_store)],
    order: Annotated[str | None, Query(description="asc or desc (default desc)")] = None,
) -> list[PublicUser]:
    """Leaderboard of users with the caller's role, ordered by points."""
    return leaderboard_for(store, current_user, order)
