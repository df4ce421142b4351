"""Register/login/logout routes and auth dependencies (get_current_user, require_admin)."""

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pointsboard.core.config import get_settings
from pointsboard.core.database import get_db
from pointsboard.core.security import TokenCodec, build_token_codec
from pointsboard.models import PRIVILEGED_ROLE
from pointsboard.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest
from pointsboard.schemas.common import MessageResponse
from pointsboard.services.auth_service import AuthService
from pointsboard.services.authentication import authenticate
from pointsboard.services.authorization import require_role
from pointsboard.services.revocation import RevocationLedger
from pointsboard.services.store import CredentialStore

router = APIRouter()
security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_codec() -> TokenCodec:
    """Dependency: process-wide codec built once from settings."""
    return build_token_codec(get_settings())


def get_store(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    return CredentialStore(db)


def get_ledger(store: Annotated[CredentialStore, Depends(get_store)]) -> RevocationLedger:
    return RevocationLedger(store)


def get_auth_service(
    store: Annotated[CredentialStore, Depends(get_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    ledger: Annotated[RevocationLedger, Depends(get_ledger)],
) -> AuthService:
    return AuthService(store, codec, ledger)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    ledger: Annotated[RevocationLedger, Depends(get_ledger)],
) -> CurrentUser:
    """Dependency: require a valid, unrevoked Bearer token and return its identity."""
    token = credentials.credentials if credentials is not None else None
    return authenticate(token, codec, ledger)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with the admin role. Raises 401 otherwise."""
    return require_role(current_user, PRIVILEGED_ROLE)


@router.post("/register", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create a developer or qatester account; returns a token and the new user."""
    result = service.register(body.username, body.email, body.password, body.role)
    return AuthResponse(token=result.token, user=result.user)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = service.login(body.email, body.password)
    return AuthResponse(token=result.token, user=result.user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Revoke the token used for this request."""
    # get_current_user has already rejected requests without credentials.
    return service.invalidate(credentials.credentials, current_user.username)
