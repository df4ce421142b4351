"""Pydantic request/response schemas."""

from pointsboard.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RevokeTokenRequest,
)
from pointsboard.schemas.common import ErrorResponse, MessageResponse
from pointsboard.schemas.health import HealthResponse
from pointsboard.schemas.user import PointsUpdateRequest, PublicUser

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PointsUpdateRequest",
    "PublicUser",
    "RegisterRequest",
    "RevokeTokenRequest",
]
