"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from pointsboard.models.revoked_token import REVOKED_TOKEN_MAX_LENGTH
from pointsboard.schemas.user import PublicUser

# Presence and role checks happen in AuthService so a missing field is a 400
# with the usual {error} body, not a schema rejection.


class RegisterRequest(BaseModel):
    """Self-registration payload. role must be developer or qatester."""

    username: str | None = Field(default=None, max_length=255, description="Username")
    email: str | None = Field(default=None, max_length=255, description="Email address")
    password: str | None = Field(default=None, max_length=128, description="Password")
    role: str | None = Field(default=None, max_length=32, description="developer or qatester")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, max_length=255, description="Email address")
    password: str | None = Field(default=None, max_length=128, description="Password")


class AuthResponse(BaseModel):
    """Token plus the public view of the authenticated user."""

    token: str = Field(..., description="JWT access token (send as Authorization: Bearer <token>)")
    user: PublicUser


class CurrentUser(BaseModel):
    """Authenticated identity taken from verified token claims."""

    id: int
    username: str
    email: str
    role: str


class RevokeTokenRequest(BaseModel):
    """Admin request to revoke an arbitrary token string."""

    token: str | None = Field(
        default=None,
        max_length=REVOKED_TOKEN_MAX_LENGTH,
        description="Exact token string to revoke (stored verbatim)",
    )
