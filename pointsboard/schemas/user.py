"""Public user view and user-management payloads."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, StrictInt

if TYPE_CHECKING:
    from pointsboard.models.user import User


class PublicUser(BaseModel):
    """
    User as exposed to clients.

    There is no password field: from_record is the single mapping from a
    persisted row, so a hash cannot leak through a response.
    """

    id: int
    username: str
    email: str
    points: int
    role: str

    class Config:
        from_attributes = True

    @classmethod
    def from_record(cls, user: "User") -> "PublicUser":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            points=user.points if user.points is not None else 0,
            role=user.role,
        )


class PointsUpdateRequest(BaseModel):
    """New absolute points value for a user. No bounds are enforced."""

    points: StrictInt | None = Field(default=None, description="New points value")
