"""Shared response shapes."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Acknowledgement returned by mutations."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str = Field(..., description="Human-readable reason")
