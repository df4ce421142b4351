"""ORM model for the append-only token revocation ledger."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, true

from pointsboard.models.base import Base

# Column width of revoked_tokens.token; longer input is rejected at the API.
REVOKED_TOKEN_MAX_LENGTH = 2048


class RevokedToken(Base):
    """
    A revoked token string and the user label it was revoked for.

    Rows are only ever inserted. The same token may appear more than once;
    the auth gate looks tokens up by exact string on every request, so
    `token` is indexed.
    """

    __tablename__ = "revoked_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(REVOKED_TOKEN_MAX_LENGTH), nullable=False, index=True)
    user_label = Column(String(255), nullable=False, default="")
    is_revoked = Column(Boolean, nullable=False, default=True, server_default=true())
    revoked_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
