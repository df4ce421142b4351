"""Per-request authentication: bearer token → verified identity."""

import logging

from pointsboard.core.errors import ErrorKind, ServiceError
from pointsboard.core.security import TokenCodec, TokenExpiredError, TokenInvalidError
from pointsboard.schemas.auth import CurrentUser
from pointsboard.services.revocation import RevocationLedger

logger = logging.getLogger(__name__)


def authenticate(
    token: str | None,
    codec: TokenCodec,
    ledger: RevocationLedger,
) -> CurrentUser:
    """
    Verify token and return the identity it carries.

    Steps run in order and stop at the first failure: presence, signature,
    expiry, revocation. The identity comes from the signed claims; the user
    row is not re-read.
    """
    if not token:
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "Access token required")

    try:
        claims = codec.parse(token)
    except TokenInvalidError as e:
        logger.info("Rejected token with invalid signature or payload")
        raise ServiceError(ErrorKind.FORBIDDEN, "Invalid token") from e
    except TokenExpiredError as e:
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "Token expired") from e
    except Exception as e:
        logger.exception("Token verification failed unexpectedly")
        raise ServiceError(ErrorKind.INTERNAL, "Authentication service error") from e

    try:
        revoked = ledger.is_revoked(token)
    except Exception as e:
        logger.exception("Revocation lookup failed", extra={"user_id": claims.id})
        raise ServiceError(ErrorKind.INTERNAL, "Authentication service error") from e
    if revoked:
        logger.info("Rejected revoked token", extra={"user_id": claims.id})
        raise ServiceError(ErrorKind.UNAUTHENTICATED, "Token invalidated")

    return CurrentUser(
        id=claims.id,
        username=claims.username,
        email=claims.email,
        role=claims.role,
    )
