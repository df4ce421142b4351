"""Password hashing and JWT issuance/verification for authentication."""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from pointsboard.core.config import Settings

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 10 keeps a hash in the tens of milliseconds.
BCRYPT_ROUNDS = 10

# Used only when JWT_SECRET is unset in dev. Settings validation refuses this in prod.
DEFAULT_JWT_SECRET = "pointsboard-dev-secret-change-in-production"

# Claims every token must carry to be accepted.
REQUIRED_CLAIMS = ("sub", "id", "username", "email", "role", "exp")

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_-]+\Z")


def _is_canonical_segment(segment: str) -> bool:
    """Unpadded base64url that re-encodes to itself (no stray trailing bits)."""
    if not _SEGMENT_RE.match(segment):
        return False
    try:
        raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except (binascii.Error, ValueError):
        return False
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii") == segment


def is_canonical_token(token: str) -> bool:
    """
    True for a three-segment compact JWT in canonical encoding.

    The revocation ledger matches exact strings, so only one spelling of a
    signed token may verify.
    """
    segments = token.split(".")
    return len(segments) == 3 and all(_is_canonical_segment(s) for s in segments)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never match."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Identity fields embedded in a signed token."""

    id: int
    username: str
    email: str
    role: str


class TokenVerificationError(Exception):
    """Base class for token parse failures."""

    kind = "invalid"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenInvalidError(TokenVerificationError):
    """Signature mismatch, malformed token, or missing claims."""

    kind = "invalid"


class TokenExpiredError(TokenVerificationError):
    """Signature is valid but the expiry has passed."""

    kind = "expired"


class TokenCodec:
    """
    Signs claims into a JWT and verifies them.

    The secret and expiry policy are injected at construction; nothing is read
    from module state, so a test or a second app can hold its own codec.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 1440,
    ) -> None:
        if not secret:
            raise ValueError("TokenCodec requires a non-empty secret")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: TokenClaims, expires_at: datetime | None = None) -> str:
        """Create a signed token for claims, expiring at expires_at (default now + expire_minutes)."""
        now = datetime.now(UTC)
        if expires_at is None:
            expires_at = now + timedelta(minutes=self.expire_minutes)
        payload: dict[str, Any] = {
            "sub": str(claims.id),
            "id": claims.id,
            "username": claims.username,
            "email": claims.email,
            "role": claims.role,
            "exp": expires_at,
            "iat": now,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def parse(self, token: str) -> TokenClaims:
        """
        Verify signature, then expiry, and return the embedded claims.

        Raises TokenInvalidError for a bad signature or malformed token and
        TokenExpiredError for a correctly signed token past its expiry.
        """
        if not isinstance(token, str) or not is_canonical_token(token):
            raise TokenInvalidError("Invalid token")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except jwt.PyJWTError as e:
            raise TokenInvalidError("Invalid token") from e

        user_id = payload.get("id")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise TokenInvalidError("Invalid token payload")
        if str(user_id) != payload.get("sub"):
            raise TokenInvalidError("Invalid token payload")
        for field in ("username", "email", "role"):
            if not isinstance(payload.get(field), str):
                raise TokenInvalidError("Invalid token payload")
        return TokenClaims(
            id=user_id,
            username=payload["username"],
            email=payload["email"],
            role=payload["role"],
        )


def build_token_codec(settings: "Settings") -> TokenCodec:
    """
    Build the codec from settings.

    An unset JWT_SECRET is only possible outside prod (settings validation
    rejects it there); it falls back to DEFAULT_JWT_SECRET with a warning.
    """
    if settings.JWT_SECRET is None:
        logger.warning(
            "JWT_SECRET is not set; signing tokens with the built-in development secret. "
            "Set JWT_SECRET before exposing this service.",
            extra={"app_env": settings.APP_ENV},
        )
        secret = DEFAULT_JWT_SECRET
    else:
        secret = settings.JWT_SECRET.get_secret_value()
    return TokenCodec(
        secret=secret,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )
