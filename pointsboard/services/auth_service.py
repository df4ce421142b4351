"""Registration, login and token invalidation."""

import logging
from dataclasses import dataclass

from pointsboard.core.errors import ErrorKind, ServiceError
from pointsboard.core.security import TokenClaims, TokenCodec, hash_password, verify_password
from pointsboard.models import PRIVILEGED_ROLE, SELF_REGISTRABLE_ROLES, User
from pointsboard.schemas.common import MessageResponse
from pointsboard.schemas.user import PublicUser
from pointsboard.services.revocation import RevocationLedger
from pointsboard.services.store import CredentialStore, DuplicateRowError, StoreError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
USER_EXISTS = "User already exists with this email or username"


@dataclass(frozen=True)
class AuthResult:
    """Issued token and the public view of its user."""

    token: str
    user: PublicUser


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class AuthService:
    """Orchestrates credential checks, password hashing and token issuance."""

    def __init__(
        self,
        store: CredentialStore,
        codec: TokenCodec,
        ledger: RevocationLedger | None = None,
    ) -> None:
        self.store = store
        self.codec = codec
        self.ledger = ledger or RevocationLedger(store)

    def _issue_for(self, user: User) -> AuthResult:
        claims = TokenClaims(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
        )
        return AuthResult(token=self.codec.issue(claims), user=PublicUser.from_record(user))

    def register(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
        role: str | None,
    ) -> AuthResult:
        """
        Create a developer or qatester account and return a token for it.

        Raises ServiceError: BAD_REQUEST for missing fields or an unknown role,
        FORBIDDEN for an admin role, CONFLICT when the username or email is
        taken, INTERNAL when hashing or the store fails.
        """
        if any(_is_blank(v) for v in (username, email, password, role)):
            raise ServiceError(
                ErrorKind.BAD_REQUEST,
                "Username, email, password and role are required",
            )
        if role == PRIVILEGED_ROLE.value:
            logger.warning("Rejected registration with privileged role", extra={"username": username})
            raise ServiceError(ErrorKind.FORBIDDEN, "Cannot register with admin role")
        if role not in {r.value for r in SELF_REGISTRABLE_ROLES}:
            raise ServiceError(ErrorKind.BAD_REQUEST, "Invalid role")

        try:
            existing = self.store.find_user(email=email, username=username)
            if existing is not None:
                raise ServiceError(ErrorKind.CONFLICT, USER_EXISTS)
            password_hash = hash_password(password)
            user = self.store.insert_user(
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
                points=0,
            )
        except DuplicateRowError as e:
            # Lost a race with a concurrent registration for the same username/email.
            raise ServiceError(ErrorKind.CONFLICT, USER_EXISTS) from e
        except (StoreError, ValueError) as e:
            logger.error("Registration failed", extra={"reason": type(e).__name__})
            raise ServiceError(ErrorKind.INTERNAL, "Registration failed") from e

        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        return self._issue_for(user)

    def login(self, email: str | None, password: str | None) -> AuthResult:
        """
        Exchange email and password for a token.

        Unknown email and wrong password produce the same UNAUTHORIZED error.
        """
        if _is_blank(email) or _is_blank(password):
            raise ServiceError(ErrorKind.BAD_REQUEST, "Email and password are required")
        try:
            user = self.store.find_user_by_email(email)
        except StoreError as e:
            raise ServiceError(ErrorKind.INTERNAL, "Login failed") from e

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected")
            raise ServiceError(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)

        logger.info("User logged in", extra={"user_id": user.id})
        return self._issue_for(user)

    def invalidate(self, token: str, owner_label: str) -> MessageResponse:
        """Record token as revoked. The token is not checked for validity first."""
        try:
            self.ledger.revoke(token, owner_label)
        except StoreError as e:
            raise ServiceError(ErrorKind.INTERNAL, "Failed to invalidate token") from e
        return MessageResponse(message="Token invalidated successfully")
