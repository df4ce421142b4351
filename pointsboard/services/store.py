"""Credential store: user and revoked-token rows behind a SQLAlchemy session."""

import logging
from collections.abc import Callable
from typing import Literal, TypeVar

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pointsboard.models import RevokedToken, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

SortOrder = Literal["asc", "desc"]


class StoreError(Exception):
    """Raised when a database operation fails. The session has been rolled back."""

    def __init__(self, message: str, operation: str) -> None:
        self.message = message
        self.operation = operation
        super().__init__(message)


class DuplicateRowError(StoreError):
    """Raised when a write violates a unique index (e.g. username or email)."""


class CredentialStore:
    """
    Point reads and writes on users and revoked_tokens.

    Mutations commit immediately and return the affected-row count so callers
    can tell a missing row apart from a successful write.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _run(self, operation: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Store integrity violation", extra={"operation": operation})
            raise DuplicateRowError("Duplicate row", operation) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Store operation failed", extra={"operation": operation})
            raise StoreError(f"Database error during {operation}", operation) from e

    def find_user(self, email: str | None = None, username: str | None = None) -> User | None:
        """Return the first user matching email OR username (exact match)."""
        predicates = []
        if email is not None:
            predicates.append(User.email == email)
        if username is not None:
            predicates.append(User.username == username)
        if not predicates:
            return None
        return self._run(
            "find_user",
            lambda: self.session.query(User).filter(or_(*predicates)).first(),
        )

    def find_user_by_email(self, email: str) -> User | None:
        return self._run(
            "find_user_by_email",
            lambda: self.session.query(User).filter(User.email == email).first(),
        )

    def find_users_by_role(
        self, role: str, order_by_points: SortOrder | None = None
    ) -> list[User]:
        """Users with exactly this role, ordered by id or by points."""

        def query() -> list[User]:
            q = self.session.query(User).filter(User.role == role)
            if order_by_points == "asc":
                q = q.order_by(User.points.asc(), User.id.asc())
            elif order_by_points == "desc":
                q = q.order_by(User.points.desc(), User.id.asc())
            else:
                q = q.order_by(User.id)
            return q.all()

        return self._run("find_users_by_role", query)

    def find_all_users(self) -> list[User]:
        return self._run(
            "find_all_users",
            lambda: self.session.query(User).order_by(User.id).all(),
        )

    def insert_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: str,
        points: int = 0,
    ) -> User:
        """Insert and commit a new user; returns the row with its generated id."""

        def insert() -> User:
            user = User(
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
                points=points,
            )
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
            return user

        return self._run("insert_user", insert)

    def delete_user(self, user_id: int) -> int:
        """Physically delete a user. Returns the number of rows deleted."""

        def delete() -> int:
            count = (
                self.session.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
            return count

        return self._run("delete_user", delete)

    def update_user_points(self, user_id: int, points: int) -> int:
        """Set a user's points. Returns the number of rows updated."""

        def update() -> int:
            count = (
                self.session.query(User)
                .filter(User.id == user_id)
                .update({User.points: points}, synchronize_session=False)
            )
            self.session.commit()
            return count

        return self._run("update_user_points", update)

    def is_token_revoked(self, token: str) -> bool:
        """Exact-string point lookup on the indexed token column."""

        def lookup() -> bool:
            row = (
                self.session.query(RevokedToken.id)
                .filter(RevokedToken.token == token, RevokedToken.is_revoked.is_(True))
                .first()
            )
            return row is not None

        return self._run("is_token_revoked", lookup)

    def insert_revocation(self, token: str, user_label: str) -> RevokedToken:
        """Append a revocation record and commit."""

        def insert() -> RevokedToken:
            record = RevokedToken(token=token, user_label=user_label, is_revoked=True)
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
            return record

        return self._run("insert_revocation", insert)
