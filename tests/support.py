"""Shared helpers: in-memory SQLite database and token fixtures for tests."""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pointsboard.core.security import TokenClaims, TokenCodec
from pointsboard.models import Base

# Long enough for HS256 key-length checks.
TEST_SECRET = "test-secret-for-pointsboard-unit-tests-0123456789"
OTHER_SECRET = "another-secret-that-did-not-sign-these-tokens-987"


def make_codec(secret: str = TEST_SECRET, expire_minutes: int = 60) -> TokenCodec:
    return TokenCodec(secret=secret, algorithm="HS256", expire_minutes=expire_minutes)


def sample_claims(**overrides: object) -> TokenClaims:
    values: dict[str, object] = {
        "id": 1,
        "username": "alice",
        "email": "a@x.com",
        "role": "developer",
    }
    values.update(overrides)
    return TokenClaims(**values)  # type: ignore[arg-type]


def make_sessionmaker() -> sessionmaker[Session]:
    """
    Fresh in-memory SQLite database with all tables created.

    StaticPool keeps a single connection so TestClient worker threads see
    the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db(factory: sessionmaker[Session]):
    def _get_db() -> Generator[Session, None, None]:
        db = factory()
        try:
            yield db
        finally:
            db.close()

    return _get_db


_B64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def respell_signature(token: str) -> str:
    """
    Same token with the unused low bit of the signature's last character flipped.

    An HS256 signature is 32 bytes, so its 43rd base64url character carries two
    padding bits; the result decodes to identical signature bytes.
    """
    head, _, last = token.rpartition(".")
    alt = _B64URL_ALPHABET[_B64URL_ALPHABET.index(last[-1]) ^ 1]
    return f"{head}.{last[:-1]}{alt}"
