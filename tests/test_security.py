"""Unit tests for pointsboard.core.security: bcrypt hashing and the JWT token codec."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from pydantic import SecretStr

from pointsboard.core.security import (
    DEFAULT_JWT_SECRET,
    TokenCodec,
    TokenExpiredError,
    TokenInvalidError,
    build_token_codec,
    hash_password,
    verify_password,
)
from tests.support import OTHER_SECRET, TEST_SECRET, make_codec, respell_signature, sample_claims


class TestPasswordHashing(unittest.TestCase):
    """hash_password salts every call; verify_password never raises."""

    def test_hash_verifies(self) -> None:
        hashed = hash_password("p1")
        self.assertNotEqual(hashed, "p1")
        self.assertTrue(verify_password("p1", hashed))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("p1")
        self.assertFalse(verify_password("p2", hashed))

    def test_same_password_hashes_differ(self) -> None:
        first = hash_password("same-password")
        second = hash_password("same-password")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("same-password", first))
        self.assertTrue(verify_password("same-password", second))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("p1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("p1", ""))

    def test_long_password_truncated_consistently(self) -> None:
        long_pw = "x" * 100
        hashed = hash_password(long_pw)
        self.assertTrue(verify_password(long_pw, hashed))


class TestTokenCodecRoundTrip(unittest.TestCase):
    """parse(issue(claims)) returns the original claims before expiry."""

    def test_round_trip(self) -> None:
        codec = make_codec()
        claims = sample_claims(id=42, username="bob", email="b@x.com", role="qatester")
        self.assertEqual(codec.parse(codec.issue(claims)), claims)

    def test_explicit_future_expiry(self) -> None:
        codec = make_codec()
        claims = sample_claims()
        token = codec.issue(claims, expires_at=datetime.now(UTC) + timedelta(hours=24))
        self.assertEqual(codec.parse(token), claims)

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenCodec(secret="")


class TestTokenCodecFailures(unittest.TestCase):
    """Invalid and Expired are distinct failure kinds; signature is checked first."""

    def test_expired_token(self) -> None:
        codec = make_codec()
        token = codec.issue(sample_claims(), expires_at=datetime.now(UTC) - timedelta(minutes=1))
        with self.assertRaises(TokenExpiredError) as ctx:
            codec.parse(token)
        self.assertEqual(ctx.exception.kind, "expired")

    def test_token_signed_with_other_secret_is_invalid(self) -> None:
        token = make_codec(secret=OTHER_SECRET).issue(sample_claims())
        with self.assertRaises(TokenInvalidError) as ctx:
            make_codec().parse(token)
        self.assertEqual(ctx.exception.kind, "invalid")

    def test_expired_and_badly_signed_reports_invalid(self) -> None:
        token = make_codec(secret=OTHER_SECRET).issue(
            sample_claims(), expires_at=datetime.now(UTC) - timedelta(minutes=1)
        )
        with self.assertRaises(TokenInvalidError):
            make_codec().parse(token)

    def test_swapped_payload_is_invalid(self) -> None:
        codec = make_codec()
        user_token = codec.issue(sample_claims(role="developer"))
        admin_token = codec.issue(sample_claims(role="admin"))
        header, _, signature = user_token.split(".")
        forged = ".".join([header, admin_token.split(".")[1], signature])
        with self.assertRaises(TokenInvalidError):
            codec.parse(forged)

    def test_garbage_is_invalid(self) -> None:
        with self.assertRaises(TokenInvalidError):
            make_codec().parse("not.a.jwt")

    def test_padded_token_is_invalid(self) -> None:
        codec = make_codec()
        token = codec.issue(sample_claims())
        for suffix in ("=", "==", "===", " ", "\n"):
            with self.subTest(suffix=suffix):
                with self.assertRaises(TokenInvalidError):
                    codec.parse(token + suffix)

    def test_respelled_signature_is_invalid(self) -> None:
        codec = make_codec()
        token = codec.issue(sample_claims())
        respelled = respell_signature(token)
        self.assertNotEqual(respelled, token)
        with self.assertRaises(TokenInvalidError):
            codec.parse(respelled)
        self.assertEqual(codec.parse(token), sample_claims())

    def test_extra_segment_is_invalid(self) -> None:
        codec = make_codec()
        with self.assertRaises(TokenInvalidError):
            codec.parse(codec.issue(sample_claims()) + ".abc")


class TestBuildTokenCodec(unittest.TestCase):
    """build_token_codec uses JWT_SECRET, or warns and falls back when it is unset."""

    def _settings(self, secret: SecretStr | None) -> MagicMock:
        settings = MagicMock()
        settings.APP_ENV = "dev"
        settings.JWT_SECRET = secret
        settings.JWT_ALGORITHM = "HS256"
        settings.JWT_EXPIRE_MINUTES = 1440
        return settings

    def test_configured_secret_used(self) -> None:
        codec = build_token_codec(self._settings(SecretStr(TEST_SECRET)))
        token = codec.issue(sample_claims())
        self.assertEqual(make_codec().parse(token), sample_claims())
        self.assertEqual(codec.expire_minutes, 1440)

    def test_missing_secret_logs_warning(self) -> None:
        with self.assertLogs("pointsboard.core.security", level="WARNING") as logs:
            codec = build_token_codec(self._settings(None))
        self.assertIn("JWT_SECRET is not set", logs.output[0])
        token = codec.issue(sample_claims())
        self.assertEqual(make_codec(secret=DEFAULT_JWT_SECRET).parse(token), sample_claims())


if __name__ == "__main__":
    unittest.main()
