"""Tests for the create_user CLI, run against an in-memory SQLite database."""

import unittest
from unittest.mock import patch

from pointsboard.core.security import verify_password
from pointsboard.scripts import create_user
from pointsboard.services.store import CredentialStore
from tests.support import make_sessionmaker


class TestCreateUser(unittest.TestCase):
    def setUp(self) -> None:
        self.sessions = make_sessionmaker()
        patcher = patch.object(create_user, "SessionLocal", self.sessions)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _find(self, username: str):
        db = self.sessions()
        try:
            return CredentialStore(db).find_user(username=username)
        finally:
            db.close()

    def test_creates_admin_by_default(self) -> None:
        code = create_user.main(["root", "root@x.com", "s3cret"])
        self.assertEqual(code, 0)
        user = self._find("root")
        self.assertEqual(user.role, "admin")
        self.assertEqual(user.points, 0)
        self.assertTrue(verify_password("s3cret", user.password_hash))

    def test_explicit_role(self) -> None:
        self.assertEqual(create_user.main(["qa", "qa@x.com", "pw", "qatester"]), 0)
        self.assertEqual(self._find("qa").role, "qatester")

    def test_duplicate_refused(self) -> None:
        self.assertEqual(create_user.main(["root", "root@x.com", "pw"]), 0)
        with patch("sys.stderr"):
            self.assertEqual(create_user.main(["root", "other@x.com", "pw"]), 1)

    def test_blank_username_refused(self) -> None:
        with patch("sys.stderr"):
            self.assertEqual(create_user.main(["  ", "x@x.com", "pw"]), 1)
        self.assertIsNone(self._find("  "))


if __name__ == "__main__":
    unittest.main()
