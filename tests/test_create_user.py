"""Tests for the create_user script (python -m app.scripts.create_user)."""

import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import verify_password
from app.models import Base, Role, User
from app.scripts.create_user import main


class TestCreateUserScript(unittest.TestCase):

    def setUp(self) -> None:
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.SessionTest = sessionmaker(bind=engine, autoflush=False)
        session_patch = patch("app.scripts.create_user.SessionLocal", self.SessionTest)
        session_patch.start()
        self.addCleanup(session_patch.stop)

    def _user(self, login: str) -> User | None:
        db = self.SessionTest()
        try:
            return db.query(User).filter(User.login == login).first()
        finally:
            db.close()

    def test_creates_plain_user(self) -> None:
        self.assertEqual(main(["alice", "pw1"]), 0)
        self.assertEqual(self._user("alice").role, Role.USER)

    def test_creates_administrator(self) -> None:
        self.assertEqual(main(["ops", "pw", "ADMINISTRATOR"]), 0)
        self.assertEqual(self._user("ops").role, Role.ADMINISTRATOR)

    def test_existing_login_fails_without_reset(self) -> None:
        main(["alice", "pw1"])
        with patch("sys.stderr"):
            self.assertEqual(main(["alice", "pw2"]), 1)
        self.assertTrue(verify_password("pw1", self._user("alice").password_hash))

    def test_reset_password(self) -> None:
        main(["alice", "pw1"])
        self.assertEqual(main(["alice", "pw2", "--reset-password"]), 0)
        self.assertTrue(verify_password("pw2", self._user("alice").password_hash))

    def test_reset_applies_requested_role_to_existing_admin(self) -> None:
        main(["ops", "pw", "ADMINISTRATOR"])
        with patch("builtins.print") as printed:
            self.assertEqual(main(["ops", "pw2", "USER", "--reset-password"]), 0)
        self.assertEqual(self._user("ops").role, Role.USER)
        printed.assert_called_with("User 'ops' has role 'USER'.")

    def test_reset_promotes_existing_user(self) -> None:
        main(["alice", "pw1"])
        self.assertEqual(main(["alice", "pw2", "ADMINISTRATOR", "--reset-password"]), 0)
        self.assertEqual(self._user("alice").role, Role.ADMINISTRATOR)

    def test_blank_login_rejected(self) -> None:
        with patch("sys.stderr"):
            self.assertEqual(main(["   ", "pw1"]), 1)


if __name__ == "__main__":
    unittest.main()
