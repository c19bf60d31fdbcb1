"""Unit tests for app.bootstrap: settings gate, idempotence and the CLI exit code."""

import unittest
from unittest.mock import MagicMock, patch

from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.bootstrap import main, run_bootstrap
from app.core.security import verify_password
from app.models import Base, Role, User


def _settings(enabled: bool = True, login: str = "root", password: str = "root") -> MagicMock:
    settings = MagicMock()
    settings.BOOTSTRAP_ADMIN_ENABLED = enabled
    settings.BOOTSTRAP_ADMIN_LOGIN = login
    settings.BOOTSTRAP_ADMIN_PASSWORD = SecretStr(password)
    settings.LOG_LEVEL = "INFO"
    return settings


class TestBootstrapDisabled(unittest.TestCase):
    """When BOOTSTRAP_ADMIN_ENABLED is False, run_bootstrap does nothing."""

    def test_returns_false_and_does_not_query(self) -> None:
        session = MagicMock()
        self.assertFalse(run_bootstrap(session, _settings(enabled=False)))
        session.query.assert_not_called()
        session.add.assert_not_called()


class TestBootstrapAgainstDatabase(unittest.TestCase):
    """run_bootstrap creates the configured admin once."""

    def setUp(self) -> None:
        patcher = patch("app.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.db = sessionmaker(bind=engine, autoflush=False)()
        self.addCleanup(self.db.close)

    def test_creates_then_skips(self) -> None:
        self.assertTrue(run_bootstrap(self.db, _settings()))
        self.assertFalse(run_bootstrap(self.db, _settings()))
        admins = self.db.query(User).filter(User.role == Role.ADMINISTRATOR).all()
        self.assertEqual([a.login for a in admins], ["root"])

    def test_uses_configured_credentials(self) -> None:
        run_bootstrap(self.db, _settings(login="ops", password="hunter2"))
        admin = self.db.query(User).filter(User.login == "ops").one()
        self.assertEqual(admin.role, Role.ADMINISTRATOR)
        self.assertTrue(verify_password("hunter2", admin.password_hash))


class TestBootstrapCli(unittest.TestCase):
    """main() returns 0 on success and 1 when bootstrap raises."""

    def test_success_exit_code(self) -> None:
        session = MagicMock()
        with patch("app.core.database.SessionLocal", return_value=session), patch(
            "app.bootstrap.run_bootstrap", return_value=True
        ), patch("app.core.config.get_settings", return_value=_settings()):
            self.assertEqual(main(), 0)
        session.close.assert_called_once()

    def test_failure_exit_code(self) -> None:
        session = MagicMock()
        with patch("app.core.database.SessionLocal", return_value=session), patch(
            "app.bootstrap.run_bootstrap", side_effect=RuntimeError("db down")
        ), patch("app.core.config.get_settings", return_value=_settings()):
            self.assertEqual(main(), 1)
        session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
