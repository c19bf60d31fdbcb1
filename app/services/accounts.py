"""Account operations: registration, login/logout tokens, roles, passwords and the bootstrap admin."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.security import generate_token_value, hash_password, verify_password
from app.models import Role, Token, User
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)

# Same message for unknown login and wrong password so callers cannot probe for logins.
INVALID_CREDENTIALS_MESSAGE = "Incorrect login or password"

# Inserts attempted before giving up on a colliding token value.
TOKEN_INSERT_ATTEMPTS = 3

DEFAULT_ADMIN_LOGIN = "root"
DEFAULT_ADMIN_PASSWORD = "root"


class AccountError(Exception):
    """Base class for account operation failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AccountNotFoundError(AccountError):
    """Raised when a login (or the owner behind a token) does not exist, or credentials do not match."""


class AccountExistsError(AccountError):
    """Raised when registering a login that is already taken."""


class InvalidTokenError(AccountError):
    """Raised when logging out a token that does not exist."""


def _find_user(db: Session, login: str) -> User | None:
    return db.query(User).filter(User.login == login).first()


def _find_token(db: Session, value: str) -> Token | None:
    return db.query(Token).filter(Token.value == value).first()


def get_user(db: Session, login: str) -> User:
    """Return the user with this login or raise AccountNotFoundError."""
    user = _find_user(db, login)
    if user is None:
        raise AccountNotFoundError(f"There is no user with login {login}")
    return user


def get_principal(db: Session, login: str) -> Principal:
    """Look up a user and return the principal (login, stored hash, role) used for authorization."""
    user = _find_user(db, login)
    if user is None:
        raise AccountNotFoundError(f"User {login} not found.")
    return Principal(login=user.login, password_hash=user.password_hash, role=user.role)


def register_user(db: Session, login: str, password: str) -> User:
    """
    Create a user with role USER.

    The existence check gives the common case a clean error; the unique index on
    users.login catches a concurrent registration that passed the check too.
    """
    if _find_user(db, login) is not None:
        raise AccountExistsError("User with this login already exists")

    user = User(login=login, password_hash=hash_password(password), role=Role.USER)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Registration lost race on duplicate login", extra={"login": login})
        raise AccountExistsError("User with this login already exists") from e
    db.refresh(user)
    logger.info("User registered", extra={"login": login})
    return user


def login_user(
    db: Session, login: str, password: str, *, strategy: str | None = None
) -> Token:
    """
    Verify credentials and issue a new session token.

    Unknown login and wrong password both raise AccountNotFoundError with the same
    message. strategy defaults to settings.TOKEN_STRATEGY.
    """
    user = _find_user(db, login)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"login": login})
        raise AccountNotFoundError(INVALID_CREDENTIALS_MESSAGE)

    if strategy is None:
        strategy = get_settings().TOKEN_STRATEGY

    for attempt in range(1, TOKEN_INSERT_ATTEMPTS + 1):
        token = Token(value=generate_token_value(strategy), owner=user)
        db.add(token)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Token value collision, regenerating",
                extra={"login": login, "attempt": attempt, "strategy": strategy},
            )
            continue
        logger.info("User logged in", extra={"login": login, "strategy": strategy})
        return token

    raise RuntimeError(
        f"Could not issue a unique token after {TOKEN_INSERT_ATTEMPTS} attempts"
    )


def logout_token(db: Session, value: str) -> Token:
    """Delete the token and return the deleted record; its fields stay readable."""
    token = _find_token(db, value)
    if token is None:
        raise InvalidTokenError("Incorrect token")

    owner_login = token.owner_login
    db.delete(token)
    db.commit()
    logger.info("User logged out", extra={"login": owner_login})
    return token


def get_user_by_token(db: Session, value: str) -> User:
    """Return the owner of a token or raise AccountNotFoundError when the token is unknown."""
    token = _find_token(db, value)
    if token is None:
        raise AccountNotFoundError("There is no user for this token")
    return token.owner


def list_users(db: Session) -> list[User]:
    """Return every user. No pagination."""
    return db.query(User).order_by(User.id).all()


def change_role(db: Session, login: str, role: Role) -> User:
    user = get_user(db, login)
    previous = user.role
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info(
        "Role changed",
        extra={"login": login, "old_role": previous.value, "new_role": role.value},
    )
    return user


def change_password(db: Session, login: str, password: str) -> User:
    user = get_user(db, login)
    user.password_hash = hash_password(password)
    db.commit()
    db.refresh(user)
    logger.info("Password changed", extra={"login": login})
    return user


def ensure_bootstrap_admin(
    db: Session,
    login: str = DEFAULT_ADMIN_LOGIN,
    password: str = DEFAULT_ADMIN_PASSWORD,
) -> User | None:
    """
    Make sure at least one ADMINISTRATOR exists.

    Returns the created (or promoted) administrator, or None when one already
    existed. If the bootstrap login is already taken by a plain user, that account is
    promoted, its password is reset to the bootstrap password and its existing tokens
    are revoked, so whoever registered the login first gains nothing. A concurrent
    startup that inserted the same login first is treated as already bootstrapped.
    """
    has_admin = (
        db.query(User.id).filter(User.role == Role.ADMINISTRATOR).first() is not None
    )
    if has_admin:
        logger.debug("Administrator present; bootstrap skipped")
        return None

    existing = _find_user(db, login)
    if existing is not None:
        existing.role = Role.ADMINISTRATOR
        existing.password_hash = hash_password(password)
        revoked = (
            db.query(Token)
            .filter(Token.owner_login == login)
            .delete(synchronize_session=False)
        )
        db.commit()
        db.refresh(existing)
        logger.warning(
            "No administrator found; promoted existing user and reset its password",
            extra={"login": login, "tokens_revoked": revoked},
        )
        return existing

    admin = User(
        login=login,
        password_hash=hash_password(password),
        role=Role.ADMINISTRATOR,
    )
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(
            "Bootstrap administrator created concurrently; skipping",
            extra={"login": login},
        )
        return None
    db.refresh(admin)
    logger.warning(
        "No administrator found; created default administrator. Change its password.",
        extra={"login": login},
    )
    return admin
