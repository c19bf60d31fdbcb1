"""Password hashing and opaque session token generation."""

import random
import secrets

import bcrypt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths accepted at the HTTP boundary (column size and bcrypt input limit).
LOGIN_MIN_LEN = 1
LOGIN_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128

# Entropy for "secure" tokens (43 url-safe characters).
TOKEN_BYTES = 32
# Upper bound for legacy "random31" tokens: 2**31 - 1.
TOKEN_RANDOM31_MAX = 2147483647

TOKEN_STRATEGIES = ("secure", "random31")


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_token_value(strategy: str = "secure") -> str:
    """
    Return a new opaque token value.

    "secure" draws from the OS CSPRNG. "random31" is the legacy format: the decimal
    string of a non-cryptographic pseudo-random integer below 2**31 - 1. It is
    guessable and collides easily; keep it only for compatibility with old clients.
    """
    if strategy == "secure":
        return secrets.token_urlsafe(TOKEN_BYTES)
    if strategy == "random31":
        return str(int(random.random() * TOKEN_RANDOM31_MAX))
    raise ValueError(
        f"Unknown token strategy {strategy!r}; expected one of {', '.join(TOKEN_STRATEGIES)}"
    )
