"""Unit tests for app.core.security: bcrypt hashing and token value generation."""

import unittest
from unittest.mock import patch

from app.core.security import (
    TOKEN_RANDOM31_MAX,
    generate_token_value,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password never returns the plain text; verify_password checks it."""

    def setUp(self) -> None:
        patcher = patch("app.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_hash_verifies_and_differs_from_plain(self) -> None:
        hashed = hash_password("pw1")
        self.assertNotEqual(hashed, "pw1")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("pw1", hashed))

    def test_wrong_password_does_not_verify(self) -> None:
        self.assertFalse(verify_password("pw2", hash_password("pw1")))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("pw1"), hash_password("pw1"))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("pw1", "not-a-bcrypt-hash"))

    def test_long_password_is_truncated_to_72_bytes(self) -> None:
        base = "a" * 72
        hashed = hash_password(base + "tail")
        self.assertTrue(verify_password(base + "different", hashed))


class TestTokenGeneration(unittest.TestCase):
    """generate_token_value supports the secure default and the legacy 31-bit format."""

    def test_secure_tokens_are_long_and_unique(self) -> None:
        values = {generate_token_value("secure") for _ in range(50)}
        self.assertEqual(len(values), 50)
        self.assertTrue(all(len(v) >= 40 for v in values))

    def test_default_strategy_is_secure(self) -> None:
        self.assertFalse(generate_token_value().isdigit())

    def test_random31_is_decimal_in_range(self) -> None:
        for _ in range(50):
            value = generate_token_value("random31")
            self.assertTrue(value.isdigit())
            self.assertLess(int(value), TOKEN_RANDOM31_MAX)

    def test_random31_uses_non_cryptographic_random(self) -> None:
        with patch("app.core.security.random.random", return_value=0.5):
            self.assertEqual(generate_token_value("random31"), str(int(0.5 * TOKEN_RANDOM31_MAX)))

    def test_unknown_strategy_raises(self) -> None:
        with self.assertRaises(ValueError):
            generate_token_value("uuid")


if __name__ == "__main__":
    unittest.main()
