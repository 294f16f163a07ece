"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a fixed work factor (BCRYPT_ROUNDS, default 10).
"""

import bcrypt

from shared.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted, adaptive password hashing backed by bcrypt."""

    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            ValidationError: If the password is longer than bcrypt accepts
        """
        raw = password.encode()
        if len(raw) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                code="PASSWORD_TOO_LONG",
            )
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError):
            return False
