"""
BlogNest Backend — Password Hashing
=====================================

What:  One-way hashing and verification of account passwords.
How:   passlib CryptContext with the bcrypt scheme; the work factor comes from
       Settings.bcrypt_rounds (tests use the minimum, 4).
"""

from passlib.context import CryptContext


class PasswordHasher:
    """Hashes and verifies passwords with a configurable bcrypt work factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._pwd_context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """False for a mismatch or an unrecognised/empty hash."""
        if not password_hash:
            return False
        try:
            return self._pwd_context.verify(password, password_hash)
        except ValueError:
            return False
