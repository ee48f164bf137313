"""
BlogNest Backend — Account Service
====================================

What:  Registration, credential checks and user listing.
How:   Validates input, talks to CredentialStore, hashes/verifies with
       PasswordHasher, and returns UserPublic models (never the hash).
Who:   Called by the /user route handlers.

Each operation is at most two store calls (lookup, then insert) plus one
hash or compare. No session or token is issued: a successful login() only
proves the credentials were valid for that call.
"""

import logging
from typing import List

from passlib.exc import PasswordSizeError

from blognest.exceptions import AuthError, ConflictError, ValidationError
from blognest.schemas.user import UserPublic, user_public
from blognest.security import PasswordHasher
from blognest.stores import CredentialStore

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Business logic for user accounts."""

    def __init__(self, credentials: CredentialStore, hasher: PasswordHasher):
        self.credentials = credentials
        self.hasher = hasher

    async def register(self, username: str, email: str, password: str) -> UserPublic:
        """
        Create a new account.

        Raises:
            ValidationError: a field is missing or blank, or the password is
                             longer than the hasher accepts
            ConflictError: the email is already registered
            StoreError: persistence failure
        """
        missing = [
            name for name, value in (
                ("username", username), ("email", email), ("password", password)
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(
                message="Username, email and password are all required",
                fields=missing,
            )

        try:
            password_hash = self.hasher.hash(password)
        except PasswordSizeError as e:
            raise ValidationError(
                message=f"Password must be at most {e.max_size} characters",
                fields=["password"],
            ) from e

        email = normalize_email(email)
        if await self.credentials.get_by_email(email) is not None:
            raise ConflictError(message="An account with this email already exists")

        user = await self.credentials.create(
            username=username.strip(),
            email=email,
            password_hash=password_hash,
        )
        logger.info("Registered user %s", user.id)
        return user_public(user)

    async def login(self, email: str, password: str) -> UserPublic:
        """
        Check credentials and return the matching user.

        Raises:
            ValidationError: email or password missing
            AuthError: unknown email or wrong password (same message for both)
        """
        missing = [
            name for name, value in (("email", email), ("password", password))
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(message="Email and password are both required", fields=missing)

        user = await self.credentials.get_by_email(normalize_email(email))
        if user is None:
            logger.info("Login rejected: unknown email")
            raise AuthError()

        if not self.hasher.verify(password, user.password):
            logger.info("Login rejected: wrong password for user %s", user.id)
            raise AuthError()

        return user_public(user)

    async def list_all(self) -> List[UserPublic]:
        users = await self.credentials.list_all()
        return [user_public(user) for user in users]
