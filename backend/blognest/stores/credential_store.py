"""
BlogNest Backend — Credential Store
=====================================

What:  Persistence for User documents.
Who:   Used by AccountService (register/login/list). Owner lookups for blog
       writes go through BlogStore, inside the blog's own transaction.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from blognest.database import DocumentStore
from blognest.exceptions import ConflictError
from blognest.models import User
from blognest.stores.base import unit_of_work

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes rows of the `users` table."""

    def __init__(self, db: DocumentStore):
        self.db = db

    async def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Inserts a new user with an empty blog list.

        Raises:
            ConflictError: the email is already registered (unique index)
            StoreError: any other persistence failure
        """
        async with unit_of_work(self.db, "create_user") as session:
            user = User(
                id=uuid.uuid4(),
                username=username,
                email=email,
                password=password_hash,
                blogs=[],
            )
            session.add(user)
            try:
                await session.flush()
            except IntegrityError as e:
                # Lost a race with a concurrent registration of the same email
                raise ConflictError(
                    message="An account with this email already exists",
                    context={"error_type": type(e).__name__},
                ) from e
            logger.info("User created: %s", user.id)
            return user

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        async with unit_of_work(self.db, "get_user") as session:
            return await session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        async with unit_of_work(self.db, "get_user_by_email") as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def list_all(self) -> List[User]:
        """Every user, oldest registration first."""
        async with unit_of_work(self.db, "list_users") as session:
            result = await session.execute(select(User).order_by(User.created_at))
            return list(result.scalars().all())

    async def count(self) -> int:
        async with unit_of_work(self.db, "count_users") as session:
            result = await session.execute(select(func.count(User.id)))
            return result.scalar() or 0
