"""
BlogNest Backend — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table (the credential store's documents).
How:   Plain columns for the account fields plus a JSON array holding the
       ordered ids of the blogs this user owns.

Back-reference invariant:
    `blogs` lists exactly the ids of the rows in `blogs` whose owner_id is
    this user. Only BlogStore.create_with_link / delete_with_unlink write it,
    each inside the same transaction as the blog row change.
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from blognest.database import Base
from blognest.models.types import UTCDateTime, utcnow

# Column limits; request schemas enforce the same bounds
USERNAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255


class User(Base):
    """
    A registered account.

    Lifecycle:
        1. Created by AccountService.register (blogs = [])
        2. `blogs` grows/shrinks as the owner's blogs are created/deleted
        3. Never deleted by the API
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), nullable=False)

    # Login key; stored normalised (trimmed, lower-cased)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False, unique=True, index=True)

    # bcrypt hash; never the plaintext
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Ordered Blog ids as strings; JSONB on PostgreSQL, JSON elsewhere.
    # Always reassign a new list: in-place mutation is not change-tracked.
    blogs: Mapped[List[str]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', blogs={len(self.blogs or [])})>"
