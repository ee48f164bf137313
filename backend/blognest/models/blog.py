"""
BlogNest Backend — Blog SQLAlchemy Model
==========================================

What:  ORM model for the `blogs` table (the blog store's documents).
How:   Content columns plus an immutable owner_id foreign key; the `owner`
       relationship is loaded on demand (selectinload) when a listing needs
       the expanded user record.
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blognest.database import Base
from blognest.models.types import UTCDateTime, utcnow
from blognest.models.user import User

# Column limits; request schemas enforce the same bounds
TITLE_MAX_LENGTH = 255
IMAGE_MAX_LENGTH = 2048


class Blog(Base):
    """
    A blog post owned by exactly one user.

    Lifecycle:
        1. Created by BlogStore.create_with_link (owner must exist)
        2. title / description / image may be updated; owner_id never changes
        3. Deleted by BlogStore.delete_with_unlink, which also drops the id
           from the owner's `blogs` list
    """

    __tablename__ = "blogs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # URL or storage reference of the cover image
    image: Mapped[str] = mapped_column(String(IMAGE_MAX_LENGTH), nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
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

    owner: Mapped[User] = relationship(User, lazy="raise")

    __table_args__ = (
        Index("idx_blogs_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}', owner_id={self.owner_id})>"
