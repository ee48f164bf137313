"""
BlogNest Backend — Blog Store
===============================

What:  Persistence for Blog documents, including the two operations that
       must keep a blog and its owner's back-reference list consistent.
How:   Every method is one unit_of_work (one transaction). The owner row is
       selected FOR UPDATE before its `blogs` list is rewritten, so
       concurrent creates/deletes for the same owner serialize on that row.
       SQLite ignores the clause; there DocumentStore opens every
       transaction with BEGIN IMMEDIATE, which serializes whole transactions.

Linked write sequence (create_with_link):
    ┌──────────────┐    ┌──────────────┐    ┌─────────────────────┐    ┌────────┐
    │ lock owner   │───▶│ insert blog  │───▶│ owner.blogs += [id] │───▶│ commit │
    └──────────────┘    └──────────────┘    └─────────────────────┘    └────────┘
    Any failure before commit rolls back both writes.
"""

import logging
import uuid
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from blognest.database import DocumentStore
from blognest.exceptions import NotFoundError, StoreError
from blognest.models import Blog, User
from blognest.stores.base import unit_of_work

logger = logging.getLogger(__name__)


class BlogStore:
    """Reads and writes rows of the `blogs` table and owner back-references."""

    # Columns a caller may change after creation
    MUTABLE_FIELDS = frozenset({"title", "description", "image"})

    def __init__(self, db: DocumentStore):
        self.db = db

    async def list_with_owners(self) -> List[Blog]:
        """All blogs, oldest first, with `owner` loaded."""
        async with unit_of_work(self.db, "list_blogs") as session:
            result = await session.execute(
                select(Blog).options(selectinload(Blog.owner)).order_by(Blog.created_at)
            )
            return list(result.scalars().all())

    async def get(self, blog_id: uuid.UUID) -> Optional[Blog]:
        async with unit_of_work(self.db, "get_blog") as session:
            return await session.get(Blog, blog_id)

    async def create_with_link(
        self,
        title: str,
        description: str,
        image: str,
        owner_id: uuid.UUID,
    ) -> Blog:
        """
        Inserts a blog and appends its id to the owner's `blogs` atomically.

        Raises:
            NotFoundError: owner does not exist (nothing is written)
            StoreError: persistence failure (both writes rolled back)
        """
        async with unit_of_work(self.db, "create_blog") as session:
            owner = await self._lock_user(session, owner_id)
            if owner is None:
                raise NotFoundError(resource="user", resource_id=str(owner_id))

            blog = Blog(
                id=uuid.uuid4(),
                title=title,
                description=description,
                image=image,
                owner_id=owner.id,
            )
            session.add(blog)
            await session.flush()

            # Reassign rather than append: JSON columns don't track in-place changes
            owner.blogs = [*(owner.blogs or []), str(blog.id)]
            await session.flush()

            logger.info("Blog %s created and linked to user %s", blog.id, owner.id)
            return blog

    async def update_fields(self, blog_id: uuid.UUID, fields: Dict[str, str]) -> Optional[Blog]:
        """
        Merges `fields` into the blog; keys outside MUTABLE_FIELDS are ignored.

        Returns None if the blog does not exist.
        """
        async with unit_of_work(self.db, "update_blog") as session:
            blog = await session.get(Blog, blog_id)
            if blog is None:
                return None
            for name, value in fields.items():
                if name in self.MUTABLE_FIELDS:
                    setattr(blog, name, value)
            await session.flush()
            return blog

    async def delete_with_unlink(self, blog_id: uuid.UUID) -> Blog:
        """
        Deletes a blog and removes its id from the owner's `blogs` atomically.

        Raises:
            NotFoundError: blog does not exist
            StoreError: the blog's owner row is missing (dangling reference);
                        the delete is rolled back
        """
        async with unit_of_work(self.db, "delete_blog") as session:
            result = await session.execute(
                select(Blog).where(Blog.id == blog_id).with_for_update()
            )
            blog = result.scalar_one_or_none()
            if blog is None:
                raise NotFoundError(resource="blog", resource_id=str(blog_id))

            owner = await self._lock_user(session, blog.owner_id)
            if owner is None:
                logger.error(
                    "Blog %s references missing owner %s", blog.id, blog.owner_id
                )
                raise StoreError(
                    message="Blog owner record is missing; the blog was not deleted.",
                    context={"blog_id": str(blog.id), "owner_id": str(blog.owner_id)},
                )

            await session.delete(blog)
            owner.blogs = [ref for ref in (owner.blogs or []) if ref != str(blog.id)]
            await session.flush()

            logger.info("Blog %s deleted and unlinked from user %s", blog.id, owner.id)
            return blog

    async def list_for_owner(self, owner_id: uuid.UUID) -> Optional[Tuple[User, List[Blog]]]:
        """
        The owner and its blogs in back-reference order.

        Returns None if the owner does not exist. Ids in the back-reference
        list with no matching blog row are skipped and logged.
        """
        async with unit_of_work(self.db, "list_user_blogs") as session:
            owner = await session.get(User, owner_id)
            if owner is None:
                return None

            refs = [uuid.UUID(ref) for ref in (owner.blogs or [])]
            by_id: Dict[uuid.UUID, Blog] = {}
            if refs:
                result = await session.execute(select(Blog).where(Blog.id.in_(refs)))
                by_id = {blog.id: blog for blog in result.scalars().all()}

            missing = [ref for ref in refs if ref not in by_id]
            if missing:
                logger.warning(
                    "User %s back-references %d missing blog(s): %s",
                    owner.id, len(missing), ", ".join(str(m) for m in missing),
                )
            return owner, [by_id[ref] for ref in refs if ref in by_id]

    async def count(self) -> int:
        async with unit_of_work(self.db, "count_blogs") as session:
            result = await session.execute(select(func.count(Blog.id)))
            return result.scalar() or 0

    @staticmethod
    async def _lock_user(session, user_id: uuid.UUID) -> Optional[User]:
        result = await session.execute(
            select(User).where(User.id == user_id).with_for_update()
        )
        return result.scalar_one_or_none()
