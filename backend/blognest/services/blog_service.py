"""
BlogNest Backend — Blog Lifecycle Service
===========================================

What:  Create, read, update and delete blogs while keeping every owner's
       back-reference list in step with the blogs it owns.
How:   Validates input and ids, then delegates to BlogStore. The two
       multi-row writes (create, delete) are single BlogStore transactions.
Who:   Called by the /blog route handlers.

Error Handling Strategy:
    Stores already translate driver errors into StoreError; this layer adds
    ValidationError for bad input and NotFoundError for unknown ids. All
    BlogNestError subclasses propagate unchanged to the global handlers.
"""

import logging
import uuid
from typing import Any, Dict, List, Mapping, Union

from blognest.exceptions import NotFoundError, ValidationError
from blognest.schemas.blog import (
    BlogOut,
    BlogWithOwner,
    UserWithBlogs,
    blog_out,
    blog_with_owner,
    user_with_blogs,
)
from blognest.stores import BlogStore

logger = logging.getLogger(__name__)

IdLike = Union[uuid.UUID, str]


def parse_id(value: IdLike, field: str) -> uuid.UUID:
    """Coerces an id argument to UUID; malformed ids are a ValidationError."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(message=f"'{value}' is not a valid {field} id", fields=[field])


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class BlogService:
    """Business logic for blogs."""

    def __init__(self, blogs: BlogStore):
        self.blogs = blogs

    async def list(self) -> List[BlogWithOwner]:
        """Every blog with its owner expanded; no filtering or pagination."""
        return [blog_with_owner(blog) for blog in await self.blogs.list_with_owners()]

    async def create(
        self,
        title: str,
        description: str,
        image: str,
        owner_id: IdLike,
    ) -> BlogOut:
        """
        Create a blog and link it to its owner in one transaction.

        Raises:
            ValidationError: a field is missing or blank, or owner_id is malformed
            NotFoundError: the owner does not exist (no blog is written)
            StoreError: persistence failure (neither write is kept)
        """
        missing = [
            name for name, value in (
                ("title", title),
                ("description", description),
                ("image", image),
                ("user", owner_id),
            )
            if _is_blank(value)
        ]
        if missing:
            raise ValidationError(
                message="Title, description, image and user are all required",
                fields=missing,
            )

        blog = await self.blogs.create_with_link(
            title=title,
            description=description,
            image=image,
            owner_id=parse_id(owner_id, "user"),
        )
        return blog_out(blog)

    async def get_by_id(self, blog_id: IdLike) -> BlogOut:
        blog_uuid = parse_id(blog_id, "blog")
        blog = await self.blogs.get(blog_uuid)
        if blog is None:
            raise NotFoundError(resource="blog", resource_id=str(blog_uuid))
        return blog_out(blog)

    async def update(self, blog_id: IdLike, fields: Mapping[str, Any]) -> BlogOut:
        """
        Merge title/description/image into an existing blog.

        Keys other than those three (the owner in particular) are ignored.
        Supplied values must not be blank.
        """
        blog_uuid = parse_id(blog_id, "blog")
        changes: Dict[str, str] = {
            name: value for name, value in fields.items()
            if name in BlogStore.MUTABLE_FIELDS and value is not None
        }
        ignored = sorted(set(fields) - BlogStore.MUTABLE_FIELDS)
        if ignored:
            logger.debug("Ignoring non-updatable blog fields: %s", ", ".join(ignored))

        blank = sorted(name for name, value in changes.items() if _is_blank(value))
        if blank:
            raise ValidationError(message="Updated fields cannot be empty", fields=blank)

        blog = await self.blogs.update_fields(blog_uuid, changes)
        if blog is None:
            raise NotFoundError(resource="blog", resource_id=str(blog_uuid))
        return blog_out(blog)

    async def delete(self, blog_id: IdLike) -> None:
        """
        Delete a blog and unlink it from its owner in one transaction.

        Raises:
            NotFoundError: the blog does not exist
            StoreError: the blog's owner record is missing (nothing is deleted)
        """
        await self.blogs.delete_with_unlink(parse_id(blog_id, "blog"))

    async def list_by_owner(self, owner_id: IdLike) -> UserWithBlogs:
        """The owner's public record with its blog list expanded, in order."""
        owner_uuid = parse_id(owner_id, "user")
        found = await self.blogs.list_for_owner(owner_uuid)
        if found is None:
            raise NotFoundError(resource="user", resource_id=str(owner_uuid))
        owner, blogs = found
        return user_with_blogs(owner, blogs)
