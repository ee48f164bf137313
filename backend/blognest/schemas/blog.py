"""
BlogNest Backend — Blog Request/Response Schemas
==================================================

What:  API contracts for the blog endpoints.
How:   Request bodies are validated by FastAPI before reaching BlogService;
       responses are built from ORM rows with the helpers below
       (the ORM attribute is `owner_id`, the wire field is `user`).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from blognest.models import IMAGE_MAX_LENGTH, TITLE_MAX_LENGTH, Blog, User
from blognest.schemas.common import CamelModel, Envelope
from blognest.schemas.user import UserPublic, user_public


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BlogCreate(CamelModel):
    """Body of POST /blog/create-blog."""
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str
    image: str = Field(max_length=IMAGE_MAX_LENGTH, description="Cover image URL or reference")
    user: uuid.UUID = Field(description="Owner's user id")


class BlogUpdate(CamelModel):
    """
    Body of PUT /blog/update-blog/{id}.

    Every field is optional; only the supplied ones are merged. Unknown keys
    (including `user`) are dropped, so the owner can never be reassigned.
    """
    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=IMAGE_MAX_LENGTH)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BlogOut(CamelModel):
    """A blog with its owner as an id."""
    id: uuid.UUID
    title: str
    description: str
    image: str
    user: uuid.UUID = Field(description="Owner's user id")
    created_at: datetime
    updated_at: datetime


class BlogWithOwner(BlogOut):
    """A blog with its owner expanded to the public user record."""
    user: UserPublic


class UserWithBlogs(UserPublic):
    """A user whose `blogs` list is expanded to full blog records."""
    blogs: List[BlogOut] = Field(default_factory=list)


def blog_out(blog: Blog) -> BlogOut:
    return BlogOut(
        id=blog.id,
        title=blog.title,
        description=blog.description,
        image=blog.image,
        user=blog.owner_id,
        created_at=blog.created_at,
        updated_at=blog.updated_at,
    )


def blog_with_owner(blog: Blog) -> BlogWithOwner:
    return BlogWithOwner(
        id=blog.id,
        title=blog.title,
        description=blog.description,
        image=blog.image,
        user=user_public(blog.owner),
        created_at=blog.created_at,
        updated_at=blog.updated_at,
    )


def user_with_blogs(user: User, blogs: List[Blog]) -> UserWithBlogs:
    return UserWithBlogs(
        id=user.id,
        username=user.username,
        email=user.email,
        blogs=[blog_out(blog) for blog in blogs],
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


# ══════════════════════════════════════════════════════════════════════════
# Envelopes
# ══════════════════════════════════════════════════════════════════════════


class BlogListEnvelope(Envelope):
    """Response of GET /blog/get-all-blogs."""
    blog_count: int = Field(alias="Blogcount", description="Number of blogs returned")
    blogs: List[BlogWithOwner]


class NewBlogEnvelope(Envelope):
    """Response of POST /blog/create-blog."""
    new_blog: BlogOut


class BlogEnvelope(Envelope):
    """Response of GET /blog/get-blog/{id} and PUT /blog/update-blog/{id}."""
    blog: BlogOut


class UserBlogEnvelope(Envelope):
    """Response of GET /blog/user-blog/{id}."""
    user_blog: UserWithBlogs
