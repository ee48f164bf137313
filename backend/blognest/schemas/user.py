"""
BlogNest Backend — User Request/Response Schemas
==================================================

What:  API contracts for registration, login and user listings.
Why:   UserPublic is the only shape a User ever leaves the service layer in;
       it has no password field, so a hash cannot be serialized by accident.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import Field, field_validator

from blognest.models import EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH
from blognest.schemas.common import CamelModel, Envelope


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserRegister(CamelModel):
    """Body of POST /user/register."""
    username: str = Field(max_length=USERNAME_MAX_LENGTH, description="Display name")
    email: str = Field(
        max_length=EMAIL_MAX_LENGTH,
        description="Login email; must not already be registered",
    )
    password: str = Field(description="Plaintext password; only its hash is stored")


class UserLogin(CamelModel):
    """Body of POST /user/login."""
    email: str
    password: str


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserPublic(CamelModel):
    """A user record without secret fields."""
    id: uuid.UUID = Field(description="Unique user identifier")
    username: str
    email: str
    blogs: List[uuid.UUID] = Field(default_factory=list, description="Owned blog ids, oldest first")
    created_at: datetime
    updated_at: datetime

    @field_validator("blogs", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return v or []


class UserEnvelope(Envelope):
    """Response of register and login."""
    user: UserPublic


class UserListEnvelope(Envelope):
    """Response of GET /user/get-all-user."""
    user_count: int = Field(description="Number of users returned")
    users: List[UserPublic]


def user_public(user) -> UserPublic:
    """Builds the secret-free representation of a User row."""
    return UserPublic(
        id=user.id,
        username=user.username,
        email=user.email,
        blogs=list(user.blogs or []),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
