"""
BlogNest Backend — Blog Route Handlers
========================================

What:  The /blog endpoints: list, create, read, update, delete, per-user list.
How:   Thin handlers: the body is validated by its schema, the work is done by
       BlogService, and the result is wrapped in the response envelope.
       Failures are raised as BlogNestError and rendered by the handlers in
       main.py.

Route Inventory:
    GET    /blog/get-all-blogs
    POST   /blog/create-blog
    PUT    /blog/update-blog/{blog_id}
    GET    /blog/get-blog/{blog_id}
    DELETE /blog/delete-blog/{blog_id}
    GET    /blog/user-blog/{user_id}
"""

from fastapi import APIRouter, Depends, status

from blognest.routes.deps import get_blog_service
from blognest.schemas.blog import (
    BlogCreate,
    BlogEnvelope,
    BlogListEnvelope,
    BlogUpdate,
    NewBlogEnvelope,
    UserBlogEnvelope,
)
from blognest.schemas.common import Envelope, ErrorResponse
from blognest.services import BlogService

router = APIRouter(prefix="/blog", tags=["Blogs"])

_NOT_FOUND = {404: {"description": "Blog or user not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid input", "model": ErrorResponse}}


@router.get(
    "/get-all-blogs",
    response_model=BlogListEnvelope,
    summary="List every blog with its author",
)
async def get_all_blogs(
    blogs: BlogService = Depends(get_blog_service),
) -> BlogListEnvelope:
    items = await blogs.list()
    return BlogListEnvelope(
        message="All blogs listed" if items else "No blogs yet",
        blog_count=len(items),
        blogs=items,
    )


@router.post(
    "/create-blog",
    response_model=NewBlogEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Create a blog and link it to its author",
)
async def create_blog(
    payload: BlogCreate,
    blogs: BlogService = Depends(get_blog_service),
) -> NewBlogEnvelope:
    new_blog = await blogs.create(
        title=payload.title,
        description=payload.description,
        image=payload.image,
        owner_id=payload.user,
    )
    return NewBlogEnvelope(message="Blog created", new_blog=new_blog)


@router.put(
    "/update-blog/{blog_id}",
    response_model=BlogEnvelope,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Update a blog's title, description or image",
)
async def update_blog(
    blog_id: str,
    payload: BlogUpdate,
    blogs: BlogService = Depends(get_blog_service),
) -> BlogEnvelope:
    blog = await blogs.update(blog_id, payload.model_dump(exclude_unset=True))
    return BlogEnvelope(message="Blog updated", blog=blog)


@router.get(
    "/get-blog/{blog_id}",
    response_model=BlogEnvelope,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Get a single blog",
)
async def get_blog(
    blog_id: str,
    blogs: BlogService = Depends(get_blog_service),
) -> BlogEnvelope:
    blog = await blogs.get_by_id(blog_id)
    return BlogEnvelope(message="Blog found", blog=blog)


@router.delete(
    "/delete-blog/{blog_id}",
    response_model=Envelope,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Delete a blog and unlink it from its author",
)
async def delete_blog(
    blog_id: str,
    blogs: BlogService = Depends(get_blog_service),
) -> Envelope:
    await blogs.delete(blog_id)
    return Envelope(message="Blog deleted")


@router.get(
    "/user-blog/{user_id}",
    response_model=UserBlogEnvelope,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Get a user with all of their blogs",
)
async def get_user_blogs(
    user_id: str,
    blogs: BlogService = Depends(get_blog_service),
) -> UserBlogEnvelope:
    user_blog = await blogs.list_by_owner(user_id)
    return UserBlogEnvelope(message="User blogs", user_blog=user_blog)
