"""
BlogNest Backend — Route Dependencies
=======================================

What:  FastAPI dependencies that hand route handlers the services built by
       create_app(). The services live on app.state, never at module scope,
       so two apps (e.g. two tests) never share a database handle.
"""

from fastapi import Request

from blognest.services import AccountService, BlogService


def get_blog_service(request: Request) -> BlogService:
    return request.app.state.blog_service


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service
