"""
BlogNest Backend — Services Layer
===================================

What:  Business logic between routes (HTTP) and stores (persistence).
How:   Services are plain classes constructed with their stores; the
       application factory builds one of each and routes receive them
       through FastAPI dependencies.

Service Inventory:
    - AccountService: register, login, list users
    - BlogService: blog lifecycle and owner back-reference consistency
"""

from blognest.services.account_service import AccountService
from blognest.services.blog_service import BlogService

__all__ = ["AccountService", "BlogService"]
