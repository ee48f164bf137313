"""
BlogNest Backend — Stores
===========================

What:  Persistence layer between the services and the DocumentStore.

Store Inventory:
    - CredentialStore: User documents (register, lookup, listing)
    - BlogStore: Blog documents plus the linked create/delete operations
      that keep each owner's back-reference list consistent
"""

from blognest.stores.blog_store import BlogStore
from blognest.stores.credential_store import CredentialStore

__all__ = ["BlogStore", "CredentialStore"]
