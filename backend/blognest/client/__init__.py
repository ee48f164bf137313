"""
BlogNest Client — Presentation Layer
======================================

What:  Consumer side of the HTTP surface: an API client and the blog card
       view model that renders blogs and triggers edit/delete.
"""

from blognest.client.api_client import ApiClientError, BlogApiClient
from blognest.client.blog_card import DELETE_TOAST, BlogCard, cards_from_blogs

__all__ = ["ApiClientError", "BlogApiClient", "BlogCard", "DELETE_TOAST", "cards_from_blogs"]
