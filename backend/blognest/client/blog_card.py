"""
BlogNest Client — Blog Card
=============================

What:  View model for one blog card: author, timestamp, image, title and
       description, plus edit/delete actions for the card's owner.
How:   Built from a blog as returned by GET /blog/get-all-blogs (author
       expanded). render() produces a plain-text card; delete() calls the
       API and returns the toast text to show.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from blognest.client.api_client import BlogApiClient

DELETE_TOAST = "Blog deleted successfully"


@dataclass(frozen=True)
class BlogCard:
    id: str
    title: str
    description: str
    image: str
    username: str
    time: str
    is_user: bool = False

    @classmethod
    def from_blog(cls, blog: Mapping[str, Any], viewer_id: Optional[str] = None) -> "BlogCard":
        """
        Build a card from a blog dict.

        `user` may be the expanded author record or a bare user id; the card
        is editable only when the author is the viewer.
        """
        author = blog.get("user")
        if isinstance(author, Mapping):
            author_id = str(author.get("id", ""))
            username = author.get("username", "")
        else:
            author_id = str(author or "")
            username = ""
        return cls(
            id=str(blog["id"]),
            title=blog.get("title", ""),
            description=blog.get("description", ""),
            image=blog.get("image", ""),
            username=username,
            time=str(blog.get("createdAt", "")),
            is_user=viewer_id is not None and author_id == str(viewer_id),
        )

    def actions(self) -> List[str]:
        return ["edit", "delete"] if self.is_user else []

    def edit_path(self) -> str:
        """Client-side route of the blog's edit page."""
        return f"/blog-details/{self.id}"

    async def delete(self, api: BlogApiClient) -> str:
        """
        Delete this card's blog through the API.

        Raises:
            PermissionError: the viewer does not own the blog
            ApiClientError: the API rejected the delete
        """
        if not self.is_user:
            raise PermissionError("Only the author can delete this blog")
        await api.delete_blog(self.id)
        return DELETE_TOAST

    def render(self) -> str:
        lines = []
        if self.actions():
            lines.append("[" + "] [".join(self.actions()) + "]")
        lines.extend([
            f"{self.username} · {self.time}",
            f"<image: {self.image}>",
            f"Title: {self.title}",
            f"Description: {self.description}",
        ])
        return "\n".join(lines)


def cards_from_blogs(blogs: List[Mapping[str, Any]], viewer_id: Optional[str] = None) -> List[BlogCard]:
    return [BlogCard.from_blog(blog, viewer_id) for blog in blogs]
