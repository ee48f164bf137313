from blognest.models.user import EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH, User
from blognest.models.blog import IMAGE_MAX_LENGTH, TITLE_MAX_LENGTH, Blog

__all__ = [
    "User",
    "Blog",
    "USERNAME_MAX_LENGTH",
    "EMAIL_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "IMAGE_MAX_LENGTH",
]
