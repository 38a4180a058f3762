"""Tool handlers.

Each handler is a standalone async function that takes:
- params: the tool's validated pydantic parameter model
- ctx: HandlerContext - shared dependencies (store, flags)

And returns a JSON-compatible value or pydantic model.
"""

from .base import HandlerContext, HandlerFunc
from .users import handle_create_user, handle_get_user, handle_list_users, looks_like_email

__all__ = [
    # Base
    "HandlerContext",
    "HandlerFunc",
    # User handlers
    "handle_list_users",
    "handle_get_user",
    "handle_create_user",
    "looks_like_email",
]
