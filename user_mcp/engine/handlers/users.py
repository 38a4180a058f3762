"""User tool handlers.

Handles:
- list_users: All users in ascending id order
- get_user: One user by id, or None when there is no such row
- create_user: Insert a user and return it with its assigned id
"""

import logging
import re

from ...models import CreateUserParams, GetUserParams, ListUsersParams, User
from .base import HandlerContext

logger = logging.getLogger(__name__)

# Loose shape check only; anything stricter belongs to a future validation layer.
_EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def looks_like_email(value: str) -> bool:
    return bool(_EMAIL_SHAPE.match(value))


async def handle_list_users(params: ListUsersParams, ctx: HandlerContext) -> list[User]:
    """Return every user."""
    return await ctx.store.list_all()


async def handle_get_user(params: GetUserParams, ctx: HandlerContext) -> User | None:
    """Fetch a user by id.

    A missing user is a normal outcome: the result is None, not an error.
    """
    key = params.key
    if key is None:
        return None
    return await ctx.store.get_by_key(key)


async def handle_create_user(params: CreateUserParams, ctx: HandlerContext) -> User:
    """Create a user.

    Not idempotent: every call inserts a new row with a fresh id.
    """
    if ctx.warn_on_invalid_email and not looks_like_email(params.email):
        logger.warning(f"create_user: email {params.email!r} does not look like an address")

    user = await ctx.store.create(params.to_fields())
    logger.info(f"Created user {user.id} ({user.role})")
    return user
