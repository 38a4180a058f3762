"""Persistence boundary for users.

The dispatcher and handlers depend only on the ``UserStore`` protocol. Any
backend that provides ``list_all``, ``get_by_key`` and ``create`` can be
plugged in; ``PrismaUserStore`` in ``db.py`` is the PostgreSQL one.
"""

import asyncio
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Protocol

from .models import User, UserRole

logger = logging.getLogger(__name__)

DEFAULT_USERS: list[dict[str, str]] = [
    {"name": "Alice", "email": "alice@example.com", "role": UserRole.ADMIN.value},
    {"name": "Bob", "email": "bob@example.com", "role": UserRole.USER.value},
]


class UserStore(Protocol):
    """Store contract used by the tool handlers."""

    async def list_all(self) -> list[User]:
        """Return every user in ascending id order."""
        ...

    async def get_by_key(self, key: int) -> User | None:
        """Return the user with this id, or None."""
        ...

    async def create(self, fields: Mapping[str, str]) -> User:
        """Insert a user and return it with its assigned id and timestamp."""
        ...


class InMemoryUserStore:
    """Process-local store.

    Ids start at 1 and increase by one per insert, like a SERIAL column.
    """

    backend = "memory"

    def __init__(self) -> None:
        self._rows: dict[int, User] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def list_all(self) -> list[User]:
        return [self._rows[key].model_copy() for key in sorted(self._rows)]

    async def get_by_key(self, key: int) -> User | None:
        user = self._rows.get(key)
        return user.model_copy() if user is not None else None

    async def create(self, fields: Mapping[str, str]) -> User:
        async with self._lock:
            user = User(
                id=self._next_id,
                name=fields["name"],
                email=fields["email"],
                role=fields["role"],
                created_at=datetime.now(UTC),
            )
            self._rows[user.id] = user
            self._next_id += 1
        return user.model_copy()


async def seed_default_users(store: UserStore) -> int:
    """Insert the default users when the store is empty.

    Returns:
        Number of rows inserted (0 when data already existed)
    """
    existing = await store.list_all()
    if existing:
        logger.info(f"Users table already has {len(existing)} rows, skipping seeding")
        return 0

    for fields in DEFAULT_USERS:
        await store.create(fields)
    logger.info(f"Seeded {len(DEFAULT_USERS)} default users")
    return len(DEFAULT_USERS)
