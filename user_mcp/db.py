"""Database connection module using Prisma with automatic reconnection."""

import asyncio
import logging
from collections.abc import Mapping

from prisma import Prisma

from .errors import StoreError
from .models import User

logger = logging.getLogger(__name__)

# Global Prisma client instance
_client: Prisma | None = None
_lock = asyncio.Lock()

# Reconnection settings
MAX_RETRIES = 3
RETRY_DELAY_SECONDS = 1.0


async def _create_client() -> Prisma:
    """Create and connect a new Prisma client with retry logic."""
    for attempt in range(MAX_RETRIES):
        try:
            client = Prisma()
            await client.connect()
            logger.info("Database connection established")
            return client
        except Exception as e:
            if attempt < MAX_RETRIES - 1:
                delay = RETRY_DELAY_SECONDS * (2**attempt)  # Exponential backoff
                logger.warning(
                    f"Database connection attempt {attempt + 1} failed: {e}. "
                    f"Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
            else:
                logger.error(f"Failed to connect to database after {MAX_RETRIES} attempts: {e}")
                raise StoreError(f"Could not connect to database: {e}") from e
    raise StoreError("Could not connect to database")


async def _is_connected(client: Prisma) -> bool:
    """Check if the database connection is still alive."""
    try:
        await client.query_raw("SELECT 1")
        return True
    except Exception:
        return False


async def get_db() -> Prisma:
    """
    Get or create the Prisma client instance with automatic reconnection.

    Idle connections closed by the server are detected with a cheap test query
    and replaced.
    """
    global _client

    async with _lock:
        if _client is not None:
            if await _is_connected(_client):
                return _client
            logger.warning("Database connection stale, reconnecting...")
            try:
                await _client.disconnect()
            except Exception as e:
                logger.debug(f"Ignoring disconnect error on stale connection: {e}")
            _client = None

        _client = await _create_client()
        return _client


async def close_db() -> None:
    """Close the database connection."""
    global _client
    async with _lock:
        if _client is not None:
            try:
                await _client.disconnect()
                logger.info("Database connection closed")
            except Exception as e:
                logger.warning(f"Error closing database connection: {e}")
            finally:
                _client = None


class PrismaUserStore:
    """UserStore backed by the ``users`` table.

    Each method is a single statement; Prisma's engine pools connections.
    """

    backend = "prisma"

    async def list_all(self) -> list[User]:
        try:
            db = await get_db()
            rows = await db.user.find_many(order={"id": "asc"})
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to list users: {e}") from e
        return [User.model_validate(row) for row in rows]

    async def get_by_key(self, key: int) -> User | None:
        try:
            db = await get_db()
            row = await db.user.find_unique(where={"id": key})
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to get user {key}: {e}") from e
        return User.model_validate(row) if row is not None else None

    async def create(self, fields: Mapping[str, str]) -> User:
        try:
            db = await get_db()
            row = await db.user.create(
                data={"name": fields["name"], "email": fields["email"], "role": fields["role"]}
            )
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to create user: {e}") from e
        return User.model_validate(row)
