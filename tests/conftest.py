"""Shared fixtures: stores, dispatcher and HTTP client."""

from collections.abc import Mapping

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from user_mcp.engine.handlers import HandlerContext
from user_mcp.errors import StoreError
from user_mcp.mcp import Dispatcher, build_registry
from user_mcp.models import User
from user_mcp.server import create_app
from user_mcp.store import InMemoryUserStore, seed_default_users


class SpyUserStore(InMemoryUserStore):
    """In-memory store that records every call made to it."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple] = []

    async def list_all(self) -> list[User]:
        self.calls.append(("list_all",))
        return await super().list_all()

    async def get_by_key(self, key: int) -> User | None:
        self.calls.append(("get_by_key", key))
        return await super().get_by_key(key)

    async def create(self, fields: Mapping[str, str]) -> User:
        self.calls.append(("create", dict(fields)))
        return await super().create(fields)


class FailingUserStore:
    """Store whose every operation fails like a lost database connection."""

    backend = "failing"

    def __init__(self, message: str = "connection refused") -> None:
        self.message = message

    async def list_all(self) -> list[User]:
        raise StoreError(self.message)

    async def get_by_key(self, key: int) -> User | None:
        raise StoreError(self.message)

    async def create(self, fields: Mapping[str, str]) -> User:
        raise StoreError(self.message)


@pytest_asyncio.fixture
async def store() -> InMemoryUserStore:
    """In-memory store seeded with Alice (1) and Bob (2)."""
    store = InMemoryUserStore()
    await seed_default_users(store)
    return store


@pytest.fixture
def spy_store() -> SpyUserStore:
    """Empty spy store."""
    return SpyUserStore()


@pytest.fixture
def registry():
    return build_registry()


def make_dispatcher(store, **kwargs) -> Dispatcher:
    return Dispatcher(build_registry(), HandlerContext(store=store), **kwargs)


@pytest.fixture
def dispatcher(store) -> Dispatcher:
    return make_dispatcher(store)


@pytest.fixture
def client():
    """HTTP client for an app over a freshly seeded in-memory store."""
    app = create_app(store=InMemoryUserStore(), seed=True)
    with TestClient(app) as c:
        yield c


def call(name: str, arguments=None, id=1) -> dict:
    """Build a tools/call request envelope."""
    params: dict = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return {"jsonrpc": "2.0", "id": id, "method": "tools/call", "params": params}
