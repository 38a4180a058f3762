"""Tests for the in-memory store and default seeding."""

import pytest

from user_mcp.store import DEFAULT_USERS, InMemoryUserStore, seed_default_users


@pytest.mark.asyncio
async def test_seed_inserts_alice_and_bob():
    store = InMemoryUserStore()
    assert await seed_default_users(store) == 2

    users = await store.list_all()
    assert [(u.id, u.name, u.role) for u in users] == [(1, "Alice", "admin"), (2, "Bob", "user")]


@pytest.mark.asyncio
async def test_seed_skips_non_empty_store(store):
    assert await seed_default_users(store) == 0
    assert len(await store.list_all()) == len(DEFAULT_USERS)


@pytest.mark.asyncio
async def test_ids_strictly_increase(store):
    created = [
        await store.create({"name": f"user{i}", "email": f"u{i}@example.com", "role": "user"})
        for i in range(3)
    ]
    assert [u.id for u in created] == [3, 4, 5]
    assert all(u.created_at.tzinfo is not None for u in created)


@pytest.mark.asyncio
async def test_get_by_key(store):
    bob = await store.get_by_key(2)
    assert bob is not None and bob.email == "bob@example.com"
    assert await store.get_by_key(999) is None


@pytest.mark.asyncio
async def test_returned_users_are_copies(store):
    alice = await store.get_by_key(1)
    alice.name = "Mallory"
    assert (await store.get_by_key(1)).name == "Alice"
