"""DatabaseUserRepository against an in-memory SQLite database."""

import pytest

from todoapi.models.user import User
from todoapi.repositories.user_repository import DatabaseUserRepository


@pytest.fixture
async def stored_user(db):
    user = User(username="alice", password="hashed-password")
    db.add(user)
    await db.commit()
    return user


async def test_get_user_by_username_maps_to_domain_user(db, stored_user):
    user = await DatabaseUserRepository(db).get_user_by_username("alice")

    assert user.id == stored_user.id
    assert user.username == "alice"
    assert user.password == "hashed-password"
    assert user.last_login is None
    assert user.hash_refresh_token is None


async def test_get_user_by_username_returns_none_when_missing(db):
    assert await DatabaseUserRepository(db).get_user_by_username("nobody") is None


async def test_update_last_login_sets_timestamp(db, stored_user, session_factory):
    await DatabaseUserRepository(db).update_last_login("alice")

    async with session_factory() as other:
        user = await DatabaseUserRepository(other).get_user_by_username("alice")
    assert user.last_login is not None


async def test_update_refresh_token_stores_and_clears_hash(db, stored_user, session_factory):
    repository = DatabaseUserRepository(db)

    await repository.update_refresh_token("alice", "hashed-refresh")
    async with session_factory() as other:
        assert (await DatabaseUserRepository(other).get_user_by_username("alice")).hash_refresh_token == "hashed-refresh"

    await repository.update_refresh_token("alice", None)
    async with session_factory() as other:
        assert (await DatabaseUserRepository(other).get_user_by_username("alice")).hash_refresh_token is None
