"""
Cache entries written by a concurrent reader before a writer commits must not outlive the commit.
"""

import pytest
import pytest_asyncio

from marketplace.shared.config.redis import CacheConfig
from marketplace.shared.core.exceptions import NotFoundError
from marketplace.shared.infrastructure.cache.base import TransactionalCache
from marketplace.shared.infrastructure.database.base import Base
from marketplace.shared.infrastructure.database.connection import close_database, init_database
from marketplace.shared.infrastructure.database.session import run_after_commit, session_manager
from marketplace.modules.user_management.domain.services.user_service import UserService
from marketplace.modules.user_management.infrastructure.database import models  # noqa: F401
from marketplace.modules.user_management.infrastructure.database.card_repository_impl import (
    SQLAlchemyCardRepository,
)
from marketplace.modules.user_management.infrastructure.database.user_repository_impl import (
    SQLAlchemyUserRepository,
)

from tests.fakes import user_details


def user_service_for(session, cache, clock):
    return UserService(SQLAlchemyUserRepository(session), SQLAlchemyCardRepository(session), cache, clock)


def create_tables(sync_session):
    Base.metadata.create_all(bind=sync_session.connection())


@pytest_asyncio.fixture
async def database(tmp_path):
    await init_database(f"sqlite+aiosqlite:///{tmp_path / 'coherence.db'}")
    async with session_manager.get_session() as session:
        await session.run_sync(create_tables)
    yield
    await close_database()


async def test_replay_removes_entry_put_after_eviction(user_repository, card_repository, cache, clock):
    reader = UserService(user_repository, card_repository, cache, clock)
    request_cache = TransactionalCache(cache)
    writer = UserService(user_repository, card_repository, request_cache, clock)
    user = await reader.create_user(user_details(email="old@x.com"))
    before_update = await reader.get_user_by_id(user.id)

    await writer.update_user(user.id, user_details(email="new@x.com"))
    await cache.put(CacheConfig.USERS, user.id, before_update.model_dump(mode="json"))
    await request_cache.replay_evictions()

    assert (await reader.get_user_by_id(user.id)).user.email == "new@x.com"


async def test_reader_between_update_and_commit_does_not_pin_old_row(database, cache, clock):
    async with session_manager.get_session() as session:
        user = await user_service_for(session, cache, clock).create_user(user_details(email="old@x.com"))

    async with session_manager.get_session() as writer_session:
        request_cache = TransactionalCache(cache)
        run_after_commit(writer_session, request_cache.replay_evictions)
        await user_service_for(writer_session, request_cache, clock).update_user(
            user.id, user_details(email="new@x.com")
        )

        async with session_manager.get_session() as reader_session:
            seen = await user_service_for(reader_session, cache, clock).get_user_by_id(user.id)
        assert seen.user.email == "old@x.com"
        assert cache.has(CacheConfig.USERS, user.id)

    async with session_manager.get_session() as session:
        result = await user_service_for(session, cache, clock).get_user_by_id(user.id)

    assert result.user.email == "new@x.com"


async def test_after_commit_callbacks_are_dropped_on_rollback(database, cache):
    with pytest.raises(NotFoundError):
        async with session_manager.get_session() as session:
            request_cache = TransactionalCache(cache)
            run_after_commit(session, request_cache.replay_evictions)
            await request_cache.evict(CacheConfig.USERS, "42")
            await cache.put(CacheConfig.USERS, "42", {"kept": True})
            raise NotFoundError()

    assert cache.has(CacheConfig.USERS, "42")
    assert cache.calls["evict"] == 1
