from fnmatch import fnmatch

import pytest
import redis.asyncio as redis

from marketplace.shared.config.redis import CacheConfig
from marketplace.shared.infrastructure.cache.redis_cache import RedisCacheBackend


class ScriptedRedis:
    """Dict-backed stand-in for the handful of redis.asyncio calls the backend makes."""

    def __init__(self, fail=False):
        self.store = {}
        self.ttls = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")

    async def get(self, key):
        self._check()
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self._check()
        self.store[key] = value
        self.ttls[key] = ex

    async def delete(self, *keys):
        self._check()
        for key in keys:
            self.store.pop(key, None)

    async def scan_iter(self, match=None, count=None):
        self._check()
        for key in list(self.store):
            if fnmatch(key, match):
                yield key


@pytest.fixture
def client():
    return ScriptedRedis()


async def test_put_then_get_round_trips_json(client):
    cache = RedisCacheBackend(client)

    await cache.put(CacheConfig.USERS, "42", {"user": {"name": "Ada"}, "cards": []})

    assert await cache.get(CacheConfig.USERS, "42") == {"user": {"name": "Ada"}, "cards": []}
    assert client.ttls[CacheConfig.get_cache_key(CacheConfig.USERS, "42")] == CacheConfig.get_ttl(CacheConfig.USERS)


async def test_evict_removes_single_entry(client):
    cache = RedisCacheBackend(client)
    await cache.put(CacheConfig.USERS, "1", {"n": 1})
    await cache.put(CacheConfig.USERS, "2", {"n": 2})

    await cache.evict(CacheConfig.USERS, "1")

    assert await cache.get(CacheConfig.USERS, "1") is None
    assert await cache.get(CacheConfig.USERS, "2") == {"n": 2}


async def test_evict_all_only_touches_named_cache(client):
    cache = RedisCacheBackend(client, scan_batch_size=1)
    await cache.put(CacheConfig.USERS, "1", {"n": 1})
    await cache.put(CacheConfig.USERS, "2", {"n": 2})
    await cache.put(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY, [])

    await cache.evict_all(CacheConfig.USERS)

    assert await cache.get(CacheConfig.USERS, "1") is None
    assert await cache.get(CacheConfig.USERS, "2") is None
    assert await cache.get(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY) == []


async def test_redis_outage_degrades_to_miss():
    cache = RedisCacheBackend(ScriptedRedis(fail=True))

    await cache.put(CacheConfig.USERS, "1", {"n": 1})
    await cache.evict(CacheConfig.USERS, "1")
    await cache.evict_all(CacheConfig.USERS)

    assert await cache.get(CacheConfig.USERS, "1") is None
