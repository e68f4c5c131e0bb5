# 📄 File: marketplace/shared/infrastructure/cache/redis_cache.py
#
# 🧭 Purpose (Layman Explanation):
# Keeps recently looked-up users, today's birthday list and the expired card list in Redis
# so repeated requests are answered without asking the database again.
#
# 🧪 Purpose (Technical Summary):
# Redis implementation of the CacheBackend contract. Entries are JSON strings stored
# under "<prefix>:<cache>:<key>" with per-cache TTLs; evict_all scans the cache prefix.
# Redis errors are logged and degrade to a miss.
#
# 🔗 Dependencies:
# - redis.asyncio
# - marketplace/shared/config/redis.py (client, CacheConfig, RedisUtils)
#
# 🔄 Connected Modules / Calls From:
# - marketplace/modules/user_management/presentation/dependencies.py (cache provider)

import logging
from typing import Any, Optional

import redis.asyncio as redis

from marketplace.shared.config.redis import CacheConfig, RedisUtils, get_redis_client
from marketplace.shared.infrastructure.cache.base import CacheBackend

logger = logging.getLogger(__name__)

REDIS_ERRORS = (redis.RedisError, OSError)


class RedisCacheBackend(CacheBackend):
    """Named caches stored in Redis."""

    def __init__(self, redis_client: Optional[redis.Redis] = None, scan_batch_size: int = 500):
        self.redis = redis_client or get_redis_client()
        self.scan_batch_size = scan_batch_size

    async def get(self, cache_name: str, key: Any) -> Optional[Any]:
        cache_key = CacheConfig.get_cache_key(cache_name, key)
        try:
            raw = await self.redis.get(cache_key)
        except REDIS_ERRORS as e:
            logger.warning(f"Cache read failed for {cache_key}: {e}")
            return None

        if raw is None:
            logger.debug(f"Cache miss: {cache_key}")
            return None

        logger.debug(f"Cache hit: {cache_key}")
        return RedisUtils.deserialize_value(raw)

    async def put(self, cache_name: str, key: Any, value: Any) -> None:
        cache_key = CacheConfig.get_cache_key(cache_name, key)
        try:
            await self.redis.set(
                cache_key,
                RedisUtils.serialize_value(value),
                ex=CacheConfig.get_ttl(cache_name)
            )
        except REDIS_ERRORS as e:
            logger.warning(f"Cache write failed for {cache_key}: {e}")

    async def evict(self, cache_name: str, key: Any) -> None:
        cache_key = CacheConfig.get_cache_key(cache_name, key)
        try:
            await self.redis.delete(cache_key)
            logger.debug(f"Cache evicted: {cache_key}")
        except REDIS_ERRORS as e:
            logger.warning(f"Cache eviction failed for {cache_key}: {e}")

    async def evict_all(self, cache_name: str) -> None:
        pattern = CacheConfig.get_cache_pattern(cache_name)
        try:
            batch = []
            async for cache_key in self.redis.scan_iter(match=pattern, count=self.scan_batch_size):
                batch.append(cache_key)
                if len(batch) >= self.scan_batch_size:
                    await self.redis.delete(*batch)
                    batch = []
            if batch:
                await self.redis.delete(*batch)
            logger.debug(f"Cache cleared: {cache_name}")
        except REDIS_ERRORS as e:
            logger.warning(f"Cache clear failed for {cache_name}: {e}")
