# 📄 File: marketplace/shared/config/redis.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for the Redis cache that helps the directory service answer
# repeated questions (who is this user, whose birthday is today) without asking the database again.
#
# 🧪 Purpose (Technical Summary):
# Redis configuration with connection pooling, named cache key patterns,
# TTL mappings and JSON serialization helpers for the cache backend.
#
# 🔗 Dependencies:
# - redis Python package (redis.asyncio)
# - marketplace.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - marketplace.shared.infrastructure.cache.redis_cache
# - marketplace.main (startup and shutdown)
# - Health check endpoint

import json
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.asyncio import ConnectionPool, Redis

from .settings import get_settings

settings = get_settings()


# =============================================================================
# REDIS CONFIGURATION CLASS
# =============================================================================

class RedisConfig:
    """Redis configuration class with connection management."""

    def __init__(self):
        self.settings = settings
        self._connection_pool: ConnectionPool | None = None
        self._redis_client: Redis | None = None

    @property
    def redis_url(self) -> str:
        """Get Redis connection URL."""
        return self.settings.REDIS_URL

    @property
    def connection_kwargs(self) -> Dict[str, Any]:
        """Get Redis connection configuration."""
        base_config = {
            "encoding": "utf-8",
            "decode_responses": True,
            "socket_timeout": self.settings.REDIS_SOCKET_TIMEOUT,
            "socket_connect_timeout": self.settings.REDIS_SOCKET_TIMEOUT,
            "health_check_interval": 30,
        }

        if self.settings.is_production:
            base_config["socket_keepalive"] = True

        return base_config

    @property
    def pool_kwargs(self) -> Dict[str, Any]:
        """Get Redis connection pool configuration."""
        return {
            "max_connections": self.settings.REDIS_MAX_CONNECTIONS,
            **self.connection_kwargs
        }

    def create_connection_pool(self) -> ConnectionPool:
        """Create Redis connection pool."""
        if self._connection_pool is None:
            self._connection_pool = ConnectionPool.from_url(
                self.redis_url,
                **self.pool_kwargs
            )
        return self._connection_pool

    def create_redis_client(self) -> Redis:
        """Create Redis client with connection pool."""
        if self._redis_client is None:
            pool = self.create_connection_pool()
            self._redis_client = Redis(connection_pool=pool)
        return self._redis_client

    async def close_connections(self):
        """Close Redis connections and cleanup."""
        if self._redis_client:
            await self._redis_client.aclose()
            self._redis_client = None

        if self._connection_pool:
            await self._connection_pool.disconnect()
            self._connection_pool = None


# =============================================================================
# CACHE CONFIGURATION
# =============================================================================

class CacheConfig:
    """Named caches with their key patterns and TTL settings."""

    USERS = "users"
    USERS_WITH_BIRTHDAY_TODAY = "usersWithBirthdayToday"
    EXPIRED_CARDS = "expiredCards"

    # Key used by caches that hold a single shared entry
    SHARED_KEY = "all"

    DEFAULT_TTL = settings.CACHE_DEFAULT_TTL

    KEY_PATTERNS = {
        USERS: "users:{key}",
        USERS_WITH_BIRTHDAY_TODAY: "usersWithBirthdayToday:{key}",
        EXPIRED_CARDS: "expiredCards:{key}",
    }

    TTL_MAPPINGS = {
        USERS: DEFAULT_TTL,
        USERS_WITH_BIRTHDAY_TODAY: DEFAULT_TTL,
        EXPIRED_CARDS: DEFAULT_TTL,
    }

    @classmethod
    def get_cache_key(cls, cache_name: str, key: Any) -> str:
        """
        Generate cache key for an entry of a named cache.

        Args:
            cache_name: Name of the cache
            key: Entry key inside the cache

        Returns:
            Formatted cache key string including the global prefix
        """
        if cache_name not in cls.KEY_PATTERNS:
            raise ValueError(f"Unknown cache: {cache_name}")

        return f"{settings.CACHE_KEY_PREFIX}:" + cls.KEY_PATTERNS[cache_name].format(key=key)

    @classmethod
    def get_cache_pattern(cls, cache_name: str) -> str:
        """Glob pattern matching every entry of a named cache."""
        return cls.get_cache_key(cache_name, "*")

    @classmethod
    def get_ttl(cls, cache_name: str) -> int:
        """TTL in seconds for a named cache."""
        return cls.TTL_MAPPINGS.get(cache_name, cls.DEFAULT_TTL)


# =============================================================================
# REDIS UTILITIES
# =============================================================================

class RedisUtils:
    """Utility functions for Redis operations."""

    @staticmethod
    def serialize_value(value: Any) -> str:
        """
        Serialize Python object to JSON string for Redis storage.

        Args:
            value: Python object to serialize

        Returns:
            JSON string representation
        """
        try:
            return json.dumps(value, default=str)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Cannot serialize value: {e}")

    @staticmethod
    def deserialize_value(value: Optional[str]) -> Any:
        """
        Deserialize JSON string from Redis to Python object.

        Args:
            value: JSON string from Redis

        Returns:
            Deserialized Python object, or None for an empty or corrupt entry
        """
        if not value:
            return None

        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return None


# =============================================================================
# GLOBAL REDIS CONFIGURATION INSTANCE
# =============================================================================

redis_config = RedisConfig()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_redis_client() -> Redis:
    """Get Redis client instance."""
    return redis_config.create_redis_client()


async def check_redis_health() -> Dict[str, Any]:
    """
    Check Redis connectivity.

    Returns:
        Dict containing Redis health status
    """
    try:
        client = get_redis_client()
        ping_result = await client.ping()
        return {"status": "healthy", "ping": ping_result}
    except (redis.ConnectionError, redis.TimeoutError, OSError) as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "type": type(e).__name__,
        }
