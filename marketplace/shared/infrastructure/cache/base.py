# 📄 File: marketplace/shared/infrastructure/cache/base.py
#
# 🧭 Purpose (Layman Explanation):
# Describes what any cache must be able to do (remember, recall, forget one thing,
# forget everything of one kind) without saying where the data is kept.
#
# 🧪 Purpose (Technical Summary):
# Abstract cache contract over named caches used by the domain services, a no-op
# implementation used when caching is disabled and a request-scoped wrapper that
# replays evictions after the database commit.
#
# 🔗 Dependencies:
# - abc, typing
#
# 🔄 Connected Modules / Calls From:
# - marketplace/shared/infrastructure/cache/redis_cache.py (Redis implementation)
# - UserService, CardService, RegistrationService (read-through and eviction)
# - tests/fakes.py (in-memory implementation)

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple


class CacheBackend(ABC):
    """
    Key/value cache partitioned into named caches.

    Values are JSON compatible structures. Implementations must never raise
    on a backend outage; a failed read is a miss and a failed write is dropped.
    """

    @abstractmethod
    async def get(self, cache_name: str, key: Any) -> Optional[Any]:
        """
        Read an entry.

        Args:
            cache_name: Name of the cache
            key: Entry key

        Returns:
            The cached value, or None on a miss
        """
        pass

    @abstractmethod
    async def put(self, cache_name: str, key: Any, value: Any) -> None:
        """Store an entry, replacing any previous value."""
        pass

    @abstractmethod
    async def evict(self, cache_name: str, key: Any) -> None:
        """Remove a single entry. Missing entries are ignored."""
        pass

    @abstractmethod
    async def evict_all(self, cache_name: str) -> None:
        """Remove every entry of a named cache."""
        pass


class NoOpCacheBackend(CacheBackend):
    """Cache that never stores anything."""

    async def get(self, cache_name: str, key: Any) -> Optional[Any]:
        return None

    async def put(self, cache_name: str, key: Any, value: Any) -> None:
        return None

    async def evict(self, cache_name: str, key: Any) -> None:
        return None

    async def evict_all(self, cache_name: str) -> None:
        return None


class TransactionalCache(CacheBackend):
    """
    Request-scoped wrapper that replays its evictions once the request's transaction commits.

    Evictions are applied immediately and recorded. A concurrent reader that loads
    the pre-commit row between the eviction and the commit can put that stale row
    back; replaying the evictions after commit removes it again.
    """

    def __init__(self, backend: CacheBackend):
        self.backend = backend
        self._pending_keys: List[Tuple[str, Any]] = []
        self._pending_caches: List[str] = []

    async def get(self, cache_name: str, key: Any) -> Optional[Any]:
        return await self.backend.get(cache_name, key)

    async def put(self, cache_name: str, key: Any, value: Any) -> None:
        await self.backend.put(cache_name, key, value)

    async def evict(self, cache_name: str, key: Any) -> None:
        self._pending_keys.append((cache_name, key))
        await self.backend.evict(cache_name, key)

    async def evict_all(self, cache_name: str) -> None:
        self._pending_caches.append(cache_name)
        await self.backend.evict_all(cache_name)

    async def replay_evictions(self) -> None:
        """Apply every recorded eviction again and forget them."""
        keys, self._pending_keys = self._pending_keys, []
        caches, self._pending_caches = self._pending_caches, []
        for cache_name, key in keys:
            await self.backend.evict(cache_name, key)
        for cache_name in dict.fromkeys(caches):
            await self.backend.evict_all(cache_name)
