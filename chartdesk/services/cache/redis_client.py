"""
Redis cache client for chart data.

Caches normalized chart responses per (symbol, range, interval) for the
upstream revalidation window, so dashboard polling does not hit the upstream
on every tick. Falls back to an in-process TTL store when Redis is down.
"""

import json
import logging
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

import redis.asyncio as redis

from chartdesk.core.config import settings

logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_pool: Optional[redis.Redis] = None


async def init_redis() -> Optional[redis.Redis]:
    """
    Initialize Redis connection pool.
    Called on application startup.
    """
    global _redis_pool

    if _redis_pool is not None:
        return _redis_pool

    if not settings.enable_redis:
        logger.info("Redis disabled. Using in-memory cache.")
        return None

    try:
        _redis_pool = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        # Test connection
        await _redis_pool.ping()
        logger.info(f"Redis connected: {settings.redis_url}")
        return _redis_pool
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Using in-memory fallback.")
        _redis_pool = None
        return None


async def close_redis() -> None:
    """Close Redis connection pool."""
    global _redis_pool
    if _redis_pool:
        await _redis_pool.aclose()
        _redis_pool = None
        logger.info("Redis connection closed")


def chart_key(symbol: str, time_range: str, interval: str) -> str:
    return f"chart:{symbol.upper()}:{time_range}:{interval}"


class ChartCache:
    """
    JSON cache for chart payloads.

    Keys:
    - chart:{symbol}:{range}:{interval} → JSON ChartData

    The in-memory fallback holds at most ``max_size`` entries and evicts
    the least recently used one when full.
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        max_size: Optional[int] = None,
    ):
        self._redis = redis_client
        self.max_size = max_size or settings.chart_cache_max_entries
        # key -> (expires_at monotonic seconds, value), oldest use first
        self._memory_cache: OrderedDict[str, Tuple[float, str]] = OrderedDict()

    @property
    def redis(self) -> Optional[redis.Redis]:
        return self._redis or _redis_pool

    @property
    def memory_size(self) -> int:
        return len(self._memory_cache)

    def _memory_get(self, key: str) -> Optional[str]:
        """Fallback to memory cache."""
        entry = self._memory_cache.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if time.monotonic() >= expires_at:
            del self._memory_cache[key]
            return None
        # Move to end (most recently used)
        self._memory_cache.move_to_end(key)
        return value

    def _purge_expired(self) -> None:
        now = time.monotonic()
        expired = [
            k for k, (expires_at, _) in self._memory_cache.items() if now >= expires_at
        ]
        for key in expired:
            del self._memory_cache[key]

    def _memory_set(self, key: str, value: str, ex: int):
        """Fallback to memory cache."""
        self._purge_expired()
        self._memory_cache[key] = (time.monotonic() + ex, value)
        self._memory_cache.move_to_end(key)

        # Remove oldest while over capacity
        while len(self._memory_cache) > self.max_size:
            evicted, _ = self._memory_cache.popitem(last=False)
            logger.debug(f"Evicted {evicted} from memory cache")

    async def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """Get a cached JSON document, or None on miss/expiry."""
        if self.redis:
            try:
                value = await self.redis.get(key)
                return json.loads(value) if value else None
            except Exception as e:
                logger.debug(f"Redis get failed for {key}: {e}")

        value = self._memory_get(key)
        return json.loads(value) if value else None

    async def set_json(self, key: str, data: Dict[str, Any], ttl: int) -> bool:
        """Store a JSON document for `ttl` seconds."""
        value = json.dumps(data)

        if self.redis:
            try:
                await self.redis.set(key, value, ex=ttl)
                return True
            except Exception as e:
                logger.debug(f"Redis set failed for {key}: {e}")

        self._memory_set(key, value, ttl)
        return True

    async def invalidate(self, key: str) -> None:
        """Drop a key from both backends."""
        if self.redis:
            try:
                await self.redis.delete(key)
            except Exception as e:
                logger.debug(f"Redis delete failed for {key}: {e}")
        self._memory_cache.pop(key, None)


# Singleton instance
_chart_cache: Optional[ChartCache] = None


def get_chart_cache() -> ChartCache:
    """Get the chart cache singleton."""
    global _chart_cache
    if _chart_cache is None:
        _chart_cache = ChartCache()
    return _chart_cache
