"""Tests for the chart cache."""

import pytest

from chartdesk.core.config import settings
from chartdesk.services.cache.redis_client import ChartCache, chart_key


class FakeRedis:
    """Minimal async stand-in for redis.asyncio.Redis."""

    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value

    async def delete(self, key):
        self.store.pop(key, None)


class BrokenRedis:
    """Redis client whose every call fails."""

    async def get(self, key):
        raise ConnectionError("down")

    async def set(self, key, value, ex=None):
        raise ConnectionError("down")

    async def delete(self, key):
        raise ConnectionError("down")


class TestChartKey:
    def test_format(self):
        assert chart_key("aapl", "1y", "1d") == "chart:AAPL:1y:1d"


class TestMemoryCache:
    """In-process fallback store."""

    @pytest.mark.asyncio
    async def test_roundtrip(self):
        cache = ChartCache()
        await cache.set_json("k", {"a": 1}, ttl=30)

        assert await cache.get_json("k") == {"a": 1}

    @pytest.mark.asyncio
    async def test_miss(self):
        assert await ChartCache().get_json("missing") is None

    @pytest.mark.asyncio
    async def test_expired_entry(self):
        cache = ChartCache()
        await cache.set_json("k", {"a": 1}, ttl=0)

        assert await cache.get_json("k") is None

    @pytest.mark.asyncio
    async def test_capacity_evicts_least_recently_used(self):
        cache = ChartCache(max_size=3)
        for symbol in ("AAPL", "MSFT", "NVDA"):
            await cache.set_json(symbol, {"symbol": symbol}, ttl=30)

        # Touch AAPL so MSFT becomes the oldest entry
        await cache.get_json("AAPL")
        await cache.set_json("TSLA", {"symbol": "TSLA"}, ttl=30)

        assert cache.memory_size == 3
        assert await cache.get_json("MSFT") is None
        assert await cache.get_json("AAPL") == {"symbol": "AAPL"}
        assert await cache.get_json("TSLA") == {"symbol": "TSLA"}

    @pytest.mark.asyncio
    async def test_many_distinct_keys_stay_bounded(self):
        cache = ChartCache(max_size=50)
        for i in range(1000):
            await cache.set_json(f"chart:SYM{i}:1y:1d", {"i": i}, ttl=30)

        assert cache.memory_size == 50
        assert await cache.get_json("chart:SYM999:1y:1d") == {"i": 999}

    @pytest.mark.asyncio
    async def test_expired_entries_purged_on_write(self):
        cache = ChartCache(max_size=5000)
        for i in range(1000):
            await cache.set_json(f"k{i}", {"i": i}, ttl=0)
        await cache.set_json("fresh", {"a": 1}, ttl=30)

        assert cache.memory_size == 1

    def test_default_capacity_from_settings(self):
        assert ChartCache().max_size == settings.chart_cache_max_entries

    @pytest.mark.asyncio
    async def test_invalidate(self):
        cache = ChartCache()
        await cache.set_json("k", {"a": 1}, ttl=30)
        await cache.invalidate("k")

        assert await cache.get_json("k") is None


class TestRedisBackend:
    """Redis-backed store and its failure fallback."""

    @pytest.mark.asyncio
    async def test_uses_redis_when_available(self):
        redis_client = FakeRedis()
        cache = ChartCache(redis_client=redis_client)

        await cache.set_json("k", {"a": 1}, ttl=30)

        assert redis_client.store["k"] == '{"a": 1}'
        assert await cache.get_json("k") == {"a": 1}

    @pytest.mark.asyncio
    async def test_falls_back_to_memory_on_errors(self):
        cache = ChartCache(redis_client=BrokenRedis())

        assert await cache.set_json("k", {"a": 1}, ttl=30) is True
        assert await cache.get_json("k") == {"a": 1}

        await cache.invalidate("k")
        assert await cache.get_json("k") is None
