"""
Cache module for ChartDesk.

Provides Redis caching for normalized chart data.
"""

from chartdesk.services.cache.redis_client import (
    ChartCache,
    chart_key,
    get_chart_cache,
    init_redis,
    close_redis,
)

__all__ = [
    "ChartCache",
    "chart_key",
    "get_chart_cache",
    "init_redis",
    "close_redis",
]
