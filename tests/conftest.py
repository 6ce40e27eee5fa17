"""Shared fixtures for ChartDesk tests."""

from datetime import date, timedelta
from typing import Optional

import pytest

from chartdesk.core.config import Settings
from chartdesk.schemas.market import Interval, OHLCRecord, RawChart, TimeRange
from chartdesk.services.base import ExternalAPIError
from chartdesk.services.cache.redis_client import ChartCache
from chartdesk.services.data_ingestion.service import MarketDataService
from chartdesk.services.data_ingestion.yahoo_adapter import parse_chart_payload


def build_records(closes, start=date(2024, 1, 1), volume=1000):
    """Daily records with open == close and a one-point high/low band."""
    return [
        OHLCRecord(
            time=(start + timedelta(days=i)).isoformat(),
            open=c,
            high=c + 1,
            low=c - 1,
            close=c,
            volume=volume,
        )
        for i, c in enumerate(closes)
    ]


def alternating_closes(n: int) -> list[float]:
    """100, 101, 99, 102, 98, ... widening swings around 100."""
    closes = []
    for i in range(n):
        k = i // 2
        closes.append(float(101 + k if i % 2 else 100 - k))
    return closes


def chart_payload(
    n: int = 3, symbol: str = "AAPL", start_ts: int = 1700000000
) -> dict:
    """A ``chart.result[]`` entry with n daily bars."""
    closes = [150.0 + i for i in range(n)]
    return {
        "meta": {
            "symbol": symbol,
            "currency": "USD",
            "exchangeName": "NMS",
            "regularMarketPrice": 190.5,
            "chartPreviousClose": 188.0,
        },
        "timestamp": [start_ts + i * 86400 for i in range(n)],
        "indicators": {
            "quote": [
                {
                    "open": [c - 0.5 for c in closes],
                    "high": [c + 1.0 for c in closes],
                    "low": [c - 1.0 for c in closes],
                    "close": closes,
                    "volume": [1_000_000 + i for i in range(n)],
                }
            ]
        },
    }


class FakeChartClient:
    """Stands in for YahooChartClient; returns a fixed payload or raises."""

    def __init__(
        self, payload: Optional[dict] = None, error: Optional[Exception] = None
    ):
        self.payload = payload
        self.error = error
        self.calls = []

    async def fetch_chart(
        self,
        symbol: str,
        time_range: TimeRange = TimeRange.Y1,
        interval: Interval = Interval.D1,
    ) -> RawChart:
        self.calls.append((symbol, time_range, interval))
        if self.error is not None:
            raise self.error
        return parse_chart_payload(self.payload)


@pytest.fixture
def make_records():
    return build_records


@pytest.fixture
def alternating_records():
    """30 daily bars with alternating, widening closes."""
    return build_records(alternating_closes(30))


@pytest.fixture
def test_settings():
    return Settings(enable_redis=False, enable_synthetic_fallback=True)


@pytest.fixture
def memory_cache():
    return ChartCache()


@pytest.fixture
def ok_client():
    return FakeChartClient(payload=chart_payload(40))


@pytest.fixture
def failing_client():
    return FakeChartClient(
        error=ExternalAPIError("Yahoo Finance", "boom", {"status": 500})
    )


@pytest.fixture
def make_service(memory_cache, test_settings):
    """Build a MarketDataService around a fake client with an in-memory cache."""

    def _make(client, **overrides):
        config = test_settings.model_copy(update=overrides)
        return MarketDataService(client=client, cache=memory_cache, config=config)

    return _make


@pytest.fixture
def fake_client():
    """Factory for FakeChartClient instances."""
    return FakeChartClient


@pytest.fixture
def payload_factory():
    return chart_payload
