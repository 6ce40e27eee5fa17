"""
Market Data Service Implementation

Fetches and normalizes chart data.
Primary: Yahoo Finance chart API
Fallback: Deterministic synthetic series (only if the upstream fails)
"""

import logging
from typing import Optional

from chartdesk.core.config import Settings, settings as default_settings
from chartdesk.schemas.market import (
    ChartData,
    ChartRequest,
    Interval,
    OHLCRecord,
    TimeRange,
)
from chartdesk.services.base import ExternalAPIError, SymbolNotFoundError
from chartdesk.services.cache.redis_client import ChartCache, chart_key, get_chart_cache
from chartdesk.services.data_ingestion.interface import MarketDataServiceInterface
from chartdesk.services.data_ingestion.mock_data import generate_ohlc
from chartdesk.services.data_ingestion.normalizer import normalize_chart
from chartdesk.services.data_ingestion.yahoo_adapter import (
    SOURCE_NAME,
    YahooChartClient,
    get_yahoo_client,
)

logger = logging.getLogger(__name__)

SYNTHETIC_SOURCE = "Synthetic"


class MarketDataService(MarketDataServiceInterface):
    """
    Market Data Service.

    Serves normalized charts from cache, then the upstream, and falls back
    to synthetic data when the upstream fails or returns nothing usable.
    """

    def __init__(
        self,
        client: Optional[YahooChartClient] = None,
        cache: Optional[ChartCache] = None,
        config: Optional[Settings] = None,
    ):
        self._client = client
        self._cache = cache
        self._settings = config or default_settings

    @property
    def client(self) -> YahooChartClient:
        return self._client or get_yahoo_client()

    @property
    def cache(self) -> ChartCache:
        return self._cache or get_chart_cache()

    @property
    def name(self) -> str:
        return "MarketDataService"

    def refresh_seconds(self, interval: Interval) -> int:
        """Suggested client polling period for a granularity."""
        if interval.is_intraday:
            return self._settings.refresh_interval_intraday
        return self._settings.refresh_interval_daily

    async def execute(self, input_data: ChartRequest) -> ChartData:
        """Fetch and normalize a chart."""
        return await self.get_chart(
            input_data.symbol, input_data.time_range, input_data.interval
        )

    async def get_chart(
        self,
        symbol: str,
        time_range: TimeRange = TimeRange.Y1,
        interval: Interval = Interval.D1,
    ) -> ChartData:
        """
        Get a normalized chart for one symbol.

        Raises:
            SymbolNotFoundError: no data and synthetic fallback disabled
            ExternalAPIError: upstream failed and synthetic fallback disabled
        """
        symbol = symbol.upper().strip()
        key = chart_key(symbol, time_range.value, interval.value)

        cached = await self.cache.get_json(key)
        if cached:
            logger.debug(f"Cache hit for {key}")
            return ChartData.model_validate(cached)

        try:
            chart = await self._fetch_upstream(symbol, time_range, interval)
        except ExternalAPIError as e:
            if not self._settings.enable_synthetic_fallback:
                raise
            logger.warning(f"Upstream failed for {symbol}, using synthetic data: {e}")
            chart = self._synthetic_chart(
                symbol, time_range, f"Using synthetic data for {symbol}: {e.message}"
            )

        await self.cache.set_json(
            key, chart.model_dump(mode="json"), ttl=self._settings.chart_cache_ttl
        )
        return chart

    async def _fetch_upstream(
        self, symbol: str, time_range: TimeRange, interval: Interval
    ) -> ChartData:
        raw = await self.client.fetch_chart(symbol, time_range, interval)
        data = normalize_chart(raw, interval)

        if not data:
            raise SymbolNotFoundError(
                SOURCE_NAME, f"No valid bars for {symbol} ({time_range.value})"
            )

        logger.info(f"Got {len(data)} bars for {symbol} from {SOURCE_NAME}")

        meta = raw.meta
        return ChartData(
            symbol=meta.symbol or symbol,
            currency=meta.currency,
            exchange_name=meta.exchange_name,
            regular_market_price=meta.regular_market_price,
            previous_close=meta.reference_close,
            interval=interval,
            time_range=time_range,
            source=SOURCE_NAME,
            refresh_seconds=self.refresh_seconds(interval),
            data=data,
        )

    def _synthetic_chart(
        self, symbol: str, time_range: TimeRange, warning: str
    ) -> ChartData:
        # Synthetic bars are always daily and date-keyed
        data: list[OHLCRecord] = generate_ohlc(symbol, time_range.calendar_days)

        # Short ranges can land entirely on a weekend
        if len(data) < 2:
            data = generate_ohlc(symbol, TimeRange.MO1.calendar_days)

        return ChartData(
            symbol=symbol,
            currency="USD",
            regular_market_price=data[-1].close,
            previous_close=data[-2].close,
            interval=Interval.D1,
            time_range=time_range,
            source=SYNTHETIC_SOURCE,
            refresh_seconds=self.refresh_seconds(Interval.D1),
            data=data,
            warnings=[warning],
        )

    async def health_check(self) -> bool:
        """Check the upstream answers for a liquid symbol."""
        try:
            raw = await self.client.fetch_chart("AAPL", TimeRange.D5, Interval.D1)
            return bool(raw.timestamp)
        except ExternalAPIError as e:
            logger.warning(f"Health check failed: {e}")
            return False


# Singleton instance
_service_instance: Optional[MarketDataService] = None


def get_market_data_service() -> MarketDataService:
    """Get or create market data service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = MarketDataService()
    return _service_instance
