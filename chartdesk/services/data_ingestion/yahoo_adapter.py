"""
Yahoo Finance Chart Adapter

Fetches raw chart payloads (parallel OHLCV arrays + meta) from the Yahoo
Finance v8 chart endpoint and validates them into RawChart.
"""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import aiohttp
from pydantic import ValidationError

from chartdesk.core.config import settings
from chartdesk.schemas.market import Interval, RawChart, TimeRange
from chartdesk.services.base import ExternalAPIError, SymbolNotFoundError

logger = logging.getLogger(__name__)

SOURCE_NAME = "Yahoo Finance"


def parse_chart_payload(result: dict[str, Any]) -> RawChart:
    """
    Validate one ``chart.result[]`` entry.

    The upstream omits ``timestamp`` for ranges without bars; that is an
    empty series, not an error.
    """
    quotes = (result.get("indicators") or {}).get("quote") or [{}]
    try:
        return RawChart(
            timestamp=result.get("timestamp") or [],
            quote=quotes[0],
            meta=result.get("meta") or {},
        )
    except ValidationError as e:
        raise ExternalAPIError(SOURCE_NAME, f"Malformed chart payload: {e}")


class YahooChartClient:
    """
    Thin async client for the chart endpoint.

    Holds one aiohttp session; call ``close()`` on shutdown.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self._base_url = (base_url or settings.yahoo_chart_url).rstrip("/")
        self._timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or settings.request_timeout_seconds
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={
                    "User-Agent": settings.yahoo_user_agent,
                    "Accept": "application/json",
                },
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_chart(
        self,
        symbol: str,
        time_range: TimeRange = TimeRange.Y1,
        interval: Interval = Interval.D1,
    ) -> RawChart:
        """
        Fetch a chart for a symbol.

        Raises:
            SymbolNotFoundError: upstream answered 404 or returned no result
            ExternalAPIError: any other HTTP, timeout or payload failure
        """
        url = f"{self._base_url}/{quote(symbol, safe='')}"
        params = {
            "range": time_range.value,
            "interval": interval.value,
            "includePrePost": "false",
        }

        logger.info(
            f"Fetching {symbol} ({time_range.value}/{interval.value}) "
            f"from {SOURCE_NAME}..."
        )

        session = await self._ensure_session()
        try:
            async with session.get(url, params=params) as resp:
                if resp.status == 404:
                    raise SymbolNotFoundError(
                        SOURCE_NAME,
                        f"No chart for {symbol}",
                        {"status": resp.status},
                    )
                if resp.status != 200:
                    raise ExternalAPIError(
                        SOURCE_NAME,
                        f"Chart request for {symbol} failed",
                        {"status": resp.status},
                    )
                payload = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ExternalAPIError(
                SOURCE_NAME, f"Chart request for {symbol} failed: {e}"
            )

        if not isinstance(payload, dict):
            raise ExternalAPIError(SOURCE_NAME, f"Unexpected payload for {symbol}")

        results = (payload.get("chart") or {}).get("result") or []
        if not results:
            raise SymbolNotFoundError(SOURCE_NAME, f"No data available for {symbol}")

        return parse_chart_payload(results[0])


# Singleton instance
_client_instance: Optional[YahooChartClient] = None


def get_yahoo_client() -> YahooChartClient:
    """Get or create the chart client."""
    global _client_instance
    if _client_instance is None:
        _client_instance = YahooChartClient()
    return _client_instance


async def close_yahoo_client() -> None:
    """Close the shared chart client, if one was created."""
    global _client_instance
    if _client_instance is not None:
        await _client_instance.close()
        _client_instance = None
