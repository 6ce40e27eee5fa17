"""
CONTRACT 1: Market Data

Input:  Raw upstream chart payload (parallel arrays + meta)
Output: Normalized OHLC series

This module defines the shapes exchanged between the upstream chart API,
the Series Normalizer, the synthetic generator and the Live/Historical merge.
"""

from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, computed_field


# A calendar date "YYYY-MM-DD" (daily or coarser) or epoch seconds (intraday).
TimeKey = Union[int, str]


# =============================================================================
# ENUMS
# =============================================================================


class Interval(str, Enum):
    """Bar granularity requested from the upstream chart API."""

    M1 = "1m"
    M2 = "2m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    M60 = "60m"
    M90 = "90m"
    H1 = "1h"
    D1 = "1d"
    D5 = "5d"
    W1 = "1wk"
    MO1 = "1mo"
    MO3 = "3mo"

    @property
    def is_intraday(self) -> bool:
        return self in INTRADAY_INTERVALS


INTRADAY_INTERVALS = frozenset(
    {
        Interval.M1,
        Interval.M2,
        Interval.M5,
        Interval.M15,
        Interval.M30,
        Interval.M60,
        Interval.M90,
        Interval.H1,
    }
)


class TimeRange(str, Enum):
    """Span of history requested from the upstream chart API."""

    D1 = "1d"
    D5 = "5d"
    MO1 = "1mo"
    MO3 = "3mo"
    MO6 = "6mo"
    Y1 = "1y"
    Y2 = "2y"
    Y5 = "5y"
    Y10 = "10y"
    YTD = "ytd"
    MAX = "max"

    @property
    def calendar_days(self) -> int:
        """Calendar days covered by the range (used by the synthetic fallback)."""
        return RANGE_DAYS[self]


RANGE_DAYS = {
    TimeRange.D1: 1,
    TimeRange.D5: 5,
    TimeRange.MO1: 30,
    TimeRange.MO3: 90,
    TimeRange.MO6: 180,
    TimeRange.Y1: 365,
    TimeRange.Y2: 730,
    TimeRange.Y5: 1825,
    TimeRange.Y10: 3650,
    TimeRange.YTD: 365,
    TimeRange.MAX: 3650,
}


# =============================================================================
# INPUT: ChartRequest
# =============================================================================


class ChartRequest(BaseModel):
    """
    Request for a normalized chart.
    Sent by: API layer
    Received by: Market Data Service
    """

    symbol: str = Field(..., min_length=1, max_length=32)
    time_range: TimeRange = TimeRange.Y1
    interval: Interval = Interval.D1


# =============================================================================
# INPUT: Raw upstream payload
# =============================================================================


class RawQuote(BaseModel):
    """Parallel OHLCV arrays as returned by the upstream; any entry may be null."""

    open: list[Optional[float]] = Field(default_factory=list)
    high: list[Optional[float]] = Field(default_factory=list)
    low: list[Optional[float]] = Field(default_factory=list)
    close: list[Optional[float]] = Field(default_factory=list)
    volume: list[Optional[float]] = Field(default_factory=list)


class ChartMeta(BaseModel):
    """Metadata block accompanying a chart payload."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    currency: Optional[str] = None
    exchange_name: Optional[str] = Field(default=None, alias="exchangeName")
    regular_market_price: Optional[float] = Field(
        default=None, alias="regularMarketPrice"
    )
    previous_close: Optional[float] = Field(default=None, alias="previousClose")
    chart_previous_close: Optional[float] = Field(
        default=None, alias="chartPreviousClose"
    )

    @property
    def reference_close(self) -> Optional[float]:
        """Previous close, falling back to the chart's own previous close."""
        if self.previous_close is not None:
            return self.previous_close
        return self.chart_previous_close


class RawChart(BaseModel):
    """A single chart result: timestamps, one quote block and meta."""

    timestamp: list[int] = Field(default_factory=list)
    quote: RawQuote
    meta: ChartMeta


# =============================================================================
# OUTPUT: Normalized series
# =============================================================================


class OHLCRecord(BaseModel):
    """Single normalized bar. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    time: TimeKey
    open: float
    high: float
    low: float
    close: float
    volume: int = Field(default=0, ge=0)


class DisplayQuote(BaseModel):
    """Price header values: live (or last) price against a reference close."""

    model_config = ConfigDict(frozen=True)

    display_price: float
    reference_price: float
    change: float
    change_percent: float

    @computed_field
    @property
    def is_positive(self) -> bool:
        return self.change >= 0


class SeriesOverview(BaseModel):
    """Whole-period statistics shown beneath the chart."""

    model_config = ConfigDict(frozen=True)

    period_high: float
    period_low: float
    average_volume: int
    total_change: float
    total_change_percent: float
    last_time: TimeKey
    open: float
    high: float
    low: float
    close: float
    volume: int


class ChartData(BaseModel):
    """
    Normalized chart for one symbol.
    Returned by: Market Data Service
    Consumed by: Indicator Engine, Live/Historical merge, HTTP layer
    """

    symbol: str
    currency: Optional[str] = None
    exchange_name: Optional[str] = None
    regular_market_price: Optional[float] = None
    previous_close: Optional[float] = None
    interval: Interval
    time_range: TimeRange
    source: str
    refresh_seconds: int = Field(..., gt=0)
    data: list[OHLCRecord]
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "symbol": "AAPL",
                "currency": "USD",
                "exchange_name": "NMS",
                "regular_market_price": 178.12,
                "previous_close": 176.4,
                "interval": "1d",
                "time_range": "1y",
                "source": "Yahoo Finance",
                "refresh_seconds": 30,
                "data": [
                    {
                        "time": "2025-02-03",
                        "open": 176.9,
                        "high": 179.2,
                        "low": 175.8,
                        "close": 178.12,
                        "volume": 41234567,
                    }
                ],
                "warnings": [],
            }
        }
    )
