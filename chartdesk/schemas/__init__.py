"""
ChartDesk Data Contracts

All data shapes exchanged between layers.
"""

from chartdesk.schemas.market import (
    TimeKey,
    Interval,
    TimeRange,
    ChartRequest,
    RawQuote,
    ChartMeta,
    RawChart,
    OHLCRecord,
    DisplayQuote,
    SeriesOverview,
    ChartData,
)
from chartdesk.schemas.indicators import (
    IndicatorKind,
    HistogramSign,
    VolumeDirection,
    IndicatorPoint,
    HistogramPoint,
    VolumePoint,
    MACDResult,
    BollingerResult,
    StochasticResult,
    IndicatorSet,
    IndicatorRequest,
)

__all__ = [
    # Market
    "TimeKey",
    "Interval",
    "TimeRange",
    "ChartRequest",
    "RawQuote",
    "ChartMeta",
    "RawChart",
    "OHLCRecord",
    "DisplayQuote",
    "SeriesOverview",
    "ChartData",
    # Indicators
    "IndicatorKind",
    "HistogramSign",
    "VolumeDirection",
    "IndicatorPoint",
    "HistogramPoint",
    "VolumePoint",
    "MACDResult",
    "BollingerResult",
    "StochasticResult",
    "IndicatorSet",
    "IndicatorRequest",
]
