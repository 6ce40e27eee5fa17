"""
Indicator Engine Service

CONTRACT:
    Input:  IndicatorRequest (OHLC series + requested kinds)
    Output: IndicatorSet

RESPONSIBILITIES:
    - Moving averages (SMA, EMA)
    - Momentum oscillators (MACD, RSI, Stochastic)
    - Volatility envelope (Bollinger Bands)
    - Volume bars

Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from chartdesk.services.indicators.interface import IndicatorServiceInterface
from chartdesk.services.indicators.service import (
    INDICATOR_REGISTRY,
    IndicatorService,
    get_indicator_service,
)

__all__ = [
    "IndicatorServiceInterface",
    "INDICATOR_REGISTRY",
    "IndicatorService",
    "get_indicator_service",
]
