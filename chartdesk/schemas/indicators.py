"""
CONTRACT 2: Indicator Engine

Input:  list[OHLCRecord]
Output: time-aligned indicator series

Pure Python/NumPy - all series are deterministic and rounded at production.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field

from chartdesk.schemas.market import OHLCRecord, TimeKey


# =============================================================================
# ENUMS
# =============================================================================


class IndicatorKind(str, Enum):
    SMA = "sma"
    EMA = "ema"
    MACD = "macd"
    RSI = "rsi"
    STOCHASTIC = "stochastic"
    BOLLINGER = "bollinger"
    VOLUME = "volume"


class HistogramSign(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class VolumeDirection(str, Enum):
    UP = "up"
    DOWN = "down"


# =============================================================================
# OUTPUT: Series points
# =============================================================================


class IndicatorPoint(BaseModel):
    """One indicator value aligned to an input bar."""

    model_config = ConfigDict(frozen=True)

    time: TimeKey
    value: float


class HistogramPoint(IndicatorPoint):
    """MACD histogram bar; ``sign`` is a display hint derived from ``value``."""

    @computed_field
    @property
    def sign(self) -> HistogramSign:
        return HistogramSign.POSITIVE if self.value >= 0 else HistogramSign.NEGATIVE


class VolumePoint(IndicatorPoint):
    """Traded volume for a bar, tagged with the bar's direction."""

    direction: VolumeDirection


# =============================================================================
# OUTPUT: Composite results
# =============================================================================


class MACDResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    macd_line: list[IndicatorPoint]
    signal_line: list[IndicatorPoint]
    histogram: list[HistogramPoint]


class BollingerResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    middle: list[IndicatorPoint]
    upper: list[IndicatorPoint]
    lower: list[IndicatorPoint]


class StochasticResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    k_line: list[IndicatorPoint]
    d_line: list[IndicatorPoint]


class IndicatorSet(BaseModel):
    """
    Indicator outputs keyed by kind.
    Only requested kinds are populated; the rest stay None.
    """

    sma: Optional[list[IndicatorPoint]] = None
    ema: Optional[list[IndicatorPoint]] = None
    macd: Optional[MACDResult] = None
    rsi: Optional[list[IndicatorPoint]] = None
    stochastic: Optional[StochasticResult] = None
    bollinger: Optional[BollingerResult] = None
    volume: Optional[list[VolumePoint]] = None


# =============================================================================
# INPUT: IndicatorRequest
# =============================================================================


class IndicatorRequest(BaseModel):
    """
    Request for indicator calculation.
    Sent by: API layer
    Received by: Indicator Service

    An empty ``kinds`` list means every indicator.
    """

    data: list[OHLCRecord]
    kinds: list[IndicatorKind] = Field(default_factory=list)
