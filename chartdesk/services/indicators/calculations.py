"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic.

Every function takes a time-ordered sequence of OHLCRecord and returns series
aligned to a suffix of the input: an indicator with a warm-up window of W
emits nothing for the first W-1 records. Too little history yields an empty
series, never an exception. ValueError is reserved for invalid parameters.
"""

import math
from typing import Sequence

import numpy as np

from chartdesk.core.numeric import to_fixed, sequential_sum
from chartdesk.schemas.market import OHLCRecord, TimeKey
from chartdesk.schemas.indicators import (
    IndicatorPoint,
    HistogramPoint,
    VolumePoint,
    VolumeDirection,
    MACDResult,
    BollingerResult,
    StochasticResult,
)

PRICE_DIGITS = 2
MACD_DIGITS = 4


def _check_period(name: str, period: int) -> None:
    if period < 1:
        raise ValueError(f"{name} must be a positive integer, got {period}")


def _closes(data: Sequence[OHLCRecord]) -> np.ndarray:
    return np.array([r.close for r in data], dtype=float)


# =============================================================================
# SERIES PRIMITIVES (value sequences, shared by composite indicators)
# =============================================================================


def _sma_values(values: Sequence[float], period: int) -> list[float]:
    """Unrounded trailing means; first value aligns to index period-1."""
    return [
        sequential_sum(values[i - period + 1 : i + 1]) / period
        for i in range(period - 1, len(values))
    ]


def _ema_values(values: Sequence[float], period: int) -> list[float]:
    """Unrounded EMA seeded with the SMA of the first `period` values."""
    if len(values) < period:
        return []

    multiplier = 2 / (period + 1)
    current = sequential_sum(values[:period]) / period
    result = [current]

    for i in range(period, len(values)):
        current = (values[i] - current) * multiplier + current
        result.append(current)

    return result


def _points(
    times: Sequence[TimeKey], values: Sequence[float], digits: int
) -> list[IndicatorPoint]:
    return [
        IndicatorPoint(time=t, value=to_fixed(v, digits))
        for t, v in zip(times, values)
    ]


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: Sequence[OHLCRecord], period: int) -> list[IndicatorPoint]:
    """Simple Moving Average of close."""
    _check_period("period", period)
    if len(data) < period:
        return []

    values = _sma_values(_closes(data), period)
    times = [r.time for r in data[period - 1 :]]
    return _points(times, values, PRICE_DIGITS)


def ema(data: Sequence[OHLCRecord], period: int) -> list[IndicatorPoint]:
    """Exponential Moving Average of close."""
    _check_period("period", period)
    if len(data) < period:
        return []

    values = _ema_values(_closes(data), period)
    times = [r.time for r in data[period - 1 :]]
    return _points(times, values, PRICE_DIGITS)


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def macd(
    data: Sequence[OHLCRecord],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    The MACD line is the difference of the displayed (2-decimal) fast and slow
    EMAs over their shared time keys. The signal line is an EMA of the
    displayed (4-decimal) MACD values, and the histogram is their difference.
    """
    _check_period("fast_period", fast_period)
    _check_period("slow_period", slow_period)
    _check_period("signal_period", signal_period)

    fast = ema(data, fast_period)
    slow = {p.time: p.value for p in ema(data, slow_period)}

    macd_line = [
        IndicatorPoint(
            time=p.time, value=to_fixed(p.value - slow[p.time], MACD_DIGITS)
        )
        for p in fast
        if p.time in slow
    ]

    signal_values = _ema_values([p.value for p in macd_line], signal_period)
    signal_times = [p.time for p in macd_line[signal_period - 1 :]]
    signal_line = _points(signal_times, signal_values, MACD_DIGITS)

    signal_by_time = {p.time: p.value for p in signal_line}
    histogram = [
        HistogramPoint(
            time=p.time,
            value=to_fixed(p.value - signal_by_time[p.time], MACD_DIGITS),
        )
        for p in macd_line
        if p.time in signal_by_time
    ]

    return MACDResult(
        macd_line=macd_line, signal_line=signal_line, histogram=histogram
    )


def rsi(data: Sequence[OHLCRecord], period: int = 14) -> list[IndicatorPoint]:
    """
    Relative Strength Index (Wilder smoothing).

    The seed averages are the sums of the positive and the negative deltas
    among the first `period` close-to-close changes, each divided by `period`.
    A zero average loss reports 100.
    """
    _check_period("period", period)
    if len(data) < period + 1:
        return []

    deltas = np.diff(_closes(data))

    seed = deltas[:period]
    avg_gain = sequential_sum(d for d in seed if d > 0) / period
    avg_loss = abs(sequential_sum(d for d in seed if d < 0)) / period

    def _rsi_value(gain: float, loss: float) -> float:
        if loss == 0:
            return 100.0
        rs = gain / loss
        return 100 - (100 / (1 + rs))

    result = [
        IndicatorPoint(
            time=data[period].time,
            value=to_fixed(_rsi_value(avg_gain, avg_loss), PRICE_DIGITS),
        )
    ]

    for i in range(period, len(deltas)):
        change = float(deltas[i])
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0

        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

        result.append(
            IndicatorPoint(
                time=data[i + 1].time,
                value=to_fixed(_rsi_value(avg_gain, avg_loss), PRICE_DIGITS),
            )
        )

    return result


def stochastic(
    data: Sequence[OHLCRecord],
    k_period: int = 14,
    d_period: int = 3,
) -> StochasticResult:
    """
    Stochastic Oscillator.

    %K compares close to the trailing high-low range; a flat range reports 50.
    %D is the simple average of the displayed %K values.
    """
    _check_period("k_period", k_period)
    _check_period("d_period", d_period)
    if len(data) < k_period:
        return StochasticResult(k_line=[], d_line=[])

    highs = np.array([r.high for r in data], dtype=float)
    lows = np.array([r.low for r in data], dtype=float)
    closes = _closes(data)

    k_line = []
    for i in range(k_period - 1, len(data)):
        highest_high = float(np.max(highs[i - k_period + 1 : i + 1]))
        lowest_low = float(np.min(lows[i - k_period + 1 : i + 1]))

        if highest_high == lowest_low:
            k = 50.0
        else:
            k = ((closes[i] - lowest_low) / (highest_high - lowest_low)) * 100

        k_line.append(
            IndicatorPoint(time=data[i].time, value=to_fixed(k, PRICE_DIGITS))
        )

    d_values = _sma_values([p.value for p in k_line], d_period)
    d_times = [p.time for p in k_line[d_period - 1 :]]
    d_line = _points(d_times, d_values, PRICE_DIGITS)

    return StochasticResult(k_line=k_line, d_line=d_line)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    data: Sequence[OHLCRecord], period: int = 20, std_dev: float = 2.0
) -> BollingerResult:
    """
    Bollinger Bands.

    Middle band is the SMA; the envelope uses the population standard
    deviation of close around the displayed middle value.
    """
    _check_period("period", period)
    if std_dev < 0:
        raise ValueError(f"std_dev must be non-negative, got {std_dev}")

    middle = sma(data, period)
    closes = _closes(data)

    upper = []
    lower = []
    for i, point in enumerate(middle):
        window = closes[i : i + period]
        mean = point.value
        variance = sequential_sum((c - mean) ** 2 for c in window) / period
        sd = math.sqrt(variance)

        upper.append(
            IndicatorPoint(
                time=point.time, value=to_fixed(mean + std_dev * sd, PRICE_DIGITS)
            )
        )
        lower.append(
            IndicatorPoint(
                time=point.time, value=to_fixed(mean - std_dev * sd, PRICE_DIGITS)
            )
        )

    return BollingerResult(middle=middle, upper=upper, lower=lower)


# =============================================================================
# VOLUME
# =============================================================================


def volume_series(data: Sequence[OHLCRecord]) -> list[VolumePoint]:
    """Per-bar volume, tagged up when close >= open."""
    return [
        VolumePoint(
            time=r.time,
            value=float(r.volume),
            direction=(
                VolumeDirection.UP if r.close >= r.open else VolumeDirection.DOWN
            ),
        )
        for r in data
    ]
