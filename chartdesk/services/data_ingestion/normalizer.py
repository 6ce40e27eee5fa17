"""
Series Normalizer

Turns the upstream's parallel-array chart payload into an ordered list of
OHLCRecord:

- indices with a missing open/high/low/close are dropped (missing or
  negative volume is 0)
- intraday intervals are keyed by epoch seconds, daily and coarser by the UTC
  calendar date "YYYY-MM-DD"
- the first record for a time key wins; later repeats are dropped
- prices are rounded to 4 decimals intraday, 2 decimals otherwise

Input order is preserved; the upstream already delivers ascending time.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from chartdesk.core.numeric import to_fixed
from chartdesk.schemas.market import Interval, OHLCRecord, RawChart, RawQuote, TimeKey

logger = logging.getLogger(__name__)

INTRADAY_DIGITS = 4
DAILY_DIGITS = 2


def to_time_key(timestamp: int, interval: Interval) -> TimeKey:
    """Epoch seconds for intraday intervals, UTC calendar date otherwise."""
    if interval.is_intraday:
        return int(timestamp)
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")


def _at(values: Sequence[Optional[float]], index: int) -> Optional[float]:
    """Entry at index, treating a short array as missing values."""
    return values[index] if index < len(values) else None


def normalize_series(
    timestamps: Sequence[int],
    quote: RawQuote,
    interval: Interval,
) -> list[OHLCRecord]:
    """
    Normalize parallel OHLCV arrays.

    Args:
        timestamps: Epoch seconds, one per bar
        quote: Same-length open/high/low/close/volume arrays (entries may be None)
        interval: Requested granularity; selects time-key format and precision

    Returns:
        Ordered, de-duplicated records. Empty when nothing is valid.
    """
    digits = INTRADAY_DIGITS if interval.is_intraday else DAILY_DIGITS
    seen: set[TimeKey] = set()
    records: list[OHLCRecord] = []
    dropped = 0

    for i, ts in enumerate(timestamps):
        open_ = _at(quote.open, i)
        high = _at(quote.high, i)
        low = _at(quote.low, i)
        close = _at(quote.close, i)
        volume = _at(quote.volume, i)

        if open_ is None or high is None or low is None or close is None:
            dropped += 1
            continue

        time_key = to_time_key(ts, interval)
        if time_key in seen:
            dropped += 1
            continue
        seen.add(time_key)

        records.append(
            OHLCRecord(
                time=time_key,
                open=to_fixed(open_, digits),
                high=to_fixed(high, digits),
                low=to_fixed(low, digits),
                close=to_fixed(close, digits),
                volume=max(int(volume or 0), 0),
            )
        )

    if dropped:
        logger.debug(f"Normalizer dropped {dropped} of {len(timestamps)} bars")

    return records


def normalize_chart(chart: RawChart, interval: Interval) -> list[OHLCRecord]:
    """Normalize a parsed upstream chart result."""
    return normalize_series(chart.timestamp, chart.quote, interval)
