"""
Live/Historical Merge

Reconciles an out-of-band live quote (last price, previous close) with the
tail of the historical series to produce the price-header figures, plus the
whole-period overview statistics.
"""

import math
from typing import Optional, Sequence

from chartdesk.schemas.market import DisplayQuote, OHLCRecord, SeriesOverview


def merge_live_quote(
    data: Sequence[OHLCRecord],
    live_price: Optional[float] = None,
    previous_close: Optional[float] = None,
) -> DisplayQuote:
    """
    Compute display price and change.

    Display price is the live price, else the last close. The reference is
    the previous close, else the second-to-last close. A zero reference gives
    a zero change percent.

    Raises:
        ValueError: when a missing live price or previous close cannot be
            taken from the series (callers fall back to synthetic data first)
    """
    if live_price is not None:
        display_price = live_price
    elif data:
        display_price = data[-1].close
    else:
        raise ValueError("No live price and no historical bars to display")

    if previous_close is not None:
        reference_price = previous_close
    elif len(data) >= 2:
        reference_price = data[-2].close
    else:
        raise ValueError("No previous close and fewer than 2 historical bars")

    change = display_price - reference_price
    change_percent = change / reference_price * 100 if reference_price != 0 else 0.0

    return DisplayQuote(
        display_price=display_price,
        reference_price=reference_price,
        change=change,
        change_percent=change_percent,
    )


def summarize_series(data: Sequence[OHLCRecord]) -> Optional[SeriesOverview]:
    """Period high/low, average volume and first-to-last performance."""
    if len(data) < 2:
        return None

    first = data[0]
    last = data[-1]
    total_change = last.close - first.close
    total_change_percent = (
        total_change / first.close * 100 if first.close != 0 else 0.0
    )
    # Half-up to the nearest share
    average_volume = math.floor(sum(r.volume for r in data) / len(data) + 0.5)

    return SeriesOverview(
        period_high=max(r.high for r in data),
        period_low=min(r.low for r in data),
        average_volume=average_volume,
        total_change=total_change,
        total_change_percent=total_change_percent,
        last_time=last.time,
        open=last.open,
        high=last.high,
        low=last.low,
        close=last.close,
        volume=last.volume,
    )
