"""
Mock Data Generator

Generates deterministic synthetic OHLC series for demos, tests and as the
fallback when the upstream chart API is unreachable.

The same (symbol, days) pair always yields identical output: the random
stream is a Park-Miller minimal-standard generator seeded from the symbol's
character codes, and every price is rounded to 2 decimals.
"""

import math
from datetime import date, timedelta

from chartdesk.core.numeric import to_fixed
from chartdesk.schemas.market import OHLCRecord

# Park-Miller "minimal standard" parameters
PM_MULTIPLIER = 16807
PM_MODULUS = 2_147_483_647  # 2^31 - 1

ANCHOR_DATE = date(2025, 2, 1)
DEFAULT_BASE_PRICE = 100.0

# Base prices for common symbols
SYMBOL_BASE_PRICES = {
    "AAPL": 178.0,
    "MSFT": 375.0,
    "GOOGL": 140.0,
    "AMZN": 155.0,
    "TSLA": 245.0,
    "NVDA": 495.0,
    "META": 360.0,
    "JPM": 170.0,
    "V": 265.0,
    "JNJ": 160.0,
    "WMT": 165.0,
    "XOM": 105.0,
}


class ParkMillerRandom:
    """Lehmer generator: seed' = seed * 16807 mod (2^31 - 1)."""

    def __init__(self, seed: int):
        self._state = seed

    def __call__(self) -> float:
        self._state = (self._state * PM_MULTIPLIER) % PM_MODULUS
        return (self._state - 1) / (PM_MODULUS - 1)


def symbol_seed(symbol: str) -> int:
    """Sum of the symbol's character codes, times 1000."""
    return sum(ord(c) for c in symbol) * 1000


def get_base_price(symbol: str) -> float:
    """Get base price for a symbol."""
    return SYMBOL_BASE_PRICES.get(symbol, DEFAULT_BASE_PRICE)


def generate_ohlc(symbol: str, days: int = 365) -> list[OHLCRecord]:
    """
    Generate a weekday-only daily series.

    Walks `days` calendar days forward from the anchor date, skipping
    Saturdays and Sundays, so the result holds fewer than `days` records.
    Weekends are skipped for every symbol, crypto included.
    """
    if not symbol:
        raise ValueError("symbol must be a non-empty string")
    if days < 1:
        raise ValueError(f"days must be positive, got {days}")

    rng = ParkMillerRandom(symbol_seed(symbol))
    price = get_base_price(symbol)
    records = []

    for i in range(days):
        day = ANCHOR_DATE + timedelta(days=i)
        if day.weekday() >= 5:
            continue

        volatility = 0.015 + rng() * 0.02
        drift = (rng() - 0.48) * volatility
        change = price * drift

        open_price = price + change * rng()
        close_price = price + change
        high_price = max(open_price, close_price) * (1 + rng() * volatility * 0.5)
        low_price = min(open_price, close_price) * (1 - rng() * volatility * 0.5)
        volume = math.floor(10_000_000 + rng() * 50_000_000)

        records.append(
            OHLCRecord(
                time=day.isoformat(),
                open=to_fixed(open_price, 2),
                high=to_fixed(high_price, 2),
                low=to_fixed(low_price, 2),
                close=to_fixed(close_price, 2),
                volume=volume,
            )
        )

        price = close_price

    return records
