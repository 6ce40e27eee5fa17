"""
Fixed-point rounding helpers.

Every price, indicator and normalized value is rounded through ``to_fixed``
so that outputs are byte-stable across runs and across implementations that
format numbers with fixed decimal places.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext


def to_fixed(value: float, digits: int) -> float:
    """
    Round ``value`` to ``digits`` decimal places, half away from zero.

    Rounding is applied to the exact binary value of the float, so
    ``to_fixed(1.005, 2) == 1.0`` (1.005 is stored as 1.00499...) while
    ``to_fixed(0.125, 2) == 0.13`` (0.125 is exact and a true tie).
    """
    if digits < 0:
        raise ValueError(f"digits must be non-negative, got {digits}")
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-digits)
    # Room for every integer digit of a float (up to ~1e308) plus the fraction
    with localcontext() as ctx:
        ctx.prec = max(exact.adjusted(), 0) + digits + 2
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def sequential_sum(values) -> float:
    """Left-to-right float sum (no pairwise or compensated summation)."""
    total = 0.0
    for v in values:
        total += float(v)
    return total
