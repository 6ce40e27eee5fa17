"""
Indicator Engine Service Implementation

Dispatches requested indicator kinds to the pure calculation functions.
Every call recomputes from the series it is given; nothing is carried over
between calls.
"""

import logging
from typing import Callable, Iterable, Optional, Sequence

from chartdesk.schemas.market import OHLCRecord
from chartdesk.schemas.indicators import IndicatorKind, IndicatorRequest, IndicatorSet
from chartdesk.services.indicators.interface import IndicatorServiceInterface
from chartdesk.services.indicators.calculations import (
    sma,
    ema,
    macd,
    rsi,
    stochastic,
    bollinger_bands,
    volume_series,
)

logger = logging.getLogger(__name__)


# Default parameters shown on the dashboard
SMA_PERIOD = 20
EMA_PERIOD = 12
RSI_PERIOD = 14
STOCH_K_PERIOD = 14
STOCH_D_PERIOD = 3
BOLLINGER_PERIOD = 20
BOLLINGER_STD_DEV = 2.0


INDICATOR_REGISTRY: dict[IndicatorKind, Callable[[Sequence[OHLCRecord]], object]] = {
    IndicatorKind.SMA: lambda data: sma(data, SMA_PERIOD),
    IndicatorKind.EMA: lambda data: ema(data, EMA_PERIOD),
    IndicatorKind.MACD: lambda data: macd(data, 12, 26, 9),
    IndicatorKind.RSI: lambda data: rsi(data, RSI_PERIOD),
    IndicatorKind.STOCHASTIC: lambda data: stochastic(
        data, STOCH_K_PERIOD, STOCH_D_PERIOD
    ),
    IndicatorKind.BOLLINGER: lambda data: bollinger_bands(
        data, BOLLINGER_PERIOD, BOLLINGER_STD_DEV
    ),
    IndicatorKind.VOLUME: volume_series,
}


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for chart panes.
    All calculations are deterministic and reproducible.
    """

    def __init__(
        self,
        registry: Optional[
            dict[IndicatorKind, Callable[[Sequence[OHLCRecord]], object]]
        ] = None,
    ):
        self._registry = registry or INDICATOR_REGISTRY

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: IndicatorRequest) -> IndicatorSet:
        """Calculate the requested indicators for the request's series."""
        return self.compute(input_data.data, input_data.kinds)

    def compute(
        self,
        data: Sequence[OHLCRecord],
        kinds: Iterable[IndicatorKind] = (),
    ) -> IndicatorSet:
        """Calculate each requested kind (all kinds when none are given)."""
        requested = list(dict.fromkeys(kinds)) or list(IndicatorKind)

        results = {}
        for kind in requested:
            results[kind.value] = self._registry[kind](data)

        logger.debug(
            f"Computed {len(requested)} indicators over {len(data)} records"
        )
        return IndicatorSet(**results)

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
