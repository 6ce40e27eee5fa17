"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Iterable, Sequence

from chartdesk.services.base import BaseService
from chartdesk.schemas.market import OHLCRecord
from chartdesk.schemas.indicators import IndicatorKind, IndicatorRequest, IndicatorSet


class IndicatorServiceInterface(BaseService[IndicatorRequest, IndicatorSet]):
    """
    Indicator Engine Service Contract.

    INPUT: IndicatorRequest
        - data: normalized OHLC series
        - kinds: which indicators to compute (empty = all)

    OUTPUT: IndicatorSet
        - One populated field per requested indicator kind
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: IndicatorRequest) -> IndicatorSet:
        """Calculate the requested indicators."""
        pass

    @abstractmethod
    def compute(
        self,
        data: Sequence[OHLCRecord],
        kinds: Iterable[IndicatorKind] = (),
    ) -> IndicatorSet:
        """
        Synchronous entry point for callers that already hold a series.

        Args:
            data: OHLC series, oldest first
            kinds: Indicators to compute; empty means every kind

        Returns:
            IndicatorSet with the requested fields populated
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
