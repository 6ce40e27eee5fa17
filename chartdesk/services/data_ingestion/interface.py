"""
Market Data Service Interface

Defines the contract for the data ingestion layer.
"""

from abc import abstractmethod

from chartdesk.services.base import BaseService
from chartdesk.schemas.market import ChartData, ChartRequest, Interval, TimeRange


class MarketDataServiceInterface(BaseService[ChartRequest, ChartData]):
    """
    Market Data Service Contract.

    INPUT: ChartRequest
        - symbol: Ticker to fetch
        - time_range: Span of history
        - interval: Bar granularity

    OUTPUT: ChartData
        - Normalized OHLC series plus live quote metadata
        - source: where the series came from (upstream or synthetic)
        - warnings: non-fatal issues (e.g. fallback used)
    """

    @property
    def name(self) -> str:
        return "MarketDataService"

    @abstractmethod
    async def execute(self, input_data: ChartRequest) -> ChartData:
        """Fetch and normalize a chart."""
        pass

    @abstractmethod
    async def get_chart(
        self,
        symbol: str,
        time_range: TimeRange = TimeRange.Y1,
        interval: Interval = Interval.D1,
    ) -> ChartData:
        """Fetch and normalize a chart for one symbol."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the upstream."""
        pass
