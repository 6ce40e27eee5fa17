"""
Market Data Service

CONTRACT:
    Input:  ChartRequest
    Output: ChartData

RESPONSIBILITIES:
    - Fetch chart payloads from the Yahoo Finance chart API
    - Normalize parallel arrays into ordered, de-duplicated OHLC records
    - Fall back to deterministic synthetic data when the upstream fails
    - Cache normalized charts in Redis
"""

from chartdesk.services.data_ingestion.interface import MarketDataServiceInterface
from chartdesk.services.data_ingestion.normalizer import (
    normalize_chart,
    normalize_series,
)
from chartdesk.services.data_ingestion.mock_data import generate_ohlc
from chartdesk.services.data_ingestion.service import (
    MarketDataService,
    get_market_data_service,
)

__all__ = [
    "MarketDataServiceInterface",
    "normalize_chart",
    "normalize_series",
    "generate_ohlc",
    "MarketDataService",
    "get_market_data_service",
]
