"""
Market Data API Endpoints

Endpoints for normalized charts, price header quotes and the symbol catalog.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from chartdesk.schemas.market import (
    ChartData,
    DisplayQuote,
    Interval,
    SeriesOverview,
    TimeRange,
)
from chartdesk.services.base import ExternalAPIError, SymbolNotFoundError
from chartdesk.services.data_ingestion import MarketDataService, get_market_data_service
from chartdesk.services.data_ingestion.stock_list import get_symbol_info, search_symbols
from chartdesk.services.quote import merge_live_quote, summarize_series

logger = logging.getLogger(__name__)

router = APIRouter()


class QuoteResponse(BaseModel):
    """Response for the price header endpoint."""
    symbol: str
    source: str
    quote: DisplayQuote
    overview: Optional[SeriesOverview] = None


async def load_chart(
    service: MarketDataService,
    symbol: str,
    time_range: TimeRange,
    interval: Interval,
) -> ChartData:
    """Fetch a chart, mapping upstream failures to HTTP errors."""
    try:
        return await service.get_chart(symbol, time_range, interval)
    except SymbolNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ExternalAPIError as e:
        logger.error(f"Chart fetch failed for {symbol}: {e}")
        raise HTTPException(
            status_code=502,
            detail={"message": e.message, "status": e.details.get("status")},
        )


@router.get("/symbols")
async def get_symbols(
    q: str = Query(default="", description="Ticker or company name"),
    limit: int = Query(default=20, ge=1, le=100),
):
    """List or search the symbol catalog."""
    return {"symbols": search_symbols(q, limit)}


@router.get("/symbols/{symbol}")
async def get_symbol(symbol: str):
    """Catalog entry for one symbol."""
    info = get_symbol_info(symbol)
    if info is None:
        raise HTTPException(status_code=404, detail=f"{symbol} is not in the catalog")
    return info


@router.get("/stock/{symbol}", response_model=ChartData)
async def get_stock(
    symbol: str,
    time_range: TimeRange = Query(default=TimeRange.Y1, alias="range"),
    interval: Interval = Query(default=Interval.D1),
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Get the normalized OHLC series for a symbol.

    Returns:
        - OHLC records (date-keyed for daily+, epoch-keyed for intraday)
        - Live price and previous close from the upstream meta
        - Suggested polling period for this granularity
    """
    return await load_chart(service, symbol, time_range, interval)


@router.get("/quote/{symbol}", response_model=QuoteResponse)
async def get_quote(
    symbol: str,
    time_range: TimeRange = Query(default=TimeRange.Y1, alias="range"),
    interval: Interval = Query(default=Interval.D1),
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Get the price header for a symbol.

    Live price and previous close come from the upstream when present,
    otherwise from the last two bars of the series.
    """
    chart = await load_chart(service, symbol, time_range, interval)

    try:
        quote = merge_live_quote(
            chart.data,
            live_price=chart.regular_market_price,
            previous_close=chart.previous_close,
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return QuoteResponse(
        symbol=chart.symbol,
        source=chart.source,
        quote=quote,
        overview=summarize_series(chart.data),
    )
