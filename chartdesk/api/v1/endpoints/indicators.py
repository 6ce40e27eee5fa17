"""
Indicator API Endpoints

Endpoints for technical indicator series.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from chartdesk.api.v1.endpoints.market import load_chart
from chartdesk.schemas.market import Interval, TimeRange
from chartdesk.schemas.indicators import IndicatorKind, IndicatorSet
from chartdesk.services.data_ingestion import MarketDataService, get_market_data_service
from chartdesk.services.indicators import IndicatorService, get_indicator_service

router = APIRouter()


class IndicatorResponse(BaseModel):
    """Indicator series for one symbol."""
    symbol: str
    interval: Interval
    source: str
    indicators: IndicatorSet


@router.get("/{symbol}", response_model=IndicatorResponse)
async def get_indicators(
    symbol: str,
    time_range: TimeRange = Query(default=TimeRange.Y1, alias="range"),
    interval: Interval = Query(default=Interval.D1),
    indicators: Optional[list[IndicatorKind]] = Query(default=None),
    market: MarketDataService = Depends(get_market_data_service),
    engine: IndicatorService = Depends(get_indicator_service),
):
    """
    Get indicator series for a symbol.

    Pass ``indicators`` repeatedly to pick kinds (``?indicators=sma&indicators=rsi``);
    omit it for every kind. Series shorter than an indicator's warm-up
    window come back empty.
    """
    chart = await load_chart(market, symbol, time_range, interval)
    result = engine.compute(chart.data, indicators or ())

    return IndicatorResponse(
        symbol=chart.symbol,
        interval=chart.interval,
        source=chart.source,
        indicators=result,
    )
