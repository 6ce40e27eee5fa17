"""Tests for the indicator engine service."""

import pytest

from chartdesk.schemas.indicators import IndicatorKind, IndicatorRequest
from chartdesk.services.indicators import (
    INDICATOR_REGISTRY,
    IndicatorService,
    get_indicator_service,
)
from chartdesk.services.indicators.calculations import rsi, sma


class TestIndicatorService:
    """Tests for IndicatorService dispatch."""

    def test_registry_covers_every_kind(self):
        assert set(INDICATOR_REGISTRY) == set(IndicatorKind)

    def test_empty_request_computes_everything(self, alternating_records):
        result = IndicatorService().compute(alternating_records)

        for kind in IndicatorKind:
            assert getattr(result, kind.value) is not None

    def test_only_requested_kinds(self, alternating_records):
        result = IndicatorService().compute(
            alternating_records, [IndicatorKind.SMA, IndicatorKind.RSI]
        )

        assert result.sma == sma(alternating_records, 20)
        assert result.rsi == rsi(alternating_records, 14)
        assert result.macd is None
        assert result.volume is None

    def test_duplicate_kinds_computed_once(self, alternating_records):
        calls = []

        def counting(data):
            calls.append(len(data))
            return []

        service = IndicatorService(registry={IndicatorKind.EMA: counting})
        service.compute(alternating_records, [IndicatorKind.EMA, IndicatorKind.EMA])

        assert calls == [30]

    def test_idempotent(self, alternating_records):
        service = IndicatorService()
        assert service.compute(alternating_records) == service.compute(
            alternating_records
        )

    def test_short_series_gives_empty_outputs(self, make_records):
        result = IndicatorService().compute(make_records([1.0, 2.0, 3.0]))

        assert result.sma == []
        assert result.macd.macd_line == []
        assert result.stochastic.k_line == []
        assert len(result.volume) == 3

    @pytest.mark.asyncio
    async def test_execute(self, alternating_records):
        request = IndicatorRequest(
            data=alternating_records, kinds=[IndicatorKind.BOLLINGER]
        )
        result = await IndicatorService().execute(request)

        assert len(result.bollinger.middle) == 11
        assert result.sma is None

    @pytest.mark.asyncio
    async def test_health_check(self):
        assert await IndicatorService().health_check() is True

    def test_singleton(self):
        assert get_indicator_service() is get_indicator_service()
