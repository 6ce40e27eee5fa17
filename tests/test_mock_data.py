"""Tests for the deterministic synthetic generator."""

from datetime import date

import pytest

from chartdesk.services.data_ingestion.mock_data import (
    DEFAULT_BASE_PRICE,
    PM_MODULUS,
    ParkMillerRandom,
    generate_ohlc,
    get_base_price,
    symbol_seed,
)


class TestParkMillerRandom:
    """Tests for the Lehmer generator."""

    def test_first_output(self):
        rng = ParkMillerRandom(65000)
        assert rng() == 1092454999 / 2147483646

    def test_state_advances(self):
        rng = ParkMillerRandom(1)
        assert rng() == 16806 / (PM_MODULUS - 1)
        assert rng() == (16807 * 16807 - 1) / (PM_MODULUS - 1)

    def test_outputs_in_unit_interval(self):
        rng = ParkMillerRandom(symbol_seed("NVDA"))
        for _ in range(1000):
            assert 0.0 <= rng() < 1.0


class TestSeedsAndPrices:
    """Tests for symbol seeding and base prices."""

    def test_seed_from_character_codes(self):
        assert symbol_seed("A") == 65000
        assert symbol_seed("AB") == (65 + 66) * 1000

    def test_known_and_unknown_base_prices(self):
        assert get_base_price("AAPL") == 178.0
        assert get_base_price("XOM") == 105.0
        assert get_base_price("ZZZZ") == DEFAULT_BASE_PRICE


class TestGenerateOHLC:
    """Tests for generate_ohlc."""

    def test_deterministic(self):
        assert generate_ohlc("AAPL", 60) == generate_ohlc("AAPL", 60)

    def test_shorter_run_is_prefix(self):
        short = generate_ohlc("MSFT", 30)
        long = generate_ohlc("MSFT", 90)
        assert long[: len(short)] == short

    def test_symbol_is_case_sensitive(self):
        assert generate_ohlc("AAPL", 30) != generate_ohlc("aapl", 30)

    def test_skips_weekends_from_anchor(self):
        # 2025-02-01 is a Saturday
        first = generate_ohlc("X", 3)
        week = generate_ohlc("X", 7)

        assert [r.time for r in first] == ["2025-02-03"]
        assert len(week) == 5
        assert week[-1].time == "2025-02-07"

    def test_only_weekdays(self):
        for record in generate_ohlc("TSLA", 120):
            assert date.fromisoformat(record.time).weekday() < 5

    def test_whole_weekend_yields_nothing(self):
        assert generate_ohlc("X", 2) == []

    def test_bar_invariants(self):
        for r in generate_ohlc("NVDA", 365):
            assert r.high >= max(r.open, r.close)
            assert r.low <= min(r.open, r.close)
            assert r.low > 0
            assert 10_000_000 <= r.volume < 60_000_000

    def test_prices_rounded_to_cents(self):
        for r in generate_ohlc("GOOGL", 30):
            for price in (r.open, r.high, r.low, r.close):
                assert round(price, 2) == price

    def test_starts_near_base_price(self):
        first = generate_ohlc("AAPL", 5)[0]
        assert first.open == pytest.approx(178.0, rel=0.05)

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            generate_ohlc("", 30)
        with pytest.raises(ValueError):
            generate_ohlc("AAPL", 0)


class TestReferenceSeries:
    """Pinned output shared with the dashboard's original generator."""

    def test_first_aapl_week(self):
        records = [r.model_dump() for r in generate_ohlc("AAPL", 10)]

        assert records == [
            {"time": "2025-02-03", "open": 178.14, "high": 180.81,
             "low": 177.38, "close": 179.15, "volume": 26364491},
            {"time": "2025-02-04", "open": 178.44, "high": 178.89,
             "low": 176.63, "close": 178.23, "volume": 14120571},
            {"time": "2025-02-05", "open": 178.24, "high": 179.04,
             "low": 177.16, "close": 178.66, "volume": 44062819},
            {"time": "2025-02-06", "open": 180.95, "high": 183.91,
             "low": 180.01, "close": 180.98, "volume": 51874607},
            {"time": "2025-02-07", "open": 181.75, "high": 184.0,
             "low": 179.56, "close": 181.79, "volume": 35500557},
            {"time": "2025-02-10", "open": 182.27, "high": 185.0,
             "low": 181.12, "close": 182.66, "volume": 59433659},
        ]

    def test_full_year_tail(self):
        records = generate_ohlc("AAPL", 365)

        assert len(records) == 260
        assert records[-1].model_dump() == {
            "time": "2026-01-30",
            "open": 244.63,
            "high": 247.01,
            "low": 241.1,
            "close": 243.2,
            "volume": 18071845,
        }
