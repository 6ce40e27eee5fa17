"""Tests for the symbol catalog."""

from chartdesk.services.data_ingestion.stock_list import (
    SYMBOLS,
    get_symbol_info,
    search_symbols,
)


class TestSearchSymbols:
    def test_empty_query_lists_catalog(self):
        assert search_symbols("") == SYMBOLS
        assert len(search_symbols("", limit=5)) == 5

    def test_exact_ticker_ranks_first(self):
        # "V" is exact for Visa and a substring of several names
        assert search_symbols("v")[0]["symbol"] == "V"

    def test_matches_company_name(self):
        assert [s["symbol"] for s in search_symbols("walmart")] == ["WMT"]

    def test_no_match(self):
        assert search_symbols("zzzz") == []


class TestGetSymbolInfo:
    def test_case_and_whitespace_insensitive(self):
        assert get_symbol_info(" aapl ")["name"] == "Apple Inc."

    def test_unlisted(self):
        assert get_symbol_info("BTC-USD") is None
