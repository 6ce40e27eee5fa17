"""
Symbol Catalog

Symbols offered in the dashboard sidebar, with metadata for search.
"""

from typing import Optional

# Default watchlist
SYMBOLS = [
    {"symbol": "AAPL", "name": "Apple Inc.", "sector": "Technology"},
    {"symbol": "MSFT", "name": "Microsoft Corp.", "sector": "Technology"},
    {"symbol": "GOOGL", "name": "Alphabet Inc.", "sector": "Technology"},
    {"symbol": "AMZN", "name": "Amazon.com Inc.", "sector": "Consumer"},
    {"symbol": "TSLA", "name": "Tesla Inc.", "sector": "Automotive"},
    {"symbol": "NVDA", "name": "NVIDIA Corp.", "sector": "Semiconductors"},
    {"symbol": "META", "name": "Meta Platforms Inc.", "sector": "Technology"},
    {"symbol": "JPM", "name": "JPMorgan Chase", "sector": "Finance"},
    {"symbol": "V", "name": "Visa Inc.", "sector": "Finance"},
    {"symbol": "JNJ", "name": "Johnson & Johnson", "sector": "Healthcare"},
    {"symbol": "WMT", "name": "Walmart Inc.", "sector": "Consumer"},
    {"symbol": "XOM", "name": "Exxon Mobil Corp.", "sector": "Energy"},
]

_BY_SYMBOL = {s["symbol"]: s for s in SYMBOLS}


def search_symbols(query: str, limit: int = 20) -> list[dict]:
    """
    Search symbols by ticker or company name.

    Exact and prefix ticker matches rank first, then substring matches on
    the ticker or the name.
    """
    query = query.upper().strip()
    if not query:
        return SYMBOLS[:limit]

    exact = []
    prefix = []
    contains = []
    for stock in SYMBOLS:
        symbol = stock["symbol"]
        if symbol == query:
            exact.append(stock)
        elif symbol.startswith(query):
            prefix.append(stock)
        elif query in symbol or query in stock["name"].upper():
            contains.append(stock)

    return (exact + prefix + contains)[:limit]


def get_symbol_info(symbol: str) -> Optional[dict]:
    """Catalog entry for a symbol, if listed."""
    return _BY_SYMBOL.get(symbol.upper().strip())
