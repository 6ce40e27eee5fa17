"""
Quote Merge

CONTRACT:
    Input:  OHLC series + optional live price / previous close
    Output: DisplayQuote, SeriesOverview

Pure computation; no I/O.
"""

from chartdesk.services.quote.merge import merge_live_quote, summarize_series

__all__ = ["merge_live_quote", "summarize_series"]
