"""Yahoo Finance quote client (chart metadata via yfinance)."""
import asyncio
import logging
from typing import Any, Mapping

import yfinance as yf

from finnolan.domain.entities import Quote, SymbolInfo
from finnolan.domain.exceptions import ProviderError
from finnolan.domain.interfaces import QuoteProvider

logger = logging.getLogger(__name__)

PROVIDER = "Yahoo Finance"


def get_chart_meta(provider_symbol: str) -> Mapping[str, Any]:
    """Fetch the chart ``meta`` block for a symbol (blocking).

    The one-day chart is loaded first so the cached metadata carries the
    prior session close rather than the close before a multi-day window.
    """
    ticker: yf.Ticker = yf.Ticker(provider_symbol)
    ticker.history(period="1d", interval="1d")
    return ticker.get_history_metadata() or {}


def quote_from_meta(info: SymbolInfo, meta: Mapping[str, Any]) -> Quote:
    """Normalize chart metadata into a Quote.

    Previous close prefers ``previousClose`` and falls back to
    ``chartPreviousClose``; change fields are derived from it.
    """
    price = meta.get("regularMarketPrice")
    previous_close = meta.get("previousClose") or meta.get("chartPreviousClose")

    if not price or float(price) <= 0:
        raise ProviderError(PROVIDER, f"No price data available for symbol: {info.provider_symbol!r}")
    if not previous_close:
        raise ProviderError(PROVIDER, f"No previous close available for symbol: {info.provider_symbol!r}")

    if info.name and info.name != info.symbol:
        display_name = info.name
    else:
        display_name = meta.get("shortName") or meta.get("longName") or info.symbol

    high52w = meta.get("fiftyTwoWeekHigh")
    low52w = meta.get("fiftyTwoWeekLow")
    return Quote.from_prices(
        symbol=info.symbol,
        display_name=display_name,
        price=float(price),
        previous_close=float(previous_close),
        volume=int(meta.get("regularMarketVolume") or 0),
        high52w=float(high52w) if high52w else None,
        low52w=float(low52w) if low52w else None,
    )


class YahooQuoteProvider(QuoteProvider):
    """Quote provider backed by Yahoo Finance chart metadata."""

    async def fetch_quote(self, info: SymbolInfo) -> Quote:
        try:
            meta = await asyncio.to_thread(get_chart_meta, info.provider_symbol)
        except Exception as e:
            logger.error(f"Error fetching {info.provider_symbol}: {e}")
            raise ProviderError(PROVIDER, f"Failed to fetch {info.provider_symbol}: {e}") from e
        return quote_from_meta(info, meta)
