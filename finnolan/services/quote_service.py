"""Quote fetching business logic."""
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import logging

from finnolan.domain import symbols
from finnolan.domain.entities import Quote, SymbolInfo
from finnolan.domain.exceptions import InputValidationError
from finnolan.domain.interfaces import QuoteProvider
from finnolan.domain.results import Failed, Ok, Outcome
from finnolan.infrastructure.http import gather_settled

logger = logging.getLogger(__name__)

MAX_SYMBOLS_PER_REQUEST = 20


def format_volume(volume: int) -> str:
    """Scale volume with Indian-style suffixes (Cr, L, K)."""
    if volume >= 10_000_000:
        return f"{volume / 10_000_000:.1f}Cr"
    if volume >= 100_000:
        return f"{volume / 100_000:.1f}L"
    if volume >= 1_000:
        return f"{volume / 1_000:.1f}K"
    return str(volume)


@dataclass
class QuoteBatch:
    """Quotes that resolved, plus the symbols that did not."""
    quotes: List[Quote] = field(default_factory=list)
    unavailable: List[str] = field(default_factory=list)


class QuoteService:
    """Business logic for quote lookups."""

    def __init__(self, provider: QuoteProvider):
        self._provider = provider

    async def fetch_one(self, info: SymbolInfo) -> Quote:
        """Fetch a single quote; provider errors propagate."""
        return await self._provider.fetch_quote(info)

    async def fetch_many(self, infos: Sequence[SymbolInfo]) -> List[Outcome]:
        """Fetch quotes concurrently; one Ok/Failed per symbol, in order."""
        return await gather_settled(self._provider.fetch_quote(info) for info in infos)

    async def fetch_batch(self, infos: Sequence[SymbolInfo]) -> QuoteBatch:
        """Fetch quotes and apply the drop-failed policy."""
        outcomes = await self.fetch_many(infos)
        return settle(infos, outcomes)

    async def quotes(self, requested: Sequence[str]) -> QuoteBatch:
        """Quotes for arbitrary logical symbols (mapped, or verbatim with default suffix)."""
        cleaned = [symbols.normalize(s) for s in requested if symbols.normalize(s)]
        if not cleaned:
            raise InputValidationError("At least one symbol is required")
        if len(cleaned) > MAX_SYMBOLS_PER_REQUEST:
            raise InputValidationError(
                f"At most {MAX_SYMBOLS_PER_REQUEST} symbols may be requested at once"
            )
        # dict.fromkeys keeps first-seen order while dropping duplicates
        infos = [symbols.resolve_or_fallback(s) for s in dict.fromkeys(cleaned)]
        return await self.fetch_batch(infos)

    async def market_overview(self) -> Tuple[QuoteBatch, QuoteBatch]:
        """Dashboard indices and top stocks, fetched in one concurrent batch."""
        index_infos = [symbols.INDICES[s] for s in symbols.DASHBOARD_INDICES]
        stock_infos = [symbols.EQUITIES[s] for s in symbols.DASHBOARD_STOCKS]

        outcomes = await self.fetch_many(index_infos + stock_infos)
        indices = settle(index_infos, outcomes[:len(index_infos)])
        stocks = settle(stock_infos, outcomes[len(index_infos):])
        logger.info(
            f"Fetched {len(indices.quotes)} indices and {len(stocks.quotes)} stocks"
        )
        return indices, stocks


def settle(infos: Sequence[SymbolInfo], outcomes: Sequence[Outcome]) -> QuoteBatch:
    """Keep quotes with a positive price; report everything else as unavailable."""
    batch = QuoteBatch()
    for info, outcome in zip(infos, outcomes):
        if isinstance(outcome, Ok) and outcome.value.price > 0:
            batch.quotes.append(outcome.value)
            continue
        reason = outcome.reason if isinstance(outcome, Failed) else "non-positive price"
        logger.warning(f"Quote unavailable for {info.symbol} ({info.provider_symbol}): {reason}")
        batch.unavailable.append(info.symbol)
    return batch
