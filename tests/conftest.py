"""Pytest configuration and fixtures."""
from datetime import datetime, timezone
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from finnolan.api import dependencies
from finnolan.config import Settings
from finnolan.domain.entities import NewsItem, Quote, SymbolInfo
from finnolan.domain.exceptions import ConfigurationError, ProviderError
from finnolan.domain.interfaces import QuoteProvider, TextGenerator
from finnolan.services.alert_service import AlertNotifier, WatchlistAlertService
from finnolan.services.chat_service import ChatService
from finnolan.services.news_service import NewsService
from finnolan.services.quote_service import QuoteService
from finnolan.services.recommendation_service import RecommendationService
from finnolan.services.speech_service import SpeechService
from finnolan.services.summarizer_service import ArticleSummarizer

# provider symbol -> (price, previous close, volume)
DEFAULT_PRICES = {
    "^NSEI": (22500.0, 22400.0, 0),
    "^BSESN": (74000.0, 74200.0, 0),
    "^NSEBANK": (48000.0, 47900.0, 0),
    "RELIANCE.NS": (2900.0, 2850.0, 5_432_100),
    "TCS.NS": (3900.0, 3950.0, 2_100_000),
    "HDFCBANK.NS": (1500.0, 1490.0, 12_500_000),
    "INFY.NS": (1600.0, 1610.0, 800_000),
    "ICICIBANK.NS": (1100.0, 1095.0, 45_000),
}


class FakeQuoteProvider(QuoteProvider):
    """Serves quotes from an in-memory price table; unknown symbols fail."""

    def __init__(self, prices: Optional[Dict[str, tuple]] = None):
        self.prices = dict(DEFAULT_PRICES if prices is None else prices)
        self.calls: List[str] = []

    async def fetch_quote(self, info: SymbolInfo) -> Quote:
        self.calls.append(info.provider_symbol)
        if info.provider_symbol not in self.prices:
            raise ProviderError(
                "fake", f"No price data available for symbol: {info.provider_symbol!r}"
            )
        price, previous_close, volume = self.prices[info.provider_symbol]
        return Quote.from_prices(
            symbol=info.symbol,
            display_name=info.name,
            price=price,
            previous_close=previous_close,
            volume=volume,
            high52w=price * 1.2,
            low52w=price * 0.8,
        )


class ScriptedGenerator(TextGenerator):
    """Text generator double that records every call."""

    def __init__(self, reply: str = "", responder=None, error: Exception = None):
        self.reply = reply
        self.responder = responder
        self.error = error
        self.configured = True
        self.calls: List[dict] = []

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("LOVABLE_API_KEY is not configured")

    async def complete(self, messages, model=None) -> str:
        self.calls.append({"messages": messages, "model": model})
        if self.error is not None:
            raise self.error
        if self.responder is not None:
            return self.responder(messages)
        return self.reply


@pytest.fixture
def settings():
    """Settings with every provider configured."""
    return Settings(
        gnews_api_key="gnews-key",
        llm_api_key="llm-key",
        google_tts_api_key="tts-key",
        resend_api_key="resend-key",
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-key",
        retry_backoff=0.0,
    )


@pytest.fixture
def quote_provider():
    return FakeQuoteProvider()


@pytest.fixture
def quote_service(quote_provider):
    return QuoteService(quote_provider)


@pytest.fixture
def generator():
    return ScriptedGenerator(reply="Markets showed strong growth this quarter.")


@pytest.fixture
def news_items():
    return [
        NewsItem(
            title="Reliance posts record profit",
            description="Reliance Industries reported its highest quarterly profit.",
            content="Full content about Reliance results.",
            url="https://news.example.com/reliance-profit",
            source_name="Economic Times",
            published_at=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
        ),
        NewsItem(
            title="Reliance retail arm expands",
            description="The retail unit opened 200 new stores.",
            content=None,
            url="https://news.example.com/reliance-retail",
            source_name="Mint",
        ),
    ]


@pytest.fixture
def news_search(news_items):
    search = MagicMock()
    search.search = AsyncMock(return_value=news_items)
    return search


@pytest.fixture
def page_fetcher():
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(
        return_value=(
            "<html><head><style>body { color: red; }</style>"
            "<script>var tracking = 1;</script></head>"
            "<body><h1>Sensex rallies</h1><p>Markets closed higher on strong buying.</p></body></html>"
        )
    )
    return fetcher


@pytest.fixture
def synthesizer():
    tts = MagicMock()
    tts.synthesize = AsyncMock(return_value="SUQzBAAAAAAA")
    return tts


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send = AsyncMock(return_value={"id": "email_123"})
    return sender


@pytest.fixture
def watchlist_repository():
    repository = MagicMock()
    repository.mark_alert_sent = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def notifier(email_sender, watchlist_repository):
    return AlertNotifier(email_sender, watchlist_repository)


@pytest.fixture
def client(
    settings,
    quote_service,
    generator,
    news_search,
    page_fetcher,
    synthesizer,
    notifier,
):
    """TestClient with every service built from test doubles."""
    from finnolan.main import app

    overrides = {
        dependencies.get_settings: lambda: settings,
        dependencies.get_quote_service: lambda: quote_service,
        dependencies.get_news_service: lambda: NewsService(news_search, generator),
        dependencies.get_summarizer: lambda: ArticleSummarizer(page_fetcher, generator),
        dependencies.get_recommendation_service: lambda: RecommendationService(
            quote_service, generator
        ),
        dependencies.get_speech_service: lambda: SpeechService(synthesizer),
        dependencies.get_alert_notifier: lambda: notifier,
        dependencies.get_watchlist_alert_service: lambda: WatchlistAlertService(
            quote_service, notifier
        ),
        dependencies.get_chat_service: lambda: ChatService(generator),
    }
    app.dependency_overrides.update(overrides)
    yield TestClient(app)
    app.dependency_overrides.clear()
