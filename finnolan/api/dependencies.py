"""FastAPI dependency injection setup."""
from datetime import timedelta
from typing import Optional

import httpx

from finnolan.config import Settings
from finnolan.domain.interfaces import QuoteProvider
from finnolan.infrastructure.gnews_client import GNewsClient
from finnolan.infrastructure.http import RetryPolicy
from finnolan.infrastructure.llm_client import ChatCompletionsClient
from finnolan.infrastructure.resend_client import ResendEmailSender
from finnolan.infrastructure.tts_client import GoogleTextToSpeechClient
from finnolan.infrastructure.web_client import HttpPageFetcher
from finnolan.infrastructure.yahoo_client import YahooQuoteProvider
from finnolan.repository.supabase_client import SupabaseConnection
from finnolan.repository.watchlist_repository import SupabaseWatchlistRepository
from finnolan.services.alert_service import AlertNotifier, WatchlistAlertService
from finnolan.services.chat_service import ChatService
from finnolan.services.news_service import NewsService
from finnolan.services.quote_service import QuoteService
from finnolan.services.recommendation_service import RecommendationService
from finnolan.services.speech_service import SpeechService
from finnolan.services.summarizer_service import ArticleSummarizer


# Application state (set during lifespan)
_settings: Optional[Settings] = None
_quote_service: Optional[QuoteService] = None
_news_service: Optional[NewsService] = None
_summarizer: Optional[ArticleSummarizer] = None
_recommendation_service: Optional[RecommendationService] = None
_speech_service: Optional[SpeechService] = None
_alert_notifier: Optional[AlertNotifier] = None
_watchlist_alert_service: Optional[WatchlistAlertService] = None
_chat_service: Optional[ChatService] = None


def init_services(
    settings: Settings,
    client: httpx.AsyncClient,
    quote_provider: Optional[QuoteProvider] = None,
) -> None:
    """Initialize all services with shared settings and HTTP client."""
    global _settings, _quote_service, _news_service, _summarizer
    global _recommendation_service, _speech_service, _alert_notifier
    global _watchlist_alert_service, _chat_service
    _settings = settings

    retry = RetryPolicy(attempts=settings.retry_attempts, backoff=settings.retry_backoff)
    generator = ChatCompletionsClient(client, settings, retry)
    notifier_repo = SupabaseWatchlistRepository(SupabaseConnection(client, settings, retry))

    _quote_service = QuoteService(quote_provider or YahooQuoteProvider())
    _news_service = NewsService(
        GNewsClient(client, settings, retry),
        generator,
        max_articles=settings.news_max_articles,
        article_model=settings.llm_fast_model,
        digest_model=settings.llm_model,
    )
    _summarizer = ArticleSummarizer(
        HttpPageFetcher(client, retry),
        generator,
        char_limit=settings.article_char_limit,
        model=settings.llm_model,
    )
    _recommendation_service = RecommendationService(
        _quote_service, generator, model=settings.llm_model
    )
    _speech_service = SpeechService(GoogleTextToSpeechClient(client, settings, retry))
    _alert_notifier = AlertNotifier(ResendEmailSender(client, settings, retry), notifier_repo)
    _watchlist_alert_service = WatchlistAlertService(
        _quote_service,
        _alert_notifier,
        cooldown=timedelta(minutes=settings.alert_cooldown_minutes),
    )
    _chat_service = ChatService(generator, model=settings.llm_model)


def _initialized(service):
    if service is None:
        raise RuntimeError("Services not initialized")
    return service


def get_settings() -> Settings:
    return _initialized(_settings)


def get_quote_service() -> QuoteService:
    return _initialized(_quote_service)


def get_news_service() -> NewsService:
    return _initialized(_news_service)


def get_summarizer() -> ArticleSummarizer:
    return _initialized(_summarizer)


def get_recommendation_service() -> RecommendationService:
    return _initialized(_recommendation_service)


def get_speech_service() -> SpeechService:
    return _initialized(_speech_service)


def get_alert_notifier() -> AlertNotifier:
    return _initialized(_alert_notifier)


def get_watchlist_alert_service() -> WatchlistAlertService:
    return _initialized(_watchlist_alert_service)


def get_chat_service() -> ChatService:
    return _initialized(_chat_service)
