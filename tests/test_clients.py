"""Tests for provider adapters against a mocked HTTP transport."""
import json

import httpx
import pytest

from finnolan.config import Settings
from finnolan.domain.exceptions import (
    ConfigurationError,
    DatastoreError,
    PaymentRequiredError,
    ProviderError,
    RateLimitedError,
)
from finnolan.infrastructure.gnews_client import GNewsClient
from finnolan.infrastructure.http import RetryPolicy
from finnolan.infrastructure.llm_client import ChatCompletionsClient
from finnolan.infrastructure.resend_client import ResendEmailSender
from finnolan.infrastructure.tts_client import GoogleTextToSpeechClient
from finnolan.infrastructure.web_client import HttpPageFetcher
from finnolan.repository.supabase_client import SupabaseConnection
from finnolan.repository.watchlist_repository import SupabaseWatchlistRepository
from finnolan.services.speech_service import SpeechService


@pytest.fixture
def transport():
    """Records requests and answers with whatever ``transport.reply`` returns."""

    class Recorder:
        def __init__(self):
            self.requests = []
            self.reply = lambda request: httpx.Response(200, json={})

        def __call__(self, request):
            self.requests.append(request)
            return self.reply(request)

    return Recorder()


@pytest.fixture
def http_client(transport):
    return httpx.AsyncClient(transport=httpx.MockTransport(transport))


@pytest.fixture
def retry():
    return RetryPolicy()


# GNews

@pytest.mark.asyncio
async def test_gnews_search_parses_articles(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(
        200,
        json={
            "totalArticles": 1,
            "articles": [
                {
                    "title": "Sensex closes higher",
                    "description": "Benchmarks gained for a third session.",
                    "content": "Full text",
                    "url": "https://news.example.com/sensex",
                    "publishedAt": "2024-05-01T09:30:00Z",
                    "source": {"name": "Mint", "url": "https://mint.example.com"},
                }
            ],
        },
    )

    items = await GNewsClient(http_client, settings, retry).search("sensex", "en", 10)

    params = transport.requests[0].url.params
    assert params["q"] == "sensex"
    assert params["lang"] == "en"
    assert params["max"] == "10"
    assert params["apikey"] == "gnews-key"
    assert items[0].title == "Sensex closes higher"
    assert items[0].source_name == "Mint"
    assert items[0].published_at.year == 2024


@pytest.mark.asyncio
async def test_gnews_error_status_raises(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(403, json={"errors": ["Forbidden"]})

    with pytest.raises(ProviderError) as exc_info:
        await GNewsClient(http_client, settings, retry).search("sensex", "en", 10)
    assert exc_info.value.message == "GNews API error: 403"


@pytest.mark.asyncio
async def test_gnews_requires_api_key(http_client, transport, retry):
    with pytest.raises(ConfigurationError) as exc_info:
        await GNewsClient(http_client, Settings(), retry).search("sensex", "en", 10)
    assert "GNEWS_API_KEY" in exc_info.value.message
    assert transport.requests == []


# Generation provider

@pytest.mark.asyncio
async def test_chat_completion_returns_first_choice(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(
        200, json={"choices": [{"message": {"role": "assistant", "content": "Hello"}}]}
    )

    text = await ChatCompletionsClient(http_client, settings, retry).complete(
        [{"role": "user", "content": "Hi"}]
    )

    request = transport.requests[0]
    assert text == "Hello"
    assert str(request.url) == "https://ai.gateway.lovable.dev/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer llm-key"
    assert json.loads(request.content)["model"] == settings.llm_model


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,error_type,expected_status",
    [(429, RateLimitedError, 429), (402, PaymentRequiredError, 402)],
)
async def test_chat_completion_distinguishes_quota_errors(
    http_client, transport, settings, retry, status, error_type, expected_status
):
    transport.reply = lambda request: httpx.Response(status, json={})

    with pytest.raises(error_type) as exc_info:
        await ChatCompletionsClient(http_client, settings, retry).complete(
            [{"role": "user", "content": "Hi"}]
        )
    assert exc_info.value.http_status == expected_status


@pytest.mark.asyncio
async def test_chat_completion_other_errors(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(
        500, json={"error": {"message": "upstream model unavailable"}}
    )

    with pytest.raises(ProviderError) as exc_info:
        await ChatCompletionsClient(http_client, settings, retry).complete(
            [{"role": "user", "content": "Hi"}]
        )
    assert exc_info.value.message == "upstream model unavailable"
    assert exc_info.value.http_status == 500


@pytest.mark.asyncio
async def test_chat_completion_malformed_body(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(200, json={"choices": []})

    with pytest.raises(ProviderError):
        await ChatCompletionsClient(http_client, settings, retry).complete(
            [{"role": "user", "content": "Hi"}]
        )


def test_generator_configuration_check(http_client, retry):
    with pytest.raises(ConfigurationError):
        ChatCompletionsClient(http_client, Settings(), retry).ensure_configured()


# Article host

@pytest.mark.asyncio
async def test_page_fetcher_error_status(http_client, transport, retry):
    transport.reply = lambda request: httpx.Response(404, text="missing")

    with pytest.raises(ProviderError) as exc_info:
        await HttpPageFetcher(http_client, retry).fetch("https://news.example.com/gone")
    assert exc_info.value.message == "Failed to fetch article: 404"


@pytest.mark.asyncio
async def test_page_fetcher_sends_browser_user_agent(http_client, transport, retry):
    transport.reply = lambda request: httpx.Response(200, text="<p>Body</p>")

    html = await HttpPageFetcher(http_client, retry).fetch("https://news.example.com/a")

    assert html == "<p>Body</p>"
    assert transport.requests[0].headers["User-Agent"].startswith("Mozilla/5.0")


# Speech synthesis

@pytest.mark.asyncio
async def test_kannada_request_uses_kannada_voice(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(200, json={"audioContent": "QUJD"})
    service = SpeechService(GoogleTextToSpeechClient(http_client, settings, retry))

    audio = await service.speak("Hello", "kn")

    body = json.loads(transport.requests[0].content)
    assert audio == "QUJD"
    assert body["voice"] == {"languageCode": "kn-IN", "name": "kn-IN-Standard-A"}
    assert body["audioConfig"] == {"audioEncoding": "MP3"}
    assert transport.requests[0].url.params["key"] == "tts-key"


@pytest.mark.asyncio
async def test_tts_propagates_provider_message(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(
        400, json={"error": {"code": 400, "message": "Voice not found"}}
    )

    with pytest.raises(ProviderError) as exc_info:
        await GoogleTextToSpeechClient(http_client, settings, retry).synthesize(
            "Hello", "kn-IN", "kn-IN-Standard-A"
        )
    assert exc_info.value.message == "Voice not found"


# Email

@pytest.mark.asyncio
async def test_resend_sends_from_configured_sender(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(200, json={"id": "email_1"})

    response = await ResendEmailSender(http_client, settings, retry).send(
        ["user@example.com"], "Subject", "<p>Body</p>"
    )

    body = json.loads(transport.requests[0].content)
    assert response == {"id": "email_1"}
    assert body["from"] == settings.alert_sender
    assert body["to"] == ["user@example.com"]
    assert transport.requests[0].headers["Authorization"] == "Bearer resend-key"


@pytest.mark.asyncio
async def test_resend_failure_raises(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(
        422, json={"statusCode": 422, "message": "Invalid `to` field"}
    )

    with pytest.raises(ProviderError) as exc_info:
        await ResendEmailSender(http_client, settings, retry).send(["bad"], "S", "B")
    assert exc_info.value.message == "Invalid `to` field"


@pytest.mark.asyncio
async def test_resend_accepts_non_json_success_body(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(200, text="queued")

    response = await ResendEmailSender(http_client, settings, retry).send(
        ["user@example.com"], "Subject", "<p>Body</p>"
    )

    assert response == {}
    assert len(transport.requests) == 1


# Datastore

@pytest.mark.asyncio
async def test_mark_alert_sent_patches_watchlist_row(http_client, transport, settings, retry):
    from datetime import datetime, timezone

    transport.reply = lambda request: httpx.Response(204)
    repository = SupabaseWatchlistRepository(SupabaseConnection(http_client, settings, retry))
    sent_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    await repository.mark_alert_sent("42", sent_at)

    request = transport.requests[0]
    assert request.method == "PATCH"
    assert request.url.path == "/rest/v1/watchlist"
    assert request.url.params["id"] == "eq.42"
    assert request.headers["apikey"] == "service-key"
    assert json.loads(request.content) == {"last_alert_sent": "2024-05-01T12:00:00+00:00"}


@pytest.mark.asyncio
async def test_datastore_rejection_raises(http_client, transport, settings, retry):
    transport.reply = lambda request: httpx.Response(401, json={"message": "Invalid API key"})
    connection = SupabaseConnection(http_client, settings, retry)

    with pytest.raises(DatastoreError) as exc_info:
        await connection.update("watchlist", {"last_alert_sent": "now"}, {"id": "eq.1"})
    assert exc_info.value.message == "Invalid API key"
