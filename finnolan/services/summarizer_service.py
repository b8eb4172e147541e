"""Summarize a web article by URL."""
import logging
import re
from typing import Optional

from finnolan.domain.entities import ArticleSummary
from finnolan.domain.exceptions import (
    InputValidationError,
    PaymentRequiredError,
    ProviderError,
    RateLimitedError,
)
from finnolan.domain.interfaces import PageFetcher, TextGenerator
from finnolan.services.sentiment import ARTICLE_LEXICON, classify

logger = logging.getLogger(__name__)

DEFAULT_CHAR_LIMIT = 15000

_SCRIPT = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_STYLE = re.compile(r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")

SYSTEM_PROMPT = (
    "You are a financial news analyst. Summarize articles with key points, financial "
    "implications, and sentiment analysis. Format your response with bullet points."
)


def extract_text(html: str, limit: int = DEFAULT_CHAR_LIMIT) -> str:
    """Strip scripts, styles and tags, collapse whitespace, cap the length."""
    text = _SCRIPT.sub("", html)
    text = _STYLE.sub("", text)
    text = _TAG.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:limit]


class ArticleSummarizer:
    def __init__(
        self,
        fetcher: PageFetcher,
        generator: TextGenerator,
        char_limit: int = DEFAULT_CHAR_LIMIT,
        model: Optional[str] = None,
    ):
        self._fetcher = fetcher
        self._generator = generator
        self._char_limit = char_limit
        self._model = model

    async def summarize(self, url: str) -> ArticleSummary:
        url = (url or "").strip()
        if not url:
            raise InputValidationError("URL is required")
        if not url.lower().startswith(("http://", "https://")):
            raise InputValidationError("URL must start with http:// or https://")

        self._generator.ensure_configured()
        html = await self._fetcher.fetch(url)
        text = extract_text(html, self._char_limit)
        logger.info(f"Extracted {len(text)} characters from article")

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": (
                    "Summarize this article and provide:\n"
                    "1. Main topic and key points\n"
                    "2. Financial implications\n"
                    "3. Overall sentiment (positive/neutral/negative)\n\n"
                    f"Article:\n{text}"
                ),
            },
        ]
        try:
            summary = await self._generator.complete(messages, model=self._model)
        except (RateLimitedError, PaymentRequiredError):
            raise
        except ProviderError as e:
            logger.error(f"AI summarization failed: {e}")
            raise ProviderError(e.provider, "AI summarization failed", e.status_code) from e

        summary = summary.strip() or "Failed to generate summary"
        logger.info("Summary generated successfully")
        return ArticleSummary(
            summary=summary,
            sentiment=classify(summary, ARTICLE_LEXICON),
            url=url,
        )
