"""News search with per-article AI summaries and an executive summary."""
from typing import List, Optional
import logging

from finnolan.domain.entities import Article, NewsDigest, NewsItem, Sentiment
from finnolan.domain.exceptions import FinnolanError, InputValidationError
from finnolan.domain.interfaces import NewsSearchProvider, TextGenerator
from finnolan.domain.results import Ok, Outcome
from finnolan.infrastructure.http import gather_settled
from finnolan.services.sentiment import NEWS_LEXICON, classify

logger = logging.getLogger(__name__)

NO_ARTICLES_SUMMARY = "No articles found for this query."
NO_SUMMARY = "No summary available"
NO_DESCRIPTION = "No description available"

ARTICLE_PROMPT = (
    "You are a financial news analyst. Summarize news articles concisely in 2-3 "
    "sentences, focusing on key financial implications."
)
DIGEST_PROMPT = (
    "You are a financial analyst. Create an executive summary of news trends in bullet points."
)


class NewsService:
    """Fetches news for a query and enriches it with generated summaries."""

    def __init__(
        self,
        search: NewsSearchProvider,
        generator: TextGenerator,
        max_articles: int = 10,
        article_model: Optional[str] = None,
        digest_model: Optional[str] = None,
    ):
        self._search = search
        self._generator = generator
        self._max_articles = max_articles
        self._article_model = article_model
        self._digest_model = digest_model

    async def search(self, query: str, language: str = "en") -> NewsDigest:
        query = (query or "").strip()
        if not query:
            raise InputValidationError("Query parameter is required and cannot be empty")
        language = (language or "en").strip() or "en"

        self._generator.ensure_configured()
        logger.info(f"Fetching news for query: {query}, language: {language}")
        items = await self._search.search(query, language, self._max_articles)
        if not items:
            return NewsDigest(articles=[], summary=NO_ARTICLES_SUMMARY)

        outcomes = await gather_settled(self._summarize(item) for item in items)
        articles = [build_article(item, outcome) for item, outcome in zip(items, outcomes)]
        summary = await self._executive_summary(articles)
        return NewsDigest(articles=articles, summary=summary)

    async def _summarize(self, item: NewsItem) -> str:
        messages = [
            {"role": "system", "content": ARTICLE_PROMPT},
            {
                "role": "user",
                "content": (
                    f"Summarize this article:\n\nTitle: {item.title}\n\n"
                    f"Content: {item.description or item.content or ''}"
                ),
            },
        ]
        return await self._generator.complete(messages, model=self._article_model)

    async def _executive_summary(self, articles: List[Article]) -> str:
        headlines = "\n".join(article.headline for article in articles)
        messages = [
            {"role": "system", "content": DIGEST_PROMPT},
            {
                "role": "user",
                "content": f"Create an executive summary for these news headlines:\n\n{headlines}",
            },
        ]
        try:
            summary = await self._generator.complete(messages, model=self._digest_model)
        except FinnolanError as e:
            logger.error(f"Executive summary failed: {e}")
            return NO_SUMMARY
        return summary.strip() or NO_SUMMARY


def build_article(item: NewsItem, outcome: Outcome) -> Article:
    """Article from a search hit and its summary outcome; failures keep the raw description."""
    full_text = item.content or item.description or ""
    generated = outcome.value.strip() if isinstance(outcome, Ok) else ""

    if generated:
        snippet = generated
        sentiment = classify(generated, NEWS_LEXICON)
    else:
        if not isinstance(outcome, Ok):
            logger.error(f"AI summary error for article \"{item.title}\": {outcome.reason}")
        snippet = item.description or NO_DESCRIPTION
        sentiment = Sentiment.NEUTRAL

    return Article(
        headline=item.title,
        snippet=snippet,
        source=item.source_name,
        link=item.url,
        published_at=item.published_at,
        sentiment=sentiment,
        full_text=full_text,
    )
