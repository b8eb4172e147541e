"""GNews search client."""
import logging
from datetime import datetime
from typing import List, Optional

import httpx

from finnolan.config import Settings
from finnolan.domain.entities import NewsItem
from finnolan.domain.exceptions import ProviderError
from finnolan.domain.interfaces import NewsSearchProvider
from finnolan.infrastructure.http import RetryPolicy

logger = logging.getLogger(__name__)

PROVIDER = "GNews"


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class GNewsClient(NewsSearchProvider):
    """Client for gnews.io v4 search."""

    BASE_URL = "https://gnews.io/api/v4"

    def __init__(self, client: httpx.AsyncClient, settings: Settings, retry: RetryPolicy):
        self._client = client
        self._settings = settings
        self._retry = retry

    async def search(self, query: str, language: str, max_results: int) -> List[NewsItem]:
        api_key = self._settings.require("gnews_api_key")
        response = await self._retry.send(
            self._client,
            PROVIDER,
            "GET",
            f"{self.BASE_URL}/search",
            params={"q": query, "lang": language, "max": max_results, "apikey": api_key},
        )
        if response.status_code != 200:
            logger.error(f"GNews API error: {response.status_code} {response.text[:200]}")
            raise ProviderError(PROVIDER, f"GNews API error: {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(PROVIDER, "GNews API returned a malformed body") from e

        items = []
        for raw in data.get("articles") or []:
            source = raw.get("source") or {}
            items.append(
                NewsItem(
                    title=raw.get("title") or "",
                    description=raw.get("description"),
                    content=raw.get("content"),
                    url=raw.get("url") or "",
                    source_name=source.get("name") or "",
                    published_at=_parse_timestamp(raw.get("publishedAt")),
                )
            )
        logger.info(f"Fetched {len(items)} articles")
        return items
