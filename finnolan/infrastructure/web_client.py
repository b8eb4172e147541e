"""Plain web document fetcher used by the article summarizer."""
import logging

import httpx

from finnolan.domain.exceptions import ProviderError
from finnolan.domain.interfaces import PageFetcher
from finnolan.infrastructure.http import RetryPolicy

logger = logging.getLogger(__name__)

PROVIDER = "article host"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class HttpPageFetcher(PageFetcher):
    def __init__(self, client: httpx.AsyncClient, retry: RetryPolicy):
        self._client = client
        self._retry = retry

    async def fetch(self, url: str) -> str:
        logger.info(f"Fetching article from URL: {url}")
        response = await self._retry.send(
            self._client,
            PROVIDER,
            "GET",
            url,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
        if response.status_code != 200:
            raise ProviderError(
                PROVIDER, f"Failed to fetch article: {response.status_code}", response.status_code
            )
        return response.text
