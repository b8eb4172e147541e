"""Shared HTTP plumbing: retry policy and settled batch execution."""
import asyncio
import logging
from typing import Awaitable, Iterable, List

import httpx

from finnolan.domain.exceptions import ProviderError
from finnolan.domain.results import Failed, Ok, Outcome

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class RetryPolicy:
    """Explicit retry policy for outbound provider requests.

    ``attempts=1`` means a single try with no retry. Transport errors and
    statuses in ``retry_on_status`` are retried with exponential backoff;
    any other response is returned to the caller as-is.
    """

    def __init__(
        self,
        attempts: int = 1,
        backoff: float = 1.0,
        retry_on_status: Iterable[int] = RETRYABLE_STATUS,
    ):
        self.attempts = max(1, attempts)
        self.backoff = backoff
        self.retry_on_status = frozenset(retry_on_status)

    def _delay(self, attempt: int) -> float:
        return self.backoff * (2 ** attempt)

    async def send(
        self,
        client: httpx.AsyncClient,
        provider: str,
        method: str,
        url: str,
        **kwargs,
    ) -> httpx.Response:
        """Issue a request, retrying per policy. Raises ProviderError on transport failure."""
        for attempt in range(self.attempts):
            last_attempt = attempt == self.attempts - 1
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                if last_attempt:
                    raise ProviderError(provider, f"{provider} request failed: {e}") from e
                wait_time = self._delay(attempt)
                logger.warning(f"{provider} network error: {e}. Retrying in {wait_time:.2f}s...")
                await asyncio.sleep(wait_time)
                continue

            if response.status_code in self.retry_on_status and not last_attempt:
                wait_time = self._delay(attempt)
                logger.warning(
                    f"{provider} returned {response.status_code}. Retrying in {wait_time:.2f}s..."
                )
                await asyncio.sleep(wait_time)
                continue
            return response

        # attempts >= 1 guarantees the loop returns or raises
        raise ProviderError(provider, f"{provider} request failed after {self.attempts} attempts")


async def gather_settled(tasks: Iterable[Awaitable]) -> List[Outcome]:
    """Run awaitables concurrently; return Ok/Failed per task in input order."""
    results = await asyncio.gather(*tasks, return_exceptions=True)
    outcomes: List[Outcome] = []
    for result in results:
        if isinstance(result, Exception):
            outcomes.append(Failed(str(result) or type(result).__name__))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(Ok(result))
    return outcomes


def error_message(response: httpx.Response, default: str) -> str:
    """Best-effort extraction of a provider's error message from a JSON body."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error.get("message") or default
        if isinstance(error, str):
            return error
        if isinstance(body.get("message"), str):
            return body["message"]
        if isinstance(body.get("errors"), list) and body["errors"]:
            return str(body["errors"][0])
    return default
