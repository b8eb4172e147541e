"""OpenAI-compatible chat-completions client for the AI gateway."""
import logging
from typing import Dict, List, Optional

import httpx

from finnolan.config import Settings
from finnolan.domain.exceptions import PaymentRequiredError, ProviderError, RateLimitedError
from finnolan.domain.interfaces import TextGenerator
from finnolan.infrastructure.http import RetryPolicy, error_message

logger = logging.getLogger(__name__)

PROVIDER = "AI gateway"


class ChatCompletionsClient(TextGenerator):
    """Calls ``POST {base_url}/chat/completions`` and returns the first choice."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings, retry: RetryPolicy):
        self._client = client
        self._settings = settings
        self._retry = retry

    def ensure_configured(self) -> None:
        self._settings.require("llm_api_key")

    async def complete(
        self, messages: List[Dict[str, str]], model: Optional[str] = None
    ) -> str:
        api_key = self._settings.require("llm_api_key")
        response = await self._retry.send(
            self._client,
            PROVIDER,
            "POST",
            f"{self._settings.llm_base_url.rstrip('/')}/chat/completions",
            headers={"Authorization": f"Bearer {api_key}"},
            json={"model": model or self._settings.llm_model, "messages": messages},
        )

        if response.status_code == 429:
            raise RateLimitedError(
                PROVIDER, "Rate limits exceeded, please try again later.", 429
            )
        if response.status_code == 402:
            raise PaymentRequiredError(
                PROVIDER, "Payment required, please add funds to your AI workspace.", 402
            )
        if response.status_code != 200:
            logger.error(f"AI gateway error: {response.status_code}")
            message = error_message(response, f"AI gateway error: {response.status_code}")
            raise ProviderError(PROVIDER, message, response.status_code)

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(PROVIDER, "AI gateway returned a malformed body") from e
        return content or ""
