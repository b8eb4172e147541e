"""Resend transactional email client."""
import logging
from typing import List

import httpx

from finnolan.config import Settings
from finnolan.domain.exceptions import ProviderError
from finnolan.domain.interfaces import EmailSender
from finnolan.infrastructure.http import RetryPolicy, error_message

logger = logging.getLogger(__name__)

PROVIDER = "Resend"


class ResendEmailSender(EmailSender):
    BASE_URL = "https://api.resend.com"

    def __init__(self, client: httpx.AsyncClient, settings: Settings, retry: RetryPolicy):
        self._client = client
        self._settings = settings
        self._retry = retry

    async def send(self, to: List[str], subject: str, html: str) -> dict:
        api_key = self._settings.require("resend_api_key")
        response = await self._retry.send(
            self._client,
            PROVIDER,
            "POST",
            f"{self.BASE_URL}/emails",
            headers={"Authorization": f"Bearer {api_key}"},
            json={
                "from": self._settings.alert_sender,
                "to": to,
                "subject": subject,
                "html": html,
            },
        )
        if response.status_code not in (200, 201):
            message = error_message(response, f"Email send failed: {response.status_code}")
            raise ProviderError(PROVIDER, message, response.status_code)

        # The email is already accepted at this point.
        try:
            return response.json()
        except ValueError:
            logger.warning(f"Email accepted with a non-JSON body: {response.text[:200]!r}")
            return {}
