"""Google Cloud Text-to-Speech client."""
import logging

import httpx

from finnolan.config import Settings
from finnolan.domain.exceptions import ProviderError
from finnolan.domain.interfaces import SpeechSynthesizer
from finnolan.infrastructure.http import RetryPolicy, error_message

logger = logging.getLogger(__name__)

PROVIDER = "Google Text-to-Speech"


class GoogleTextToSpeechClient(SpeechSynthesizer):
    BASE_URL = "https://texttospeech.googleapis.com/v1"

    def __init__(self, client: httpx.AsyncClient, settings: Settings, retry: RetryPolicy):
        self._client = client
        self._settings = settings
        self._retry = retry

    async def synthesize(self, text: str, language_code: str, voice_name: str) -> str:
        api_key = self._settings.require("google_tts_api_key")
        response = await self._retry.send(
            self._client,
            PROVIDER,
            "POST",
            f"{self.BASE_URL}/text:synthesize",
            params={"key": api_key},
            json={
                "input": {"text": text},
                "voice": {"languageCode": language_code, "name": voice_name},
                "audioConfig": {"audioEncoding": "MP3"},
            },
        )
        if response.status_code != 200:
            message = error_message(response, "Failed to generate speech")
            logger.error(f"Text-to-speech error: {response.status_code} {message}")
            raise ProviderError(PROVIDER, message, response.status_code)

        try:
            return response.json()["audioContent"]
        except (ValueError, KeyError) as e:
            raise ProviderError(PROVIDER, "Text-to-speech returned no audio content") from e
