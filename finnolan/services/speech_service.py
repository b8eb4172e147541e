"""Text-to-speech business logic."""
from typing import Dict, Tuple
import logging

from finnolan.domain.exceptions import InputValidationError
from finnolan.domain.interfaces import SpeechSynthesizer

logger = logging.getLogger(__name__)

DEFAULT_VOICE = ("en-US", "en-US-Standard-A")

# language code -> (locale, voice name)
VOICES: Dict[str, Tuple[str, str]] = {
    "en": DEFAULT_VOICE,
    "hi": ("hi-IN", "hi-IN-Standard-A"),
    "kn": ("kn-IN", "kn-IN-Standard-A"),
    "te": ("te-IN", "te-IN-Standard-A"),
    "ta": ("ta-IN", "ta-IN-Standard-A"),
}


def voice_for(language: str) -> Tuple[str, str]:
    """Locale and voice for a language code; unknown codes get English."""
    return VOICES.get((language or "").strip().lower(), DEFAULT_VOICE)


class SpeechService:
    def __init__(self, synthesizer: SpeechSynthesizer):
        self._synthesizer = synthesizer

    async def speak(self, text: str, language: str = "en") -> str:
        """Return base64 MP3 audio for the text."""
        if not text or not text.strip():
            # Surfaced as a generic 500 failure.
            raise InputValidationError("Text is required", http_status=500)
        locale, voice = voice_for(language)
        logger.info(f"Synthesizing {len(text)} characters with voice {voice}")
        return await self._synthesizer.synthesize(text, locale, voice)
