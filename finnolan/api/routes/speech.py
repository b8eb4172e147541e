"""Text-to-speech endpoint."""
from fastapi import APIRouter, Depends, HTTPException
import logging

from finnolan.api.dependencies import get_speech_service
from finnolan.api.schemas import ERROR_RESPONSES, SpeechRequest, SpeechResponse
from finnolan.domain.exceptions import FinnolanError
from finnolan.services.speech_service import SpeechService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["speech"], responses=ERROR_RESPONSES)


@router.post("/speech", response_model=SpeechResponse)
async def text_to_speech(
    body: SpeechRequest,
    service: SpeechService = Depends(get_speech_service),
) -> SpeechResponse:
    """Synthesize speech; returns base64 MP3."""
    try:
        audio = await service.speak(body.text, body.language)
        return SpeechResponse(audio_content=audio)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Text-to-speech error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
