"""Speech endpoints: text-to-speech and speech-to-text with pronunciation scores."""

import base64
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from lingopal.middleware.security import ai_route_limit

from .client import SpeechClient, SpeechNotRecognizedError
from .schemas import SpeechToTextResponse, TextToSpeechRequest, TextToSpeechResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/speech", tags=["speech"], dependencies=[Depends(ai_route_limit)])

MAX_AUDIO_BYTES = 100 * 1024 * 1024
DEFAULT_REFERENCE_TEXT = "It's a sunny day"
_WAVE_TYPES = {"audio/wave", "audio/wav", "audio/x-wav", "audio/vnd.wave"}


def get_speech_client() -> SpeechClient:
    return SpeechClient.from_settings()


SpeechClientDep = Annotated[SpeechClient, Depends(get_speech_client)]


@router.post("/text-to-speech")
async def text_to_speech(data: TextToSpeechRequest, client: SpeechClientDep) -> TextToSpeechResponse:
    """Synthesize speech and return base64-encoded MP3 audio."""
    audio = await client.synthesize(data.text)
    return TextToSpeechResponse(audioContent=base64.b64encode(audio).decode("ascii"))


@router.post("/speech-to-text")
async def speech_to_text(
    request: Request,
    client: SpeechClientDep,
    reference_text: str = Query(default=DEFAULT_REFERENCE_TEXT, min_length=1),
) -> SpeechToTextResponse:
    """Transcribe a WAV upload and score its pronunciation against ``reference_text``."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type not in _WAVE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Body must be audio/wave",
        )

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > MAX_AUDIO_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Audio exceeds 100 MB")

    audio = await request.body()
    if not audio:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Audio body is empty")
    if len(audio) > MAX_AUDIO_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Audio exceeds 100 MB")

    recognition = await client.recognize(audio)
    try:
        scores = await client.assess_pronunciation(audio, reference_text)
    except SpeechNotRecognizedError as e:
        logger.info("Pronunciation assessment found no speech")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    return SpeechToTextResponse(recognition=recognition, pronunciationScores=scores)
