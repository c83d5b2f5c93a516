"""Client for the cloud speech service REST API (text-to-speech, recognition, pronunciation)."""

import base64
import json
import logging
from typing import Any
from xml.sax.saxutils import escape, quoteattr

import httpx

from lingopal.config.settings import Settings, get_settings
from lingopal.middleware.error_handlers import ExternalServiceError

from .schemas import PronunciationScores


logger = logging.getLogger(__name__)

_TTS_OUTPUT_FORMAT = "audio-16khz-128kbitrate-mono-mp3"
_WAVE_CONTENT_TYPE = "audio/wav; codecs=audio/pcm; samplerate=16000"


class SpeechNotRecognizedError(Exception):
    """The service returned no recognised speech for the audio."""


class SpeechClient:
    """Thin async wrapper over the speech REST endpoints."""

    def __init__(self, key: str, region: str, language: str, voice: str, timeout: float = 30.0) -> None:
        self.key = key
        self.region = region
        self.language = language
        self.voice = voice
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SpeechClient":
        settings = settings or get_settings()
        return cls(
            key=settings.SPEECH_KEY,
            region=settings.SPEECH_REGION,
            language=settings.SPEECH_LANGUAGE,
            voice=settings.SPEECH_VOICE,
            timeout=settings.SPEECH_TIMEOUT,
        )

    @property
    def tts_url(self) -> str:
        return f"https://{self.region}.tts.speech.microsoft.com/cognitiveservices/v1"

    @property
    def stt_url(self) -> str:
        return (
            f"https://{self.region}.stt.speech.microsoft.com"
            "/speech/recognition/conversation/cognitiveservices/v1"
        )

    def build_ssml(self, text: str) -> str:
        return (
            f"<speak version='1.0' xml:lang={quoteattr(self.language)}>"
            f"<voice xml:lang={quoteattr(self.language)} name={quoteattr(self.voice)}>"
            f"{escape(text)}"
            "</voice></speak>"
        )

    async def _post(self, url: str, content: bytes, headers: dict[str, str], params: dict[str, str] | None = None) -> httpx.Response:
        if not self.key:
            raise ExternalServiceError("Speech", "speech service is not configured")
        headers = {"Ocp-Apim-Subscription-Key": self.key, **headers}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, content=content, headers=headers, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Speech service returned {e.response.status_code}: {e.response.text[:200]}")
            raise ExternalServiceError("Speech", f"status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.exception("Speech service request failed")
            raise ExternalServiceError("Speech", str(e) or type(e).__name__) from e
        return response

    async def synthesize(self, text: str) -> bytes:
        """Render ``text`` to MP3 audio."""
        response = await self._post(
            self.tts_url,
            self.build_ssml(text).encode("utf-8"),
            headers={
                "Content-Type": "application/ssml+xml",
                "X-Microsoft-OutputFormat": _TTS_OUTPUT_FORMAT,
                "User-Agent": "lingopal",
            },
        )
        return response.content

    async def recognize(self, audio: bytes) -> dict[str, Any]:
        """Transcribe WAV audio, returning the service's detailed result."""
        response = await self._post(
            self.stt_url,
            audio,
            headers={"Content-Type": _WAVE_CONTENT_TYPE, "Accept": "application/json"},
            params={"language": self.language, "format": "detailed"},
        )
        return response.json()

    async def assess_pronunciation(self, audio: bytes, reference_text: str) -> PronunciationScores:
        """Score WAV audio against ``reference_text`` on a hundred-mark scale."""
        config = {
            "ReferenceText": reference_text,
            "GradingSystem": "HundredMark",
            "Granularity": "Phoneme",
            "Dimension": "Comprehensive",
            "EnableMiscue": True,
            "EnableProsodyAssessment": True,
        }
        response = await self._post(
            self.stt_url,
            audio,
            headers={
                "Content-Type": _WAVE_CONTENT_TYPE,
                "Accept": "application/json",
                "Pronunciation-Assessment": base64.b64encode(json.dumps(config).encode("utf-8")).decode("ascii"),
            },
            params={"language": self.language, "format": "detailed"},
        )
        return parse_pronunciation_result(response.json())


def parse_pronunciation_result(payload: dict[str, Any]) -> PronunciationScores:
    """Pull the four headline scores out of a detailed recognition result.

    Scores sit either directly on the best hypothesis or under its
    ``PronunciationAssessment`` key, depending on the API version.
    """
    if payload.get("RecognitionStatus") != "Success" or not payload.get("NBest"):
        msg = "Speech not recognized"
        raise SpeechNotRecognizedError(msg)

    best = payload["NBest"][0]
    scores = best.get("PronunciationAssessment") or best
    return PronunciationScores(
        accuracyScore=scores.get("AccuracyScore"),
        pronunciationScore=scores.get("PronScore"),
        completenessScore=scores.get("CompletenessScore"),
        fluencyScore=scores.get("FluencyScore"),
    )
