from typing import Any

from pydantic import BaseModel, Field


class TextToSpeechRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000)


class TextToSpeechResponse(BaseModel):
    audioContent: str  # noqa: N815


class PronunciationScores(BaseModel):
    accuracyScore: float | None = None  # noqa: N815
    pronunciationScore: float | None = None  # noqa: N815
    completenessScore: float | None = None  # noqa: N815
    fluencyScore: float | None = None  # noqa: N815


class SpeechToTextResponse(BaseModel):
    recognition: dict[str, Any]
    pronunciationScores: PronunciationScores  # noqa: N815
