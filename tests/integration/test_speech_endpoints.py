import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from lingopal.speech.client import SpeechNotRecognizedError
from lingopal.speech.router import get_speech_client
from lingopal.speech.schemas import PronunciationScores


pytestmark = pytest.mark.integration


@pytest.fixture
def speech_client(app) -> MagicMock:
    client = MagicMock()
    client.synthesize = AsyncMock(return_value=b"mp3-bytes")
    client.recognize = AsyncMock(return_value={"RecognitionStatus": "Success", "DisplayText": "It's a sunny day."})
    client.assess_pronunciation = AsyncMock(
        return_value=PronunciationScores(accuracyScore=95, pronunciationScore=90, completenessScore=100, fluencyScore=85)
    )
    app.dependency_overrides[get_speech_client] = lambda: client
    return client


@pytest.mark.asyncio
async def test_text_to_speech_returns_base64_audio(client, speech_client) -> None:
    response = await client.post("/api/speech/text-to-speech", json={"text": "Good morning"})

    assert response.status_code == 200
    assert base64.b64decode(response.json()["audioContent"]) == b"mp3-bytes"
    speech_client.synthesize.assert_awaited_once_with("Good morning")


@pytest.mark.asyncio
async def test_text_to_speech_requires_text(client, speech_client) -> None:
    response = await client.post("/api/speech/text-to-speech", json={"text": ""})

    assert response.status_code == 422
    speech_client.synthesize.assert_not_awaited()


@pytest.mark.asyncio
async def test_speech_to_text_returns_recognition_and_scores(client, speech_client) -> None:
    response = await client.post(
        "/api/speech/speech-to-text",
        content=b"RIFF-wave-data",
        headers={"Content-Type": "audio/wav"},
        params={"reference_text": "It's a sunny day"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["recognition"]["DisplayText"] == "It's a sunny day."
    assert body["pronunciationScores"]["accuracyScore"] == 95
    speech_client.assess_pronunciation.assert_awaited_once_with(b"RIFF-wave-data", "It's a sunny day")


@pytest.mark.asyncio
async def test_speech_to_text_rejects_non_wave_bodies(client, speech_client) -> None:
    response = await client.post(
        "/api/speech/speech-to-text",
        content=b"ID3",
        headers={"Content-Type": "audio/mpeg"},
    )

    assert response.status_code == 415
    speech_client.recognize.assert_not_awaited()


@pytest.mark.asyncio
async def test_speech_to_text_rejects_empty_audio(client, speech_client) -> None:
    response = await client.post("/api/speech/speech-to-text", content=b"", headers={"Content-Type": "audio/wave"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unrecognized_speech_is_422(client, speech_client) -> None:
    speech_client.assess_pronunciation.side_effect = SpeechNotRecognizedError("Speech not recognized")

    response = await client.post(
        "/api/speech/speech-to-text",
        content=b"RIFF-silence",
        headers={"Content-Type": "audio/x-wav"},
    )

    assert response.status_code == 422
