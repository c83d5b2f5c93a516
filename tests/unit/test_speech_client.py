import base64
import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from lingopal.middleware.error_handlers import ExternalServiceError
from lingopal.speech.client import SpeechClient, SpeechNotRecognizedError, parse_pronunciation_result


def _client(key: str = "speech-key") -> SpeechClient:
    return SpeechClient(key=key, region="eastasia", language="en-US", voice="en-US-AvaMultilingualNeural")


def _response(status_code: int, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", "https://speech.test"), **kwargs)


def test_scores_are_read_from_the_assessment_block() -> None:
    payload = {
        "RecognitionStatus": "Success",
        "NBest": [
            {
                "Display": "It's a sunny day.",
                "PronunciationAssessment": {
                    "AccuracyScore": 92.0,
                    "PronScore": 88.5,
                    "CompletenessScore": 100.0,
                    "FluencyScore": 81.0,
                },
            }
        ],
    }

    scores = parse_pronunciation_result(payload)

    assert scores.accuracyScore == 92.0
    assert scores.pronunciationScore == 88.5
    assert scores.completenessScore == 100.0
    assert scores.fluencyScore == 81.0


def test_scores_on_the_hypothesis_itself_are_accepted() -> None:
    payload = {"RecognitionStatus": "Success", "NBest": [{"AccuracyScore": 70, "PronScore": 65}]}

    scores = parse_pronunciation_result(payload)

    assert scores.accuracyScore == 70
    assert scores.fluencyScore is None


@pytest.mark.parametrize(
    "payload",
    [
        {"RecognitionStatus": "NoMatch"},
        {"RecognitionStatus": "Success", "NBest": []},
        {},
    ],
)
def test_unrecognized_speech_raises(payload) -> None:
    with pytest.raises(SpeechNotRecognizedError):
        parse_pronunciation_result(payload)


def test_ssml_escapes_user_text() -> None:
    ssml = _client().build_ssml("Tom & <Jerry>")

    assert "Tom &amp; &lt;Jerry&gt;" in ssml
    assert "name='en-US-AvaMultilingualNeural'" in ssml or 'name="en-US-AvaMultilingualNeural"' in ssml


@pytest.mark.asyncio
async def test_missing_key_is_reported_as_service_error() -> None:
    with pytest.raises(ExternalServiceError) as exc_info:
        await _client(key="").synthesize("hello")

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_synthesize_posts_ssml_and_returns_audio() -> None:
    post = AsyncMock(return_value=_response(200, content=b"ID3-audio"))

    with patch.object(httpx.AsyncClient, "post", post):
        audio = await _client().synthesize("hello")

    assert audio == b"ID3-audio"
    headers = post.await_args.kwargs["headers"]
    assert headers["Ocp-Apim-Subscription-Key"] == "speech-key"
    assert headers["Content-Type"] == "application/ssml+xml"


@pytest.mark.asyncio
async def test_assessment_sends_reference_text_header() -> None:
    body = {
        "RecognitionStatus": "Success",
        "NBest": [{"PronunciationAssessment": {"AccuracyScore": 90, "PronScore": 90}}],
    }
    post = AsyncMock(return_value=_response(200, json=body))

    with patch.object(httpx.AsyncClient, "post", post):
        scores = await _client().assess_pronunciation(b"RIFF....", "It's a sunny day")

    assert scores.accuracyScore == 90
    header = post.await_args.kwargs["headers"]["Pronunciation-Assessment"]
    config = json.loads(base64.b64decode(header))
    assert config["ReferenceText"] == "It's a sunny day"
    assert config["GradingSystem"] == "HundredMark"


@pytest.mark.asyncio
async def test_service_error_status_becomes_external_service_error() -> None:
    post = AsyncMock(return_value=_response(401, text="bad key"))

    with patch.object(httpx.AsyncClient, "post", post), pytest.raises(ExternalServiceError) as exc_info:
        await _client().recognize(b"RIFF....")

    assert "401" in exc_info.value.detail
