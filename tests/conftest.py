import json
from typing import Any, List, Optional

import pytest

from gender_oracle.apis.base import GenderInferenceClient
from gender_oracle.apis.gemini_client import GeminiClient
from gender_oracle.apis.result import Category, InferenceResult

_NOT_JSON = object()


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, reason: str = "OK"):
        self.status_code = status_code
        self.body = body
        self.reason = reason

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self.body is _NOT_JSON:
            raise ValueError("No JSON object could be decoded")
        return self.body


class FakeSession:
    """Stands in for requests.Session: records posts, replays one outcome."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[dict] = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient(GenderInferenceClient):
    name = "fake"

    def __init__(self, result: Optional[InferenceResult] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.text_calls: List[str] = []
        self.image_calls: List[str] = []

    def infer_from_text(self, name):
        self.text_calls.append(name)
        if self.error is not None:
            raise self.error
        return self.result

    def infer_from_image(self, image_data):
        self.image_calls.append(image_data)
        if self.error is not None:
            raise self.error
        return self.result


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@pytest.fixture
def not_json():
    return _NOT_JSON


@pytest.fixture
def reply_session():
    """Build a FakeSession whose reply text is the JSON dump of `payload`."""

    def _make(payload, raw: bool = False):
        text = payload if raw else json.dumps(payload)
        return FakeSession(FakeResponse(200, gemini_reply(text)))

    return _make


@pytest.fixture
def make_client():
    def _make(session, **kwargs):
        kwargs.setdefault("api_key", "test-key")
        return GeminiClient(session=session, **kwargs)

    return _make


@pytest.fixture
def alex_result():
    return InferenceResult(
        category=Category.UNKNOWN,
        confidence=0.4,
        reasoning="Ambiguous given name.",
    )


@pytest.fixture
def fake_client_cls():
    return FakeClient


@pytest.fixture
def fake_session_cls():
    return FakeSession


@pytest.fixture
def fake_response_cls():
    return FakeResponse
