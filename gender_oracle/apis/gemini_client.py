# gender_oracle/apis/gemini_client.py

import os
from typing import Any, Dict, List, Optional

import requests

from gender_oracle.apis.base import GenderInferenceClient
from gender_oracle.apis.errors import MalformedResponse, NetworkOrServiceFailure
from gender_oracle.apis.result import InferenceResult, parse_result_text
from gender_oracle.data_processing.data_url import parse_data_url

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com"
DEFAULT_TEXT_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"

TEXT_PROMPT_TEMPLATE = (
    'Based on the name "{name}", guess the likely gender. '
    "Return a JSON object with 'gender' (male/female/non-binary/unknown), "
    "'confidence' (0-1), and a short 'reasoning'."
)

IMAGE_PROMPT = (
    "Analyze this person and guess their gender identity. "
    "Return a JSON object with 'gender' (male/female/non-binary/unknown), "
    "'confidence' (0-1), and a short 'reasoning'."
)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "gender": {"type": "STRING"},
        "confidence": {"type": "NUMBER"},
        "reasoning": {"type": "STRING"},
    },
    "required": ["gender", "confidence", "reasoning"],
}

TEXT_ERROR = "Invalid response from AI"
IMAGE_ERROR = "Invalid response from visual AI"


def _env_timeout() -> Optional[float]:
    raw = os.environ.get("GEMINI_TIMEOUT")
    if not raw:
        return None
    return float(raw)


class GeminiClient(GenderInferenceClient):
    """
    Thin wrapper around the Gemini `generateContent` REST endpoint.

    Reads env vars (constructor arguments win):
        GEMINI_API_KEY      (falls back to API_KEY)
        GEMINI_ENDPOINT     (default https://generativelanguage.googleapis.com)
        GEMINI_TEXT_MODEL   (default gemini-3-flash-preview)
        GEMINI_IMAGE_MODEL  (default gemini-2.5-flash-image)
        GEMINI_TIMEOUT      (seconds; unset = wait indefinitely)

    A missing key is not checked here; the service rejects the call and
    that surfaces as NetworkOrServiceFailure.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
        self.endpoint = (endpoint or os.environ.get("GEMINI_ENDPOINT", DEFAULT_ENDPOINT)).rstrip("/")
        self.text_model = text_model or os.environ.get("GEMINI_TEXT_MODEL", DEFAULT_TEXT_MODEL)
        self.image_model = image_model or os.environ.get("GEMINI_IMAGE_MODEL", DEFAULT_IMAGE_MODEL)
        self.timeout = timeout if timeout is not None else _env_timeout()
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return "gemini"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def infer_from_text(self, name: str) -> InferenceResult:
        if not name or not name.strip():
            raise ValueError("name must be a non-empty string")

        parts = [{"text": TEXT_PROMPT_TEMPLATE.format(name=name)}]
        text = self._generate(self.text_model, parts, error_message=TEXT_ERROR)
        return parse_result_text(text, TEXT_ERROR)

    def infer_from_image(self, image_data: str) -> InferenceResult:
        # Validation happens before any network traffic.
        mime_type, payload = parse_data_url(image_data)

        parts = [
            {"inlineData": {"data": payload, "mimeType": mime_type}},
            {"text": IMAGE_PROMPT},
        ]
        text = self._generate(self.image_model, parts, error_message=IMAGE_ERROR)
        return parse_result_text(text, IMAGE_ERROR)

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------
    def build_request(self, parts: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def _url(self, model: str) -> str:
        return f"{self.endpoint}/v1beta/models/{model}:generateContent"

    def _generate(self, model: str, parts: List[Dict[str, Any]],
                  error_message: str = TEXT_ERROR) -> str:
        """
        POST one generateContent request and return the reply text.

        Single attempt: transport and HTTP errors become
        NetworkOrServiceFailure, an empty reply becomes MalformedResponse.
        """
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key or "",
        }
        body = self.build_request(parts)

        try:
            resp = self.session.post(
                self._url(model),
                headers=headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            print(f"[Gemini] Request to {model} failed: {e}")
            raise NetworkOrServiceFailure(str(e)) from e

        if not resp.ok:
            message = self._error_message(resp)
            print(f"[Gemini] {model} returned HTTP {resp.status_code}: {message}")
            raise NetworkOrServiceFailure(message, status_code=resp.status_code)

        try:
            reply = resp.json()
        except ValueError as e:
            print(f"[Gemini] {model} returned a non-JSON body: {e}")
            raise MalformedResponse(error_message) from e

        text = self._extract_text(reply)
        if not text:
            print(f"[Gemini] {model} returned no candidate text")
            raise MalformedResponse(error_message)
        return text

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        """Prefer the service's own error.message; fall back to the status line."""
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
        return f"HTTP {resp.status_code}: {resp.reason or 'request failed'}"

    @staticmethod
    def _extract_text(reply: Any) -> str:
        """Join the text parts of the first candidate ('' if there are none)."""
        if not isinstance(reply, dict):
            return ""
        candidates = reply.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        if not isinstance(content, dict):
            return ""
        parts = content.get("parts")
        if not isinstance(parts, list):
            return ""
        texts = [p.get("text") for p in parts if isinstance(p, dict)]
        return "".join(t for t in texts if isinstance(t, str))
