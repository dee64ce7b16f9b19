# gender_oracle/apis/result.py

import json
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any

from gender_oracle.apis.errors import MalformedResponse


class Category(str, Enum):
    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non-binary"
    UNKNOWN = "unknown"


# Key the response schema declares for the category, plus the accepted alias.
CATEGORY_KEYS = ("gender", "category")


@dataclass(frozen=True)
class InferenceResult:
    category: Category
    confidence: float
    reasoning: str


def result_from_payload(payload: Any, error_message: str) -> InferenceResult:
    """
    Validate a decoded JSON payload and build an InferenceResult.

    Every field must be present and well-typed; nothing is defaulted.
    Raises MalformedResponse(error_message) otherwise.
    """
    if not isinstance(payload, dict):
        raise MalformedResponse(error_message)

    raw_category = None
    for key in CATEGORY_KEYS:
        if key in payload:
            raw_category = payload[key]
            break
    if not isinstance(raw_category, str):
        raise MalformedResponse(error_message)
    try:
        category = Category(raw_category.strip().lower())
    except ValueError:
        raise MalformedResponse(error_message)

    confidence = payload.get("confidence")
    # bool is a subclass of int; a true/false confidence is not a score
    if isinstance(confidence, bool) or not isinstance(confidence, Real):
        raise MalformedResponse(error_message)
    confidence = float(confidence)
    if not 0.0 <= confidence <= 1.0:
        raise MalformedResponse(error_message)

    reasoning = payload.get("reasoning")
    if not isinstance(reasoning, str):
        raise MalformedResponse(error_message)

    return InferenceResult(category=category, confidence=confidence, reasoning=reasoning)


def parse_result_text(text: str, error_message: str) -> InferenceResult:
    """Decode the model's reply text as JSON and validate it."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        print(f"[Result] Failed to parse reply as JSON: {e}")
        raise MalformedResponse(error_message) from e
    return result_from_payload(payload, error_message)
