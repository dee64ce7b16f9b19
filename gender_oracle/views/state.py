"""
Tagged-union state values for the two input views.

Each view holds exactly one of these at a time, so combinations such as
"loading and showing an error" cannot be represented. All are frozen so a
state can be stored per session and compared in tests.
"""
from dataclasses import dataclass
from typing import Union

from gender_oracle.apis.result import InferenceResult


# -----------------------------
# Text view
# -----------------------------
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Submitting:
    name: str


@dataclass(frozen=True)
class Success:
    result: InferenceResult


@dataclass(frozen=True)
class Failed:
    message: str


TextState = Union[Idle, Submitting, Success, Failed]


# -----------------------------
# Image view
# -----------------------------
@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Loaded:
    image: str  # data URL


@dataclass(frozen=True)
class Analyzing:
    image: str


@dataclass(frozen=True)
class ImageSuccess:
    image: str
    result: InferenceResult


@dataclass(frozen=True)
class ImageFailed:
    image: str
    message: str


ImageState = Union[Empty, Loaded, Analyzing, ImageSuccess, ImageFailed]


def image_of(state: ImageState):
    """Data URL held by an image-view state, or None when empty."""
    return getattr(state, "image", None)
