# gender_oracle/apis/base.py

from abc import ABC, abstractmethod

from gender_oracle.apis.result import InferenceResult


class GenderInferenceClient(ABC):
    """
    Abstract base class for any external gender-inference service.

    Both operations share one output contract: an InferenceResult, or a
    GenderOracleError subclass (InvalidInputFormat, NetworkOrServiceFailure,
    MalformedResponse). Views depend only on this interface.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name for logging/results (e.g., 'gemini')."""
        pass

    @abstractmethod
    def infer_from_text(self, name: str) -> InferenceResult:
        """Guess the likely gender for a (non-empty) person's name."""
        pass

    @abstractmethod
    def infer_from_image(self, image_data: str) -> InferenceResult:
        """
        Guess the perceived gender of the person in an image.

        image_data: a `data:<mime-type>;base64,<payload>` string.
        """
        pass
