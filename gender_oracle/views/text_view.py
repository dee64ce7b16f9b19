# gender_oracle/views/text_view.py

from gender_oracle.apis.base import GenderInferenceClient
from gender_oracle.views.state import Failed, Idle, Submitting, Success, TextState

TEXT_FAILURE_MESSAGE = "Failed to analyze name. Please try again."


class TextGuessView:
    """
    Name-entry form.

    idle -> submitting -> success(result) | failed(message), and back to
    submitting on every new submission. The user only ever sees a fixed
    failure message; the underlying error is logged.
    """

    def __init__(self, client: GenderInferenceClient, state: TextState = None):
        self.client = client
        self.state = state if state is not None else Idle()

    @property
    def can_submit(self) -> bool:
        return not isinstance(self.state, Submitting)

    def start(self, name: str) -> bool:
        """Enter `submitting` for a non-blank name. Returns False for a no-op."""
        if not self.can_submit:
            return False
        if not name or not name.strip():
            return False
        self.state = Submitting(name=name)
        return True

    def run(self) -> TextState:
        """Perform the request for the pending submission."""
        if not isinstance(self.state, Submitting):
            return self.state

        try:
            result = self.client.infer_from_text(self.state.name)
        except Exception as e:
            print(f"[TextView] Inference failed for {self.state.name!r}: {e!r}")
            self.state = Failed(message=TEXT_FAILURE_MESSAGE)
        else:
            self.state = Success(result=result)
        return self.state

    def submit(self, name: str) -> TextState:
        if self.start(name):
            self.run()
        return self.state
