# gender_oracle/views/image_view.py

from gender_oracle.apis.base import GenderInferenceClient
from gender_oracle.data_processing.data_url import file_to_data_url
from gender_oracle.views.state import (
    Analyzing,
    Empty,
    ImageFailed,
    ImageState,
    ImageSuccess,
    Loaded,
    image_of,
)

IMAGE_FAILURE_MESSAGE = "Failed to process image. Try a clearer photo."


class ImageGuessView:
    """
    Photo-upload panel.

    empty -> loaded -> analyzing -> success(result) | failed(message).
    Loading a new image from any state drops the previous result/error.
    Unlike the text view, a failure shows the error's own message when it
    has one.
    """

    def __init__(self, client: GenderInferenceClient, state: ImageState = None):
        self.client = client
        self.state = state if state is not None else Empty()

    @property
    def image(self):
        return image_of(self.state)

    @property
    def can_analyze(self) -> bool:
        return self.image is not None and not isinstance(self.state, Analyzing)

    # --- loading -------------------------------------------------------
    def load_data_url(self, data_url: str) -> ImageState:
        self.state = Loaded(image=data_url)
        return self.state

    def load_file(self, path: str) -> ImageState:
        return self.load_data_url(file_to_data_url(path))

    def clear(self) -> ImageState:
        self.state = Empty()
        return self.state

    # --- analysis ------------------------------------------------------
    def start(self) -> bool:
        if not self.can_analyze:
            return False
        self.state = Analyzing(image=self.image)
        return True

    def run(self) -> ImageState:
        if not isinstance(self.state, Analyzing):
            return self.state

        image = self.state.image
        try:
            result = self.client.infer_from_image(image)
        except Exception as e:
            print(f"[ImageView] Visual inference failed: {e!r}")
            self.state = ImageFailed(image=image, message=str(e) or IMAGE_FAILURE_MESSAGE)
        else:
            self.state = ImageSuccess(image=image, result=result)
        return self.state

    def analyze(self) -> ImageState:
        if self.start():
            self.run()
        return self.state
