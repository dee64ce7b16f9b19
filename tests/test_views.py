import io

from PIL import Image

from gender_oracle.apis.errors import InvalidInputFormat, MalformedResponse, NetworkOrServiceFailure
from gender_oracle.views.image_view import IMAGE_FAILURE_MESSAGE, ImageGuessView
from gender_oracle.views.state import (
    Analyzing,
    Empty,
    Failed,
    Idle,
    ImageFailed,
    ImageSuccess,
    Loaded,
    Submitting,
    Success,
)
from gender_oracle.views.text_view import TEXT_FAILURE_MESSAGE, TextGuessView

IMAGE = "data:image/png;base64,AAAA"


# -----------------------------
# Text view
# -----------------------------
def test_text_view_success(fake_client_cls, alex_result):
    client = fake_client_cls(result=alex_result)
    view = TextGuessView(client)

    assert view.state == Idle()
    state = view.submit("Alex Rivera")

    assert state == Success(result=alex_result)
    assert client.text_calls == ["Alex Rivera"]


def test_text_view_blank_input_is_noop(fake_client_cls, alex_result):
    client = fake_client_cls(result=alex_result)
    view = TextGuessView(client)

    for blank in ["", "   ", "\n\t"]:
        assert view.start(blank) is False
        assert view.submit(blank) == Idle()

    assert client.text_calls == []


def test_text_view_blank_input_keeps_previous_result(fake_client_cls, alex_result):
    view = TextGuessView(fake_client_cls(result=alex_result), Success(result=alex_result))

    assert view.submit("  ") == Success(result=alex_result)


def test_text_view_failure_shows_fixed_message(fake_client_cls):
    for error in [NetworkOrServiceFailure("quota exceeded"), MalformedResponse("Invalid response from AI"),
                  RuntimeError("boom")]:
        view = TextGuessView(fake_client_cls(error=error))
        assert view.submit("Sam") == Failed(message=TEXT_FAILURE_MESSAGE)


def test_text_view_blocks_second_submission(fake_client_cls, alex_result):
    client = fake_client_cls(result=alex_result)
    view = TextGuessView(client)

    assert view.start("Alex") is True
    assert view.state == Submitting(name="Alex")
    assert view.can_submit is False
    assert view.start("Blake") is False
    assert view.state == Submitting(name="Alex")

    view.run()
    assert view.can_submit is True
    assert client.text_calls == ["Alex"]


def test_text_view_resubmits_after_failure(fake_client_cls, alex_result):
    client = fake_client_cls(error=RuntimeError("down"))
    view = TextGuessView(client)
    view.submit("Alex")
    assert isinstance(view.state, Failed)

    client.error = None
    client.result = alex_result
    assert view.start("Alex") is True
    assert view.state == Submitting(name="Alex")
    assert view.run() == Success(result=alex_result)


def test_text_view_run_without_pending_submission(fake_client_cls):
    client = fake_client_cls()
    view = TextGuessView(client)

    assert view.run() == Idle()
    assert client.text_calls == []


# -----------------------------
# Image view
# -----------------------------
def test_image_view_analyze_without_image_is_noop(fake_client_cls, alex_result):
    client = fake_client_cls(result=alex_result)
    view = ImageGuessView(client)

    assert view.can_analyze is False
    assert view.analyze() == Empty()
    assert client.image_calls == []


def test_image_view_success(fake_client_cls, alex_result):
    client = fake_client_cls(result=alex_result)
    view = ImageGuessView(client)

    assert view.load_data_url(IMAGE) == Loaded(image=IMAGE)
    assert view.can_analyze is True
    assert view.analyze() == ImageSuccess(image=IMAGE, result=alex_result)
    assert client.image_calls == [IMAGE]


def test_image_view_shows_error_message_verbatim(fake_client_cls):
    view = ImageGuessView(fake_client_cls(error=Exception("quota exceeded")), Loaded(image=IMAGE))

    assert view.analyze() == ImageFailed(image=IMAGE, message="quota exceeded")


def test_image_view_invalid_format_message(fake_client_cls):
    view = ImageGuessView(fake_client_cls(error=InvalidInputFormat("Invalid image data format.")),
                          Loaded(image="garbage"))

    assert view.analyze().message == "Invalid image data format."


def test_image_view_fallback_message(fake_client_cls):
    view = ImageGuessView(fake_client_cls(error=RuntimeError()), Loaded(image=IMAGE))

    assert view.analyze() == ImageFailed(image=IMAGE, message=IMAGE_FAILURE_MESSAGE)


def test_image_view_blocks_while_analyzing(fake_client_cls, alex_result):
    client = fake_client_cls(result=alex_result)
    view = ImageGuessView(client, Loaded(image=IMAGE))

    assert view.start() is True
    assert view.state == Analyzing(image=IMAGE)
    assert view.can_analyze is False
    assert view.start() is False

    view.run()
    assert client.image_calls == [IMAGE]


def test_image_view_new_image_resets_from_any_state(fake_client_cls, alex_result):
    other = "data:image/jpeg;base64,BBBB"
    for state in [Empty(), Loaded(image=IMAGE), ImageSuccess(image=IMAGE, result=alex_result),
                  ImageFailed(image=IMAGE, message="x"), Analyzing(image=IMAGE)]:
        view = ImageGuessView(fake_client_cls(), state)
        assert view.load_data_url(other) == Loaded(image=other)


def test_image_view_reanalyze_after_result(fake_client_cls, alex_result):
    client = fake_client_cls(result=alex_result)
    view = ImageGuessView(client, ImageFailed(image=IMAGE, message="x"))

    assert view.can_analyze is True
    assert view.analyze() == ImageSuccess(image=IMAGE, result=alex_result)


def test_image_view_load_file(tmp_path, fake_client_cls):
    img = Image.new("RGB", (6, 6), (10, 200, 10))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    path = tmp_path / "person.png"
    path.write_bytes(buf.getvalue())

    view = ImageGuessView(fake_client_cls())
    assert view.load_file(str(path)).image.startswith("data:image/png;base64,")


def test_image_view_clear(fake_client_cls):
    view = ImageGuessView(fake_client_cls(), Loaded(image=IMAGE))

    assert view.clear() == Empty()
    assert view.can_analyze is False
