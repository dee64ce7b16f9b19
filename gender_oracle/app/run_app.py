# gender_oracle/app/run_app.py

import argparse
from typing import Any, Iterator, Optional, Tuple

import gradio as gr

from gender_oracle.apis.base import GenderInferenceClient
from gender_oracle.apis.gemini_client import GeminiClient
from gender_oracle.views.image_view import ImageGuessView
from gender_oracle.views.render import IMAGE_PALETTE, TEXT_PALETTE, render_error, render_result
from gender_oracle.views.state import (
    Analyzing,
    Empty,
    Failed,
    Idle,
    ImageFailed,
    ImageState,
    ImageSuccess,
    Submitting,
    Success,
    TextState,
)
from gender_oracle.views.text_view import TextGuessView

GUESS_LABEL = "Guess Gender"
ANALYZE_LABEL = "Run Visual Analysis"
BUSY_LABEL = "Analyzing..."

HEADER_MD = """
# Gender Oracle
### The AI Identity Engine
Guess gender identities via linguistic patterns or visual analysis powered by Gemini models.
"""


def render_text_state(state: TextState) -> Tuple[Any, str]:
    """(submit button update, result html) for a text-view state."""
    if isinstance(state, Submitting):
        return gr.update(value=BUSY_LABEL, interactive=False), ""
    button = gr.update(value=GUESS_LABEL, interactive=True)
    if isinstance(state, Success):
        return button, render_result(state.result, TEXT_PALETTE)
    if isinstance(state, Failed):
        return button, render_error(state.message)
    return button, ""


def render_image_state(state: ImageState) -> Tuple[Any, str, Any]:
    """(analyze button update, result html, photo input update) for an image-view state."""
    if isinstance(state, Analyzing):
        # no new photo can be picked until the pending result lands
        return (
            gr.update(value=BUSY_LABEL, interactive=False),
            '<p class="oracle-busy">Analyzing visual patterns...</p>',
            gr.update(interactive=False),
        )
    button = gr.update(value=ANALYZE_LABEL, interactive=not isinstance(state, Empty))
    photo = gr.update(interactive=True)
    if isinstance(state, ImageSuccess):
        return button, render_result(state.result, IMAGE_PALETTE), photo
    if isinstance(state, ImageFailed):
        return button, render_error(state.message), photo
    return button, "", photo


class OracleApp:
    """
    Gradio front-end hosting both views.

    Per-session view states live in gr.State; each handler rebuilds a view
    around the session's state, drives one transition and hands the new
    state back.
    """

    def __init__(self, client: Optional[GenderInferenceClient] = None):
        self.client = client or GeminiClient()

    # --- handlers ------------------------------------------------------
    def guess_name(self, name: str, state: TextState) -> Iterator[tuple]:
        view = TextGuessView(self.client, state)
        if not view.start(name):
            yield (view.state, *render_text_state(view.state))
            return
        yield (view.state, *render_text_state(view.state))
        view.run()
        yield (view.state, *render_text_state(view.state))

    def select_image(self, path: Optional[str], state: ImageState) -> tuple:
        view = ImageGuessView(self.client, state)
        if path:
            view.load_file(path)
        else:
            view.clear()
        return (view.state, *render_image_state(view.state))

    def analyze_image(self, state: ImageState) -> Iterator[tuple]:
        view = ImageGuessView(self.client, state)
        if not view.start():
            yield (view.state, *render_image_state(view.state))
            return
        yield (view.state, *render_image_state(view.state))
        view.run()
        yield (view.state, *render_image_state(view.state))

    # --- layout --------------------------------------------------------
    def build(self) -> gr.Blocks:
        with gr.Blocks(title="Gender Oracle") as demo:
            gr.Markdown(HEADER_MD)
            text_state = gr.State(Idle())
            image_state = gr.State(Empty())

            with gr.Row():
                with gr.Column():
                    gr.Markdown("## 👤 Linguistic Engine\n"
                                "Enter a name and the AI will attempt to guess the likely gender "
                                "identity based on cultural patterns.")
                    name_box = gr.Textbox(label="Full Name or First Name", placeholder="e.g. Alex Rivera")
                    guess_btn = gr.Button(GUESS_LABEL, variant="primary")
                    text_out = gr.HTML()

                with gr.Column():
                    gr.Markdown("## 📸 Visual AI\n"
                                "Upload a photo and the visual model will analyze physical features "
                                "and style to guess the likely gender identity. Clear faces work best.")
                    image_in = gr.Image(type="filepath", label="Photo")
                    analyze_btn = gr.Button(ANALYZE_LABEL, variant="primary", interactive=False)
                    image_out = gr.HTML()

            gr.Markdown(self._footer())

            text_outputs = [text_state, guess_btn, text_out]
            guess_btn.click(self.guess_name, inputs=[name_box, text_state], outputs=text_outputs)
            name_box.submit(self.guess_name, inputs=[name_box, text_state], outputs=text_outputs)

            image_outputs = [image_state, analyze_btn, image_out, image_in]
            image_in.change(self.select_image, inputs=[image_in, image_state], outputs=image_outputs)
            analyze_btn.click(self.analyze_image, inputs=[image_state], outputs=image_outputs)

        return demo

    def _footer(self) -> str:
        text_model = getattr(self.client, "text_model", self.client.name)
        image_model = getattr(self.client, "image_model", self.client.name)
        return f"`Models: {text_model} & {image_model}`"


def main():
    parser = argparse.ArgumentParser(description="Launch the Gender Oracle web UI.")
    parser.add_argument("--host", default="127.0.0.1",
                        help="Interface to bind (default: 127.0.0.1).")
    parser.add_argument("--port", type=int, default=7860,
                        help="Port to serve on (default: 7860).")
    parser.add_argument("--share", action="store_true",
                        help="Create a public Gradio share link.")
    args = parser.parse_args()

    app = OracleApp()
    print("Text model  :", getattr(app.client, "text_model", "-"))
    print("Image model :", getattr(app.client, "image_model", "-"))
    print(f"Serving on  : http://{args.host}:{args.port}")

    app.build().launch(server_name=args.host, server_port=args.port, share=args.share)


if __name__ == "__main__":
    main()
