"""Gradio UI for the Bananagen generation form."""

import logging

import gradio as gr

from bananagen.core.config import config

from .handlers import (
    cancel_handler,
    clear_images_handler,
    describe_intake,
    format_prompt_counter,
    generate_handler,
    set_aspect_ratio_handler,
    set_mode_handler,
    set_model_handler,
    set_resolution_handler,
    set_url_handler,
    update_prompt_handler,
    upload_images_handler,
)
from .models import (
    ACCEPTED_FILE_TYPES,
    ASPECT_RATIO_OPTIONS,
    MAX_LOCAL_FILES,
    MAX_PROMPT_LENGTH,
    MODE_OPTIONS,
    MODEL_OPTIONS,
    RESOLUTION_OPTIONS,
    GenerationParameters,
    ImageIntakeState,
)

logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the generation form.

    Returns:
        Gradio Blocks app
    """
    defaults = GenerationParameters()
    app = gr.Blocks(title="Create with Nano Banana")

    with app:
        # Session state - one GeneratorSession per user, created on first event
        session_state = gr.State(None)

        gr.Markdown("# 🍌 Create with Nano Banana")

        with gr.Row():
            with gr.Column(scale=1):
                mode_radio = gr.Radio(
                    label="Mode",
                    choices=MODE_OPTIONS,
                    value=defaults.mode.value,
                )

                model_radio = gr.Radio(
                    label="Model",
                    choices=[
                        (f"{option['label']} ({option['description']})", value)
                        for value, option in MODEL_OPTIONS.items()
                    ],
                    value=defaults.model.value,
                )

                # Reference images (image-to-image only; kept while hidden)
                with gr.Group(visible=True) as image_group:
                    gr.Markdown(f"**Image** (up to {MAX_LOCAL_FILES})")
                    image_files = gr.File(
                        label="Click to upload or drag images here",
                        file_count="multiple",
                        file_types=ACCEPTED_FILE_TYPES,
                        type="filepath",
                    )
                    url_input = gr.Textbox(
                        label="Image URL",
                        placeholder="Or paste an image URL (optional)",
                        lines=1,
                    )
                    image_summary = gr.Markdown(value=describe_intake(ImageIntakeState()))

                prompt_input = gr.Textbox(
                    label="Prompt",
                    placeholder="Describe the style, subject, lighting and composition...",
                    lines=6,
                    max_length=MAX_PROMPT_LENGTH,
                )
                prompt_counter = gr.Markdown(value=format_prompt_counter(0))

                resolution_radio = gr.Radio(
                    label="Resolution",
                    choices=RESOLUTION_OPTIONS,
                    value=defaults.resolution.value,
                )
                aspect_ratio_radio = gr.Radio(
                    label="Aspect Ratio",
                    choices=ASPECT_RATIO_OPTIONS,
                    value=defaults.aspect_ratio.value,
                )

                with gr.Row():
                    generate_btn = gr.Button("✨ Generate", variant="primary", interactive=False)
                    cancel_btn = gr.Button("Cancel", variant="secondary")
                form_message = gr.Markdown(value="")

            with gr.Column(scale=1):
                gr.Markdown("### Output")
                results_html = gr.HTML(value="")

        # Event handlers

        mode_radio.change(
            fn=set_mode_handler,
            inputs=[mode_radio, session_state],
            outputs=[image_group, session_state],
        )
        model_radio.change(
            fn=set_model_handler,
            inputs=[model_radio, session_state],
            outputs=[session_state],
        )
        resolution_radio.change(
            fn=set_resolution_handler,
            inputs=[resolution_radio, session_state],
            outputs=[session_state],
        )
        aspect_ratio_radio.change(
            fn=set_aspect_ratio_handler,
            inputs=[aspect_ratio_radio, session_state],
            outputs=[session_state],
        )
        prompt_input.input(
            fn=update_prompt_handler,
            inputs=[prompt_input, session_state],
            outputs=[prompt_counter, generate_btn, session_state],
        )

        # Upload and clear are user-initiated only, so programmatic resets of
        # the file component do not feed back into the session
        image_files.upload(
            fn=upload_images_handler,
            inputs=[image_files, session_state],
            outputs=[image_files, url_input, image_summary, session_state],
        )
        image_files.clear(
            fn=clear_images_handler,
            inputs=[session_state],
            outputs=[url_input, image_summary, session_state],
        )
        url_input.input(
            fn=set_url_handler,
            inputs=[url_input, session_state],
            outputs=[image_files, image_summary, session_state],
        )

        # Single-flight is per session; the queue must not serialize visitors
        generate_btn.click(
            fn=generate_handler,
            inputs=[session_state],
            outputs=[results_html, form_message, generate_btn, session_state],
            concurrency_limit=config.generation_concurrency,
        )
        cancel_btn.click(
            fn=cancel_handler,
            inputs=[session_state],
            outputs=[results_html, generate_btn, session_state],
            concurrency_limit=None,
        )

    return app
