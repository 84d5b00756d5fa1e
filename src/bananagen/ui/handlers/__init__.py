"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events:
- form: Parameter edits and reference image intake
- generation: Submitting and cancelling generation requests
"""

from .form import (
    clear_images_handler,
    describe_intake,
    format_prompt_counter,
    set_aspect_ratio_handler,
    set_mode_handler,
    set_model_handler,
    set_resolution_handler,
    set_url_handler,
    update_prompt_handler,
    upload_images_handler,
)
from .generation import cancel_handler, format_form_message, generate_handler

__all__ = [
    # Form handlers
    "clear_images_handler",
    "describe_intake",
    "format_prompt_counter",
    "set_aspect_ratio_handler",
    "set_mode_handler",
    "set_model_handler",
    "set_resolution_handler",
    "set_url_handler",
    "update_prompt_handler",
    "upload_images_handler",
    # Generation handlers
    "cancel_handler",
    "format_form_message",
    "generate_handler",
]
