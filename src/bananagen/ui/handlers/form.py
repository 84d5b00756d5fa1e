"""Form edit handlers: parameters and reference images."""

import logging

import gradio as gr

from ..models import MAX_LOCAL_FILES, MAX_PROMPT_LENGTH, ImageIntakeState, LocalImage, Mode
from ..state import GeneratorSession, initialize_session

logger = logging.getLogger(__name__)


def describe_intake(intake: ImageIntakeState) -> str:
    """Summarize the current reference images as Markdown.

    Args:
        intake: Image intake state

    Returns:
        Markdown text for the image summary
    """
    if intake.remote_url:
        return "🔗 Using image URL"
    if intake.local_files:
        names = ", ".join(f"`{image.name}`" for image in intake.local_files)
        return f"🖼️ **{len(intake.local_files)}/{MAX_LOCAL_FILES} images:** {names}"
    return f"*PNG, JPG, JPEG, WEBP (up to {MAX_LOCAL_FILES} images)*"


def format_prompt_counter(length: int) -> str:
    return f"{length}/{MAX_PROMPT_LENGTH}"


def set_mode_handler(
    mode: str, session: GeneratorSession | None
) -> tuple[dict, GeneratorSession]:
    """Switch between image-to-image and text-to-image.

    Reference images are kept when leaving image-to-image mode and shown
    again on return.

    Returns:
        Tuple of (image_group_update, updated_session)
    """
    session = initialize_session(session)
    session.set_mode(mode)
    logger.debug(f"Mode set to {session.parameters.mode.value}")
    return gr.update(visible=session.parameters.mode is Mode.IMAGE_TO_IMAGE), session


def set_model_handler(model: str, session: GeneratorSession | None) -> GeneratorSession:
    session = initialize_session(session)
    session.set_model(model)
    return session


def set_resolution_handler(
    resolution: str, session: GeneratorSession | None
) -> GeneratorSession:
    session = initialize_session(session)
    session.set_resolution(resolution)
    return session


def set_aspect_ratio_handler(
    aspect_ratio: str, session: GeneratorSession | None
) -> GeneratorSession:
    session = initialize_session(session)
    session.set_aspect_ratio(aspect_ratio)
    return session


def update_prompt_handler(
    prompt: str, session: GeneratorSession | None
) -> tuple[str, dict, GeneratorSession]:
    """Store the prompt and refresh the character counter.

    Returns:
        Tuple of (counter_text, generate_button_update, updated_session)
    """
    session = initialize_session(session)
    stored = session.set_prompt(prompt)
    return (
        format_prompt_counter(len(stored)),
        gr.update(interactive=session.can_submit),
        session,
    )


def upload_images_handler(
    paths: list[str] | None, session: GeneratorSession | None
) -> tuple[dict, dict, str, GeneratorSession]:
    """Use newly uploaded files as the local image selection.

    Drag-and-drop and the file picker both land here. Only the first
    MAX_LOCAL_FILES files are kept; the URL field is cleared.

    Returns:
        Tuple of (file_update, url_update, summary_markdown, updated_session)
    """
    session = initialize_session(session)
    kept = session.select_local_files(LocalImage.from_path(path) for path in paths or [])
    return (
        gr.update(value=[str(image.path) for image in kept] or None),
        gr.update(value=""),
        describe_intake(session.intake),
        session,
    )


def set_url_handler(
    url: str, session: GeneratorSession | None
) -> tuple[dict, str, GeneratorSession]:
    """Use a remote image URL, dropping any local selection.

    Returns:
        Tuple of (file_update, summary_markdown, updated_session)
    """
    session = initialize_session(session)
    session.set_remote_url(url)
    return gr.update(value=None), describe_intake(session.intake), session


def clear_images_handler(session: GeneratorSession | None) -> tuple[dict, str, GeneratorSession]:
    """Remove all reference images.

    Returns:
        Tuple of (url_update, summary_markdown, updated_session)
    """
    session = initialize_session(session)
    session.clear_images()
    return gr.update(value=""), describe_intake(session.intake), session
