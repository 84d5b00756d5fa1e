"""Validation utilities for generation form inputs."""

import logging

from .models import ImageIntakeState, GenerationParameters, Mode

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt first."
MISSING_IMAGES_MESSAGE = "Please upload at least one reference image or paste an image URL."


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def has_prompt(prompt: str | None) -> bool:
    """Check whether a prompt has any non-whitespace content."""
    return bool(prompt and prompt.strip())


def validate_prompt(prompt: str | None) -> None:
    """Validate that the prompt is not blank.

    Raises:
        ValidationError: If the prompt is empty or only whitespace
    """
    if not has_prompt(prompt):
        raise ValidationError(EMPTY_PROMPT_MESSAGE)


def validate_submission(params: GenerationParameters, intake: ImageIntakeState) -> None:
    """Validate the form before a generation request is dispatched.

    Ensures that:
    1. The prompt has content after trimming whitespace
    2. Image-to-image mode has at least one local image or a remote URL

    Image intake is not consulted in text-to-image mode, where any sticky
    selection is simply unused.

    Args:
        params: Current generation parameters
        intake: Current image intake state

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    validate_prompt(params.prompt)

    if params.mode is Mode.IMAGE_TO_IMAGE and not intake.has_images:
        raise ValidationError(MISSING_IMAGES_MESSAGE)
