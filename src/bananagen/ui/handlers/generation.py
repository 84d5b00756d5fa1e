"""Generation submit and cancel handlers."""

import logging
from collections.abc import AsyncIterator
from dataclasses import replace

import gradio as gr

from ..renderer import render_html
from ..state import GeneratorSession, initialize_session

logger = logging.getLogger(__name__)


async def generate_handler(
    session: GeneratorSession | None,
) -> AsyncIterator[tuple[str, str, dict, GeneratorSession]]:
    """Submit the form and stream the result panel.

    A form that fails validation gets one update with the message shown
    next to the Generate button and no request is made. Otherwise the first
    update disables the Generate button and shows the previous results with
    a progress note; the second shows the outcome.

    Args:
        session: Session state

    Yields:
        Tuples of (results_html, form_message, generate_button_update, updated_session)
    """
    session = initialize_session(session)

    if session.submission.is_submitting:
        logger.warning("Generate clicked while a request is in flight")
        yield render_html(session.view()), "", gr.update(interactive=False), session
        return

    problem = session.validation_error()
    if problem:
        logger.info(f"Generate blocked: {problem}")
        yield (
            render_html(session.view()),
            format_form_message(problem),
            gr.update(interactive=session.can_submit),
            session,
        )
        return

    pending = replace(session.view(), is_generating=True, error=None)
    yield render_html(pending), "", gr.update(interactive=False), session

    state = await session.generate()
    logger.info(f"Submission finished: {state!r}")

    yield render_html(session.view()), "", gr.update(interactive=session.can_submit), session


def format_form_message(message: str) -> str:
    return f"⚠️ {message}"


async def cancel_handler(
    session: GeneratorSession | None,
) -> tuple[str, dict, GeneratorSession]:
    """Abort the in-flight request, if any.

    Must run on the event loop that owns the in-flight task.

    Returns:
        Tuple of (results_html, generate_button_update, updated_session)
    """
    session = initialize_session(session)
    if not session.cancel():
        logger.debug("Cancel requested with nothing in flight")
    return render_html(session.view()), gr.update(interactive=session.can_submit), session
