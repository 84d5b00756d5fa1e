"""Session state for the generation form.

A GeneratorSession is the single owner of the form's mutable state:
parameters, image intake and the submit orchestrator. Views read from it
and change it only through the named operations below. Any edit moves a
finished submission back to IDLE.
"""

import logging
from dataclasses import dataclass, field

from bananagen.api.client import GenerationClient

from .models import (
    GenerationParameters,
    ImageIntakeState,
    LocalImage,
    SubmissionState,
)
from .orchestrator import GenerationOrchestrator
from .renderer import ResultView, render_results
from .validation import ValidationError, validate_submission

logger = logging.getLogger(__name__)


@dataclass
class GeneratorSession:
    """Per-user state for the generation form.

    Each user gets their own GeneratorSession so concurrent visitors never
    share parameters, images or results.
    """

    parameters: GenerationParameters = field(default_factory=GenerationParameters)
    intake: ImageIntakeState = field(default_factory=ImageIntakeState)
    orchestrator: GenerationOrchestrator = field(default_factory=GenerationOrchestrator)

    # Parameter edits

    def set_mode(self, mode) -> None:
        self.parameters.set_mode(mode)
        self.orchestrator.mark_edited()

    def set_model(self, model) -> None:
        self.parameters.set_model(model)
        self.orchestrator.mark_edited()

    def set_resolution(self, resolution) -> None:
        self.parameters.set_resolution(resolution)
        self.orchestrator.mark_edited()

    def set_aspect_ratio(self, aspect_ratio) -> None:
        self.parameters.set_aspect_ratio(aspect_ratio)
        self.orchestrator.mark_edited()

    def set_prompt(self, prompt: str | None) -> str:
        stored = self.parameters.set_prompt(prompt)
        self.orchestrator.mark_edited()
        return stored

    # Image intake edits

    def select_local_files(self, candidates) -> list[LocalImage]:
        kept = self.intake.select_local_files(candidates)
        self.orchestrator.mark_edited()
        return kept

    def set_remote_url(self, url: str | None) -> None:
        self.intake.set_remote_url(url)
        self.orchestrator.mark_edited()

    def clear_images(self) -> None:
        self.intake.clear()
        self.orchestrator.mark_edited()

    # Submission

    def validation_error(self) -> str | None:
        """Message explaining why the form cannot be submitted, or None."""
        try:
            validate_submission(self.parameters, self.intake)
        except ValidationError as e:
            return str(e)
        return None

    async def generate(self) -> SubmissionState:
        return await self.orchestrator.submit(self.parameters, self.intake)

    def cancel(self) -> bool:
        return self.orchestrator.cancel()

    @property
    def submission(self) -> SubmissionState:
        return self.orchestrator.state

    @property
    def can_submit(self) -> bool:
        return self.orchestrator.can_submit(self.parameters)

    def view(self) -> ResultView:
        return render_results(self.orchestrator.state)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"GeneratorSession(mode={self.parameters.mode.value}, "
            f"model={self.parameters.model.value}, "
            f"images={len(self.intake.local_files)}, "
            f"status={self.submission.status.value})"
        )


def initialize_session(
    session: GeneratorSession | None = None, client: GenerationClient | None = None
) -> GeneratorSession:
    """Create a session on first use, or return the existing one.

    Args:
        session: Existing GeneratorSession or None
        client: Generation client for a new session (default: built from config)

    Returns:
        Ready GeneratorSession instance
    """
    if session is not None:
        return session

    logger.info("Creating new GeneratorSession")
    return GeneratorSession(orchestrator=GenerationOrchestrator(client))
