"""Submit lifecycle for the generation form.

State machine
-------------
::

    IDLE ──submit──> SUBMITTING ──ok──────> SUCCEEDED
      ^  (guard fails:       │
      │   stay IDLE,         └──error─────> FAILED
      │   inline message)
      └──── edit / cancel ── SUCCEEDED | FAILED | SUBMITTING

SUCCEEDED and FAILED go straight back to SUBMITTING on the next submit.

Only one request is ever in flight: a submit while SUBMITTING is ignored.
The previous result set stays in the state during SUBMITTING and after a
FAILED attempt, and is only replaced by the next success.

The orchestrator is the only writer of ``SubmissionState``.  Each
transition replaces the state object in a single assignment, so handlers
interleaving on the event loop never observe a half-updated state.
"""

import asyncio
import logging

from bananagen.api.client import GenerationClient, GenerationServiceError
from bananagen.core.config import config

from .encoder import EncodeError, encode_request
from .models import (
    GeneratedImage,
    GenerationParameters,
    ImageIntakeState,
    SubmissionState,
    SubmissionStatus,
)
from .validation import ValidationError, has_prompt, validate_submission

logger = logging.getLogger(__name__)

ENCODE_FAILED_MESSAGE = "Could not read the selected images. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class GenerationOrchestrator:
    """Owns the single-flight submit lifecycle.

    Args:
        client: Generation service client (default: a GenerationClient built
            from the global configuration)
    """

    def __init__(self, client: GenerationClient | None = None):
        self.client = client or GenerationClient()
        self._state = SubmissionState()
        self._inflight: asyncio.Future | None = None
        self._cancel_requested = False

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state.is_submitting

    def can_submit(self, params: GenerationParameters) -> bool:
        """Whether the submit control should be enabled."""
        return not self.is_submitting and has_prompt(params.prompt)

    async def submit(
        self, params: GenerationParameters, intake: ImageIntakeState
    ) -> SubmissionState:
        """Validate, encode and dispatch one generation request.

        The inputs are copied before the first suspension point, so edits made
        while the request is in flight only affect the next submission.

        Args:
            params: Current generation parameters
            intake: Current image intake state

        Returns:
            The state after the submission resolved
        """
        if self.is_submitting:
            logger.warning("Generation already in progress, ignoring submit")
            return self._state

        try:
            validate_submission(params, intake)
        except ValidationError as e:
            logger.info(f"Submit blocked by validation: {e}")
            self._state = SubmissionState(
                status=SubmissionStatus.IDLE, results=self._state.results, error=str(e)
            )
            return self._state

        params = params.snapshot()
        intake = intake.snapshot()

        self._cancel_requested = False
        self._state = SubmissionState(
            status=SubmissionStatus.SUBMITTING, results=self._state.results
        )
        self._inflight = asyncio.ensure_future(self._dispatch(params, intake))

        try:
            images = await self._inflight
        except asyncio.CancelledError:
            self._state = SubmissionState(
                status=SubmissionStatus.IDLE, results=self._state.results
            )
            if not self._cancel_requested:
                raise
            logger.info("Generation cancelled by user")
        except EncodeError as e:
            logger.error(f"Encoding failed: {e}")
            self._fail(ENCODE_FAILED_MESSAGE)
        except GenerationServiceError as e:
            logger.error(f"Generation failed: {e}")
            self._fail(str(e))
        except Exception as e:
            logger.error(f"Unexpected error during generation: {e}", exc_info=True)
            self._fail(UNEXPECTED_ERROR_MESSAGE)
        else:
            self._state = SubmissionState(
                status=SubmissionStatus.SUCCEEDED, results=tuple(images)
            )
            logger.info(f"Generation succeeded with {len(images)} images")
        finally:
            self._inflight = None
            self._cancel_requested = False

        return self._state

    async def _dispatch(
        self, params: GenerationParameters, intake: ImageIntakeState
    ) -> list[GeneratedImage]:
        # Encoding completes fully before the network call is issued
        request = await encode_request(
            params, intake, default_mime_type=config.default_mime_type
        )
        return await self.client.generate(request)

    def _fail(self, message: str) -> None:
        self._state = SubmissionState(
            status=SubmissionStatus.FAILED, results=self._state.results, error=message
        )

    def cancel(self) -> bool:
        """Abort the in-flight request, returning to IDLE.

        Returns:
            True if a request was cancelled
        """
        if self._inflight is None or self._inflight.done():
            return False
        logger.info("Cancelling in-flight generation")
        self._cancel_requested = True
        self._inflight.cancel()
        return True

    def mark_edited(self) -> None:
        """Return a finished submission to IDLE after the user edits the form.

        The last results and message stay on display.
        """
        if self._state.status in (SubmissionStatus.SUCCEEDED, SubmissionStatus.FAILED):
            self._state = SubmissionState(
                status=SubmissionStatus.IDLE,
                results=self._state.results,
                error=self._state.error,
            )
