"""HTTP client for the remote generation service.

Processing flow:
    1. Convert the EncodedRequest into the ``GenerateImageRequest`` wire model.
    2. ``POST`` the JSON body to ``config.generation_endpoint``.
    3. Validate the success body against ``GenerateImageResponse``.
    4. Return the images in the order the service sent them.

Error handling strategy:
    - Network failures, timeouts and unusable endpoint URLs raise
      ``TransportError`` with a generic message.
    - Non-2xx responses raise ``ServiceError`` carrying the response body
      text verbatim.
    - Success responses that fail schema validation raise ``ServiceError``.
"""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from bananagen.api.models import GenerateImageRequest, GenerateImageResponse
from bananagen.core.config import config
from bananagen.ui.models import EncodedRequest, GeneratedImage

logger = logging.getLogger(__name__)

TRANSPORT_FAILED_MESSAGE = "Generation failed, please try again later."
TIMEOUT_MESSAGE = "The generation service did not respond in time."
SERVICE_FAILED_MESSAGE = "Generation failed."
MALFORMED_RESPONSE_MESSAGE = "The generation service returned an unexpected response."


class GenerationServiceError(Exception):
    """Base class for failures talking to the generation service.

    The message is intended to be displayed directly to the user.
    """

    pass


class TransportError(GenerationServiceError):
    """The service could not be reached or did not answer in time."""

    pass


class ServiceError(GenerationServiceError):
    """The service answered with an error status or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GenerationClient:
    """Sends generation requests to the remote service.

    A fresh ``httpx.AsyncClient`` is opened per request so the client
    object itself holds no open connections between submissions.

    Args:
        endpoint: Generation URL (default: ``config.generation_endpoint``)
        timeout: Request timeout in seconds (default: ``config.request_timeout``)
        transport: Optional httpx transport, used by tests to fake the service
    """

    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint or config.generation_endpoint
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.transport = transport

    async def generate(self, request: EncodedRequest) -> list[GeneratedImage]:
        """Submit one request and return the generated images.

        Args:
            request: Fully encoded request

        Returns:
            Generated images in service order

        Raises:
            TransportError: On network failure or timeout
            ServiceError: On a non-2xx status or a malformed success body
        """
        payload = GenerateImageRequest.from_encoded(request).to_payload()
        logger.info(
            f"POST {self.endpoint} (mode={request.mode.value}, model={request.model.value}, "
            f"images={len(request.encoded_images)}, url={'yes' if request.remote_url else 'no'})"
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.endpoint, json=payload)
        except httpx.TimeoutException as e:
            logger.error(f"Generation request timed out after {self.timeout}s: {e}")
            raise TransportError(TIMEOUT_MESSAGE) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Generation request failed: {e}")
            raise TransportError(TRANSPORT_FAILED_MESSAGE) from e

        if not response.is_success:
            logger.warning(f"Generation service returned {response.status_code}")
            raise ServiceError(response.text or SERVICE_FAILED_MESSAGE, response.status_code)

        try:
            body = GenerateImageResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            logger.error(f"Malformed generation response: {e}")
            raise ServiceError(MALFORMED_RESPONSE_MESSAGE, response.status_code) from e

        logger.info(f"Generation returned {len(body.images)} images")
        return [GeneratedImage(url=url) for url in body.images]
