"""Request encoding: turn form state into an immutable EncodedRequest.

Local images are read and base-64 encoded concurrently, one asyncio task
per file. ``asyncio.gather`` returns results in argument order, so the
encoded images always follow the selection order regardless of which read
finishes first. A single failed read aborts the whole request.
"""

import asyncio
import base64
import logging

from .models import (
    DEFAULT_MIME_TYPE,
    EncodedImage,
    EncodedRequest,
    GenerationParameters,
    ImageIntakeState,
    LocalImage,
    Mode,
)

logger = logging.getLogger(__name__)


class EncodeError(Exception):
    """A local image could not be read or converted."""

    pass


async def encode_image(image: LocalImage, default_mime_type: str = DEFAULT_MIME_TYPE) -> EncodedImage:
    """Read one local image and encode it as base-64 text.

    Args:
        image: Image to encode
        default_mime_type: MIME type used when the image declares none

    Returns:
        EncodedImage with the base-64 payload and MIME type

    Raises:
        EncodeError: If the image bytes cannot be read
    """
    try:
        content = await image.read()
    except OSError as e:
        logger.error(f"Failed to read image {image.name!r}: {e}")
        raise EncodeError(f"Could not read image {image.name!r}") from e

    data = base64.b64encode(content).decode("ascii")
    return EncodedImage(data=data, mime_type=image.mime_type or default_mime_type)


async def encode_request(
    params: GenerationParameters,
    intake: ImageIntakeState,
    *,
    default_mime_type: str = DEFAULT_MIME_TYPE,
) -> EncodedRequest:
    """Build the request for one submission.

    Callers are expected to pass snapshots (see ``snapshot()`` on both
    inputs) so edits made while encoding do not leak into this request.

    Args:
        params: Generation parameters
        intake: Image intake state
        default_mime_type: MIME type used for images that declare none

    Returns:
        EncodedRequest ready for the generation client

    Raises:
        EncodeError: If any local image fails to encode
    """
    encoded_images: tuple[EncodedImage, ...] = ()
    remote_url = None

    if params.mode is Mode.IMAGE_TO_IMAGE:
        if intake.remote_url:
            remote_url = intake.remote_url
        elif intake.local_files:
            tasks = [
                asyncio.ensure_future(encode_image(image, default_mime_type))
                for image in intake.local_files
            ]
            try:
                encoded_images = tuple(await asyncio.gather(*tasks))
            except EncodeError:
                for task in tasks:
                    task.cancel()
                raise
            logger.debug(f"Encoded {len(encoded_images)} local images")

    return EncodedRequest(
        mode=params.mode,
        model=params.model,
        resolution=params.resolution,
        aspect_ratio=params.aspect_ratio,
        prompt=params.prompt,
        encoded_images=encoded_images,
        remote_url=remote_url,
    )
