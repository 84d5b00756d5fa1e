"""Pydantic request and response models for the generation service.

These models define the JSON exchanged with the remote generation endpoint.
Field names are snake_case in Python and camelCase on the wire.

Models
------
Base64Image
    One encoded reference image inside a request.
GenerateImageRequest
    Body of ``POST`` to the generation endpoint.
GenerateImageResponse
    Success body returned by the service. Responses that do not match this
    schema are rejected rather than passed on to the renderer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bananagen.ui.models import AspectRatio, EncodedRequest, Mode, Model, Resolution


class Base64Image(BaseModel):
    """One base-64 encoded image in a generation request.

    Attributes:
        data: Base-64 text of the image bytes.
        mime_type: Declared media type (e.g. ``image/png``).
    """

    model_config = ConfigDict(populate_by_name=True)

    data: str = Field(
        ...,
        description="Base-64 encoded image bytes.",
    )
    mime_type: str = Field(
        ...,
        alias="mimeType",
        description="Media type of the image.",
    )


class GenerateImageRequest(BaseModel):
    """Request body for the generation endpoint.

    Attributes:
        mode: ``"image-to-image"`` or ``"text-to-image"``.
        model: Requested backend tier.
        resolution: Output resolution (``1k``, ``2k`` or ``4k``).
        aspect_ratio: Output aspect ratio, or ``auto``.
        prompt: Free-text prompt.
        base64_images: Encoded reference images, in selection order.  Empty
            for text-to-image requests and URL-based requests.
        image_url: Remote reference image.  Omitted from the JSON body when
            unset.
    """

    model_config = ConfigDict(populate_by_name=True)

    mode: Mode = Field(..., description="Generation mode.")
    model: Model = Field(..., description="Backend tier.")
    resolution: Resolution = Field(..., description="Output resolution.")
    aspect_ratio: AspectRatio = Field(
        ...,
        alias="aspectRatio",
        description="Output aspect ratio.",
    )
    prompt: str = Field(..., description="Prompt text.")
    base64_images: list[Base64Image] = Field(
        default_factory=list,
        alias="base64Images",
        description="Encoded reference images.",
    )
    image_url: str | None = Field(
        default=None,
        alias="imageUrl",
        description="Remote reference image URL.",
    )

    @classmethod
    def from_encoded(cls, request: EncodedRequest) -> GenerateImageRequest:
        """Build the wire model from an EncodedRequest."""
        return cls(
            mode=request.mode,
            model=request.model,
            resolution=request.resolution,
            aspect_ratio=request.aspect_ratio,
            prompt=request.prompt,
            base64_images=[
                Base64Image(data=image.data, mime_type=image.mime_type)
                for image in request.encoded_images
            ],
            image_url=request.remote_url,
        )

    def to_payload(self) -> dict:
        """Serialise to the JSON body, camelCase keys, ``imageUrl`` dropped when unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GenerateImageResponse(BaseModel):
    """Success body returned by the generation service.

    Attributes:
        images: Displayable image references (data URLs or remote URLs) in
            display order.
    """

    images: list[str] = Field(
        ...,
        description="Generated image references in display order.",
    )

    @field_validator("images")
    @classmethod
    def _reject_blank_images(cls, images: list[str]) -> list[str]:
        if any(not image.strip() for image in images):
            raise ValueError("image references must be non-empty strings")
        return images
