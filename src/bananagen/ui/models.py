"""Data models for the generation form: parameters, image intake, requests and results."""

import asyncio
import logging
import mimetypes
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

# Form limits
MAX_LOCAL_FILES = 8
MAX_PROMPT_LENGTH = 5000
DEFAULT_MIME_TYPE = "image/png"

# File picker filter: any image plus the explicitly supported extensions
ACCEPTED_FILE_TYPES = ["image", ".png", ".jpg", ".jpeg", ".webp"]

# Older interpreters do not map .webp
mimetypes.add_type("image/webp", ".webp")


class Mode(str, Enum):
    """Whether generation starts from reference images or from text alone."""

    IMAGE_TO_IMAGE = "image-to-image"
    TEXT_TO_IMAGE = "text-to-image"


class Model(str, Enum):
    """Generation backend tier, forwarded to the service untouched."""

    PRO = "nano-banana-pro"
    STANDARD = "nano-banana"


class Resolution(str, Enum):
    ONE_K = "1k"
    TWO_K = "2k"
    FOUR_K = "4k"


class AspectRatio(str, Enum):
    AUTO = "auto"
    SQUARE = "1:1"
    PORTRAIT_9_16 = "9:16"
    LANDSCAPE_16_9 = "16:9"
    PORTRAIT_3_4 = "3:4"
    LANDSCAPE_4_3 = "4:3"
    LANDSCAPE_3_2 = "3:2"
    PORTRAIT_2_3 = "2:3"
    LANDSCAPE_5_4 = "5:4"
    PORTRAIT_4_5 = "4:5"
    ULTRAWIDE_21_9 = "21:9"


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Display labels for the form controls, as (label, value) pairs
MODE_OPTIONS = [
    ("Image to Image", Mode.IMAGE_TO_IMAGE.value),
    ("Text to Image", Mode.TEXT_TO_IMAGE.value),
]

MODEL_OPTIONS = {
    Model.PRO.value: {
        "label": "Nano Banana Pro",
        "description": "High quality",
    },
    Model.STANDARD.value: {
        "label": "Nano Banana",
        "description": "Standard quality, faster turnaround",
    },
}

RESOLUTION_OPTIONS = [resolution.value for resolution in Resolution]

ASPECT_RATIO_OPTIONS = [
    ("Auto" if ratio is AspectRatio.AUTO else ratio.value, ratio.value) for ratio in AspectRatio
]


@dataclass
class GenerationParameters:
    """User-selected generation parameters.

    Every field has a default so the object is always well-formed. Setters
    accept either the enum member or its raw string value (as delivered by
    the form widgets) and raise ValueError for anything else.
    """

    mode: Mode = Mode.IMAGE_TO_IMAGE
    model: Model = Model.PRO
    resolution: Resolution = Resolution.TWO_K
    aspect_ratio: AspectRatio = AspectRatio.AUTO
    prompt: str = ""

    def __post_init__(self):
        self.set_mode(self.mode)
        self.set_model(self.model)
        self.set_resolution(self.resolution)
        self.set_aspect_ratio(self.aspect_ratio)
        self.set_prompt(self.prompt)

    def set_mode(self, mode: Mode | str) -> None:
        self.mode = Mode(mode)

    def set_model(self, model: Model | str) -> None:
        self.model = Model(model)

    def set_resolution(self, resolution: Resolution | str) -> None:
        self.resolution = Resolution(resolution)

    def set_aspect_ratio(self, aspect_ratio: AspectRatio | str) -> None:
        self.aspect_ratio = AspectRatio(aspect_ratio)

    def set_prompt(self, prompt: str | None) -> str:
        """Store the prompt, keeping at most MAX_PROMPT_LENGTH characters.

        Returns:
            The prompt as stored
        """
        self.prompt = (prompt or "")[:MAX_PROMPT_LENGTH]
        return self.prompt

    @property
    def prompt_length(self) -> int:
        return len(self.prompt)

    def snapshot(self) -> "GenerationParameters":
        """Return an independent copy for an in-flight submission."""
        return replace(self)


@dataclass(frozen=True)
class LocalImage:
    """A locally selected reference image.

    The bytes come either from ``path`` (files uploaded through the form)
    or from ``content`` (images already held in memory).
    """

    name: str
    mime_type: str = ""
    path: Path | None = None
    content: bytes | None = field(default=None, repr=False)

    @classmethod
    def from_path(cls, path: str | Path) -> "LocalImage":
        """Build a LocalImage for a file on disk, guessing its MIME type from the name."""
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, mime_type=mime_type or "", path=path)

    async def read(self) -> bytes:
        """Read the image bytes without blocking the event loop.

        Raises:
            OSError: If the file cannot be read
        """
        if self.content is not None:
            return self.content
        if self.path is None:
            raise FileNotFoundError(f"No data source for image {self.name!r}")
        return await asyncio.to_thread(self.path.read_bytes)


@dataclass
class ImageIntakeState:
    """Reference images for image-to-image mode.

    ``local_files`` and ``remote_url`` are mutually exclusive: setting one
    clears the other. Both may be empty at the same time.
    """

    local_files: list[LocalImage] = field(default_factory=list)
    remote_url: str = ""

    def select_local_files(self, candidates) -> list[LocalImage]:
        """Replace the local selection with the first MAX_LOCAL_FILES candidates.

        Excess files are dropped without error. Any remote URL is cleared.

        Args:
            candidates: Iterable of LocalImage in selection order

        Returns:
            The files that were kept
        """
        offered = list(candidates or [])
        kept = offered[:MAX_LOCAL_FILES]
        if len(offered) > MAX_LOCAL_FILES:
            logger.info(
                f"Keeping first {MAX_LOCAL_FILES} of {len(offered)} selected images, "
                f"dropped {len(offered) - MAX_LOCAL_FILES}"
            )
        self.local_files = kept
        self.remote_url = ""
        return list(kept)

    def set_remote_url(self, url: str | None) -> None:
        """Use a single remote image URL instead of local files."""
        self.remote_url = url or ""
        self.local_files = []

    def clear(self) -> None:
        self.local_files = []
        self.remote_url = ""

    @property
    def has_images(self) -> bool:
        return bool(self.local_files) or bool(self.remote_url)

    def snapshot(self) -> "ImageIntakeState":
        """Return an independent copy for an in-flight submission."""
        return ImageIntakeState(local_files=list(self.local_files), remote_url=self.remote_url)


@dataclass(frozen=True)
class EncodedImage:
    """A local image as base-64 text plus its media type, ready for JSON transport."""

    data: str
    mime_type: str


@dataclass(frozen=True)
class EncodedRequest:
    """Immutable request built once per submit attempt."""

    mode: Mode
    model: Model
    resolution: Resolution
    aspect_ratio: AspectRatio
    prompt: str
    encoded_images: tuple[EncodedImage, ...] = ()
    remote_url: str | None = None


@dataclass(frozen=True)
class GeneratedImage:
    """One returned image; ``url`` is a data URL or a remote reference."""

    url: str


@dataclass(frozen=True)
class SubmissionState:
    """Snapshot of the submit lifecycle.

    ``results`` holds the last successful result set and survives later
    submissions and failures until a new success replaces it.
    """

    status: SubmissionStatus = SubmissionStatus.IDLE
    results: tuple[GeneratedImage, ...] = ()
    error: str | None = None

    @property
    def is_submitting(self) -> bool:
        return self.status is SubmissionStatus.SUBMITTING

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"SubmissionState(status={self.status.value}, "
            f"results={len(self.results)}, error={self.error!r})"
        )
