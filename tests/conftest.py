"""Shared pytest fixtures for Bananagen tests."""

import asyncio
import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import httpx
import pytest

from bananagen.api.client import GenerationClient
from bananagen.core.config import BananagenConfig
from bananagen.ui.models import GenerationParameters, ImageIntakeState, LocalImage
from bananagen.ui.orchestrator import GenerationOrchestrator
from bananagen.ui.state import GeneratorSession

TEST_ENDPOINT = "https://generator.test/api/generate-image"


class FakeGenerationService:
    """In-process stand-in for the remote generation service.

    Records every JSON body it receives and answers with a configurable
    status and body. Setting ``gate`` holds responses until the event is set,
    which keeps a request in flight for as long as a test needs.
    """

    def __init__(self):
        self.requests: list[dict] = []
        self.status_code = 200
        self.body: dict | None = {
            "images": ["data:image/png;base64,AAAA", "data:image/png;base64,BBBB"]
        }
        self.text: str | None = None
        self.error: type[httpx.HTTPError] | None = None
        self.gate: asyncio.Event | None = None
        self.in_flight = 0
        self.max_in_flight = 0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
        finally:
            self.in_flight -= 1

        if self.error is not None:
            raise self.error("simulated failure", request=request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    async def wait_for_requests(self, count: int) -> None:
        """Yield to the event loop until ``count`` requests have arrived."""
        for _ in range(200):
            if len(self.requests) >= count:
                return
            await asyncio.sleep(0.01)
        raise AssertionError(f"expected {count} requests, got {len(self.requests)}")


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> BananagenConfig:
    """Create a test configuration pointing at the fake service.

    Returns:
        BananagenConfig instance for testing
    """
    return BananagenConfig(
        generation_endpoint=TEST_ENDPOINT,
        request_timeout=5,
        _env_file=None,
    )


@pytest.fixture
def sample_image_paths(temp_dir: Path) -> list[Path]:
    """Create three small image files with distinct contents.

    Returns:
        Paths in selection order: PNG, JPEG, WEBP
    """
    files = {
        "cat.png": b"\x89PNG\r\n\x1a\nfake-png-bytes",
        "dog.jpg": b"\xff\xd8\xff\xe0fake-jpeg-bytes",
        "bird.webp": b"RIFF\x00\x00\x00\x00WEBPfake",
    }
    paths = []
    for name, content in files.items():
        path = temp_dir / name
        path.write_bytes(content)
        paths.append(path)
    return paths


@pytest.fixture
def sample_images(sample_image_paths: list[Path]) -> list[LocalImage]:
    """LocalImage handles for the sample files."""
    return [LocalImage.from_path(path) for path in sample_image_paths]


@pytest.fixture
def fake_service() -> FakeGenerationService:
    return FakeGenerationService()


@pytest.fixture
def client(fake_service: FakeGenerationService) -> GenerationClient:
    """GenerationClient wired to the fake service."""
    return GenerationClient(endpoint=TEST_ENDPOINT, timeout=5, transport=fake_service.transport)


@pytest.fixture
def orchestrator(client: GenerationClient) -> GenerationOrchestrator:
    return GenerationOrchestrator(client)


@pytest.fixture
def session(orchestrator: GenerationOrchestrator) -> GeneratorSession:
    return GeneratorSession(orchestrator=orchestrator)


@pytest.fixture
def text_params() -> GenerationParameters:
    """Text-to-image parameters with a usable prompt."""
    return GenerationParameters(mode="text-to-image", prompt="a banana on a table")


@pytest.fixture
def empty_intake() -> ImageIntakeState:
    return ImageIntakeState()
