"""Unit tests for generation form data models."""

import pytest

from bananagen.ui.models import (
    ASPECT_RATIO_OPTIONS,
    MAX_LOCAL_FILES,
    MAX_PROMPT_LENGTH,
    AspectRatio,
    GenerationParameters,
    ImageIntakeState,
    LocalImage,
    Mode,
    Model,
    Resolution,
    SubmissionState,
    SubmissionStatus,
)


def _images(count: int) -> list[LocalImage]:
    return [LocalImage(name=f"img{i}.png", mime_type="image/png", content=b"x") for i in range(count)]


class TestGenerationParameters:
    """Tests for GenerationParameters."""

    def test_defaults(self):
        """Test that a fresh object is fully populated."""
        params = GenerationParameters()

        assert params.mode is Mode.IMAGE_TO_IMAGE
        assert params.model is Model.PRO
        assert params.resolution is Resolution.TWO_K
        assert params.aspect_ratio is AspectRatio.AUTO
        assert params.prompt == ""

    def test_constructor_coerces_strings(self):
        """Test that raw string values become enum members."""
        params = GenerationParameters(mode="text-to-image", model="nano-banana", resolution="4k")

        assert params.mode is Mode.TEXT_TO_IMAGE
        assert params.model is Model.STANDARD
        assert params.resolution is Resolution.FOUR_K

    def test_setters_assign(self):
        """Test that each setter assigns its field."""
        params = GenerationParameters()
        params.set_mode("text-to-image")
        params.set_model(Model.STANDARD)
        params.set_resolution("1k")
        params.set_aspect_ratio("21:9")

        assert params.mode is Mode.TEXT_TO_IMAGE
        assert params.model is Model.STANDARD
        assert params.resolution is Resolution.ONE_K
        assert params.aspect_ratio is AspectRatio.ULTRAWIDE_21_9

    def test_unknown_value_raises(self):
        """Test that values outside the enum are rejected."""
        params = GenerationParameters()

        with pytest.raises(ValueError):
            params.set_resolution("8k")
        assert params.resolution is Resolution.TWO_K

    def test_set_prompt_within_cap(self):
        """Test that short prompts are stored as-is."""
        params = GenerationParameters()

        assert params.set_prompt("a banana") == "a banana"
        assert params.prompt_length == 8

    def test_overlong_paste_is_capped(self):
        """Test that pasting more than the cap keeps only the first characters."""
        params = GenerationParameters()
        text = "ab" * MAX_PROMPT_LENGTH

        stored = params.set_prompt(text)

        assert len(stored) == MAX_PROMPT_LENGTH
        assert stored == text[:MAX_PROMPT_LENGTH]

    def test_prompt_never_exceeds_cap(self):
        """Test the length invariant across a series of edits."""
        params = GenerationParameters()
        for length in (0, 1, 4999, 5000, 5001, 12000, 3):
            params.set_prompt("x" * length)
            assert params.prompt_length <= MAX_PROMPT_LENGTH

    def test_none_prompt_becomes_empty(self):
        """Test that a cleared textbox stores an empty prompt."""
        params = GenerationParameters(prompt="something")
        params.set_prompt(None)

        assert params.prompt == ""

    def test_snapshot_is_independent(self):
        """Test that editing after a snapshot does not change the snapshot."""
        params = GenerationParameters(prompt="first")
        snap = params.snapshot()
        params.set_prompt("second")

        assert snap.prompt == "first"

    def test_eleven_aspect_ratios(self):
        """Test that the aspect ratio options cover all eleven ratios."""
        assert len(AspectRatio) == 11
        assert ASPECT_RATIO_OPTIONS[0] == ("Auto", "auto")


class TestImageIntakeState:
    """Tests for ImageIntakeState."""

    def test_select_keeps_first_eight_in_order(self):
        """Test that more than eight files are truncated to the first eight."""
        intake = ImageIntakeState()
        offered = _images(11)

        kept = intake.select_local_files(offered)

        assert len(kept) == MAX_LOCAL_FILES
        assert [image.name for image in intake.local_files] == [f"img{i}.png" for i in range(8)]

    def test_select_replaces_previous_batch(self):
        """Test that a new selection replaces rather than appends."""
        intake = ImageIntakeState()
        intake.select_local_files(_images(5))
        intake.select_local_files(_images(2))

        assert len(intake.local_files) == 2

    def test_select_clears_url(self):
        """Test that selecting files clears the remote URL."""
        intake = ImageIntakeState(remote_url="https://example.com/a.png")
        intake.select_local_files(_images(1))

        assert intake.remote_url == ""

    def test_set_url_clears_files(self):
        """Test that setting a URL clears the local selection."""
        intake = ImageIntakeState()
        intake.select_local_files(_images(3))
        intake.set_remote_url("https://example.com/a.png")

        assert intake.local_files == []
        assert intake.remote_url == "https://example.com/a.png"

    def test_mutual_exclusivity_holds(self):
        """Test that files and URL never coexist across a series of edits."""
        intake = ImageIntakeState()
        edits = [
            lambda: intake.select_local_files(_images(2)),
            lambda: intake.set_remote_url("https://example.com/x.png"),
            lambda: intake.select_local_files(_images(9)),
            lambda: intake.set_remote_url("https://example.com/y.png"),
            intake.clear,
        ]
        for edit in edits:
            edit()
            assert not (intake.local_files and intake.remote_url)

    def test_clear(self):
        """Test that clear empties both inputs."""
        intake = ImageIntakeState()
        intake.select_local_files(_images(2))
        intake.clear()

        assert not intake.has_images

    def test_select_none(self):
        """Test that an empty selection is accepted."""
        intake = ImageIntakeState()
        assert intake.select_local_files(None) == []

    def test_snapshot_is_independent(self):
        """Test that a snapshot keeps its own file list."""
        intake = ImageIntakeState()
        intake.select_local_files(_images(2))
        snap = intake.snapshot()
        intake.clear()

        assert len(snap.local_files) == 2


class TestLocalImage:
    """Tests for LocalImage."""

    def test_from_path_guesses_mime_type(self, sample_image_paths):
        """Test MIME detection from the file extension."""
        images = [LocalImage.from_path(path) for path in sample_image_paths]

        assert images[0].mime_type == "image/png"
        assert images[1].mime_type == "image/jpeg"
        assert images[0].name == "cat.png"

    def test_from_path_unknown_extension(self, temp_dir):
        """Test that an unknown extension leaves the MIME type empty."""
        image = LocalImage.from_path(temp_dir / "upload.unknownext")

        assert image.mime_type == ""

    @pytest.mark.anyio
    async def test_read_from_path(self, sample_image_paths):
        """Test reading bytes from disk."""
        image = LocalImage.from_path(sample_image_paths[0])

        assert await image.read() == sample_image_paths[0].read_bytes()

    @pytest.mark.anyio
    async def test_read_from_content(self):
        """Test reading in-memory bytes."""
        image = LocalImage(name="mem.png", content=b"abc")

        assert await image.read() == b"abc"

    @pytest.mark.anyio
    async def test_read_without_source_raises(self):
        """Test that an image with no data source raises OSError."""
        with pytest.raises(OSError):
            await LocalImage(name="ghost.png").read()


class TestSubmissionState:
    """Tests for SubmissionState."""

    def test_initial_state(self):
        """Test the initial idle state."""
        state = SubmissionState()

        assert state.status is SubmissionStatus.IDLE
        assert state.results == ()
        assert state.error is None
        assert not state.is_submitting

    def test_repr(self):
        """Test the debug representation."""
        assert "status=idle" in repr(SubmissionState())
