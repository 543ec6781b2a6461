"""Shared pytest fixtures for Character Creator tests."""

import shutil
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from character_creator.core.config import CreatorConfig
from character_creator.core.image_source import encode_data_url
from character_creator.ui.state import TransformationController


def make_png_bytes(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
    """Return the bytes of a small solid-color PNG."""
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeTransformer:
    """Stub transformation client recording every call.

    Returns ``result`` or raises ``error`` when awaited.
    """

    def __init__(self, result: str | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    async def transform(self, source_image: str, instruction: str | None = None) -> str:
        self.calls.append((source_image, instruction))
        if self.error is not None:
            raise self.error
        return self.result


class StepClock:
    """Deterministic millisecond clock that advances by ``step`` per call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


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
def test_config(temp_dir: Path) -> CreatorConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        CreatorConfig instance for testing
    """
    return CreatorConfig(
        _env_file=None,
        gemini_api_key="test-key",
        model_id="gemini-test-image",
        exports_dir=str(temp_dir / "exports"),
        max_instruction_length=200,
    )


@pytest.fixture
def png_bytes() -> bytes:
    """Raw bytes of a small red PNG."""
    return make_png_bytes("red")


@pytest.fixture
def png_path(temp_dir: Path, png_bytes: bytes) -> Path:
    """A small PNG written to disk."""
    path = temp_dir / "portrait.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def source_data_url(png_bytes: bytes) -> str:
    """Data URL of the source portrait ("image A")."""
    return encode_data_url(png_bytes, "image/png")


@pytest.fixture
def result_data_url() -> str:
    """Data URL of a transformed render ("image B")."""
    return encode_data_url(make_png_bytes("blue"), "image/png")


@pytest.fixture
def clock() -> StepClock:
    """Deterministic clock for controller timestamps."""
    return StepClock()


@pytest.fixture
def controller(clock: StepClock) -> TransformationController:
    """Fresh controller with a deterministic clock."""
    return TransformationController(clock=clock)


@pytest.fixture
def make_transformer():
    """Factory for FakeTransformer stubs."""
    return FakeTransformer


@pytest.fixture
def make_png():
    """Factory for solid-color PNG bytes."""
    return make_png_bytes
