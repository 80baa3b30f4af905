"""Pytest configuration and shared fixtures for PhotoRenamer tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator, Optional

import pytest

from photorenamer.config.schema import PhotoRenamerConfig
from photorenamer.core.exif_reader import ExifCapture


# =============================================================================
# Test Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_working_directory(tmp_path, monkeypatch):
    """Automatically isolate all tests in a temporary directory.

    This prevents tests from picking up a photorenamer.yaml or creating
    artifacts (like .photorenamer/) in the project directory. All tests run
    with tmp_path as cwd.
    """
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    path = Path(tempfile.mkdtemp(prefix="photorenamer_test_"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Create a source directory within temp_dir."""
    source = temp_dir / "source"
    source.mkdir()
    return source


@pytest.fixture
def target_dir(temp_dir: Path) -> Path:
    """Create a target directory within temp_dir."""
    target = temp_dir / "target"
    target.mkdir()
    return target


# =============================================================================
# Directory Structure Fixtures
# =============================================================================


@pytest.fixture
def mixed_case_library(source_dir: Path) -> Path:
    """
    Create a library with mixed-case filenames.

    Structure:
        source/
            a.JPG
            b.jpg
            Holiday/
                IMG_0001.JPG
                notes.txt
    """
    (source_dir / "a.JPG").write_bytes(b"a")
    (source_dir / "b.jpg").write_bytes(b"b")
    holiday = source_dir / "Holiday"
    holiday.mkdir()
    (holiday / "IMG_0001.JPG").write_bytes(b"img")
    (holiday / "notes.txt").write_bytes(b"notes")
    return source_dir


@pytest.fixture
def nested_folders(source_dir: Path) -> Path:
    """Create nested folder structure for recursive testing."""
    level1 = source_dir / "level1"
    level2 = level1 / "level2"
    level2.mkdir(parents=True)

    (source_dir / "root.jpg").write_bytes(b"\xFF\xD8\xFF\xE0")
    (level1 / "l1.jpg").write_bytes(b"\xFF\xD8\xFF\xE0")
    (level2 / "l2.jpg").write_bytes(b"\xFF\xD8\xFF\xE0")

    return source_dir


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def default_config() -> PhotoRenamerConfig:
    """Return default configuration."""
    return PhotoRenamerConfig()


# =============================================================================
# EXIF Fixtures
# =============================================================================


class FakeExifReader:
    """EXIF collaborator answering from a filename → capture mapping."""

    def __init__(self, captures: dict[str, ExifCapture]):
        self.captures = captures
        self.calls: list[Path] = []

    def __call__(self, file_path: Path) -> Optional[ExifCapture]:
        self.calls.append(file_path)
        return self.captures.get(file_path.name)


@pytest.fixture
def fake_exif_reader():
    """Factory for FakeExifReader instances."""
    return FakeExifReader


# =============================================================================
# Helper Functions (available to all tests)
# =============================================================================


def create_test_file(directory: Path, name: str, content: bytes = b"test") -> Path:
    """Helper to create a test file."""
    file_path = directory / name
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(content)
    return file_path


def create_test_image(directory: Path, name: str = "test.jpg") -> Path:
    """Helper to create a minimal test image."""
    return create_test_file(directory, name, b"\xFF\xD8\xFF\xE0")


def list_files(directory: Path) -> list[str]:
    """Relative paths of all files below directory, sorted."""
    return sorted(
        p.relative_to(directory).as_posix() for p in directory.rglob("*") if p.is_file()
    )


# Make helpers available
pytest.create_test_file = create_test_file
pytest.create_test_image = create_test_image
pytest.list_files = list_files
