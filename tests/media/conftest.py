"""
Media Test Configuration and Fixtures

This file contains pytest fixtures shared across media tests.

To use pytest:
    pip install pytest
    pytest tests/media/
"""

import tempfile
from pathlib import Path

import pytest

from media.constants import MediaLimits
from media.controllers.media_pipeline import MediaPipeline
from media.implementations.mock_transcoder import MockTranscoder
from media.models.media_file import MediaFile


# =============================================================================
# LIMITS FIXTURES
# =============================================================================

@pytest.fixture
def small_limits():
    """
    Provide tiny limits so tests can work with small files.

    - 10 KB upload limit
    - 1 KB compression target
    """
    return MediaLimits(
        max_file_size_bytes=10 * 1024,
        compression_target_bytes=1024,
        compression_quality=0.8,
    )


# =============================================================================
# FILE FIXTURES
# =============================================================================

@pytest.fixture
def temp_media_dir():
    """
    Provide a temporary directory for media tests.

    Automatically cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_video(temp_media_dir):
    """
    Factory fixture: write a fake video of the given size.

    Usage:
        def test_something(make_video):
            media_file = make_video("clip.mp4", 4096)
    """

    def _make(name: str = "clip.mp4", size: int = 2048) -> MediaFile:
        path = temp_media_dir / name
        path.write_bytes(b"\x00" * size)
        return MediaFile.from_path(path)

    return _make


# =============================================================================
# PIPELINE FIXTURES
# =============================================================================

@pytest.fixture
def mock_transcoder():
    """Provide a fresh MockTranscoder (10 second clips)"""
    return MockTranscoder(duration=10.0)


@pytest.fixture
def pipeline(mock_transcoder, small_limits, temp_media_dir):
    """
    Provide a MediaPipeline over the mock transcoder.

    Compressed output goes to a "work" subdirectory of the temp dir.
    """
    return MediaPipeline(
        transcoder=mock_transcoder,
        limits=small_limits,
        work_dir=temp_media_dir / "work",
    )
