"""
Drive Test Configuration and Fixtures

This file contains pytest fixtures shared across drive tests.
Mirrors the pattern from tests/media/conftest.py.

To use pytest:
    pip install pytest
    pytest tests/drive/
"""

import tempfile
from pathlib import Path

import pytest

from cache.ttl_cache import TTLCache
from drive.controllers.media_gateway import MediaGateway
from drive.implementations.mock_drive_client import MockDriveClient
from media.constants import MediaLimits
from media.models.media_file import MediaFile


class FakeClock:
    """Manually advanced millisecond clock for cache expiry"""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


# =============================================================================
# CLIENT / CACHE FIXTURES
# =============================================================================

@pytest.fixture
def mock_client():
    """
    Provide a fresh MockDriveClient for each test.

    Usage:
        def test_something(mock_client):
            mock_client.fail_on("list")
    """
    return MockDriveClient()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limits():
    return MediaLimits(cache_ttl_ms=60_000, cache_max_entries=10)


@pytest.fixture
def cache(clock, limits):
    return TTLCache(
        max_entries=limits.cache_max_entries,
        default_ttl_ms=limits.cache_ttl_ms,
        clock=clock,
    )


# =============================================================================
# GATEWAY FIXTURES
# =============================================================================

@pytest.fixture
def gateway(mock_client, limits, cache):
    """Gateway over the mock client (credentials present)"""
    return MediaGateway(
        client_factory=lambda: mock_client,
        limits=limits,
        cache=cache,
    )


@pytest.fixture
def degraded_gateway(mock_client, limits, cache):
    """Gateway with no credentials configured"""
    return MediaGateway(
        client_factory=lambda: mock_client,
        limits=limits,
        cache=cache,
        credentials_present=False,
    )


# =============================================================================
# FILE FIXTURES
# =============================================================================

@pytest.fixture
def temp_media_dir():
    """Temporary directory, cleaned up after the test"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_video(temp_media_dir):
    """A small fake mp4 on disk"""
    path = temp_media_dir / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x20ftypmp42" + b"\x00" * 2036)
    return MediaFile.from_path(path)
