"""
Size Utils Tests

Tests for the media limit predicates and size formatting.

To run these tests:
    pytest tests/media/utils/test_size_utils.py -v
"""

import pytest

from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits
from media.utils import size_utils
from media.utils.size_utils import (
    format_size,
    generate_file_name,
    is_size_valid,
    is_supported_type,
)


# =============================================================================
# FORMAT SIZE TESTS
# =============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "size_bytes, expected",
    [
        (0, "0 Bytes"),
        (500, "500 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1500, "1.46 KB"),
        (1024 * 1024, "1 MB"),
        (20 * 1024 * 1024, "20 MB"),
        (2 * 1024 ** 3, "2 GB"),
    ],
)
def test_format_size(size_bytes, expected):
    """Binary prefixes, 2 decimals, trailing zeros dropped"""
    assert format_size(size_bytes) == expected


@pytest.mark.unit
def test_format_size_clamps_to_largest_unit():
    """Sizes beyond TB stay in TB"""
    assert format_size(2048 * 1024 ** 4) == "2048 TB"


# =============================================================================
# PREDICATE TESTS
# =============================================================================

@pytest.mark.unit
def test_supported_types_default():
    """Default limits accept the common video containers"""
    for mime_type in ("video/mp4", "video/webm", "video/mov"):
        assert is_supported_type(mime_type) is True

    assert is_supported_type("image/jpeg") is False
    assert is_supported_type("") is False


@pytest.mark.unit
def test_supported_types_custom_limits():
    """Predicates read the limits they are given"""
    limits = MediaLimits(supported_mime_types={"video/mp4"})

    assert is_supported_type("video/mp4", limits) is True
    assert is_supported_type("video/webm", limits) is False


@pytest.mark.unit
def test_size_valid_boundary():
    """The limit itself is still valid, one byte over is not"""
    limit = DEFAULT_MEDIA_LIMITS.max_file_size_bytes

    assert is_size_valid(limit) is True
    assert is_size_valid(limit + 1) is False
    assert is_size_valid(0) is True


# =============================================================================
# FILE NAME TESTS
# =============================================================================

@pytest.mark.unit
def test_generate_file_name(monkeypatch):
    """Owner prefix, millisecond timestamp, original extension"""
    monkeypatch.setattr(size_utils.time, "time", lambda: 1729332000.0)

    assert generate_file_name("D-42", "clip.mp4") == "D-42_1729332000000.mp4"


@pytest.mark.unit
def test_generate_file_name_without_extension(monkeypatch):
    """Files without an extension get .bin"""
    monkeypatch.setattr(size_utils.time, "time", lambda: 1.5)

    assert generate_file_name("D-42", "clip") == "D-42_1500.bin"
