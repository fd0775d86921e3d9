"""
Media Config Tests

Tests for YAML overrides of the media limits.

To run these tests:
    pytest tests/media/test_media_config.py -v
"""

from dataclasses import FrozenInstanceError

import pytest

from media.config import MediaConfig, load_media_limits
from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits


@pytest.mark.unit
def test_missing_file_uses_defaults(temp_media_dir):
    limits = load_media_limits(temp_media_dir / "missing.yaml")

    assert limits == DEFAULT_MEDIA_LIMITS


@pytest.mark.unit
def test_default_values():
    """Defaults match the documented limits"""
    limits = MediaLimits()

    assert limits.max_file_size_bytes == 2 * 1024 ** 3
    assert limits.chunk_size_bytes == 5 * 1024 * 1024
    assert limits.max_retries == 3
    assert limits.retry_delay_ms == 1000
    assert limits.compression_target_bytes == 25 * 1024 * 1024
    assert limits.compression_quality == pytest.approx(0.8)
    assert limits.cache_ttl_ms == 5 * 60 * 1000
    assert limits.cache_max_entries == 100
    assert "video/mp4" in limits.supported_mime_types
    assert len(limits.supported_mime_types) == 7


@pytest.mark.unit
def test_yaml_overrides(temp_media_dir):
    config_path = temp_media_dir / "media.yaml"
    config_path.write_text(
        "compression_target_bytes: 1048576\n"
        "cache_max_entries: 10\n"
        "supported_mime_types:\n"
        "  - video/mp4\n",
    )

    limits = load_media_limits(config_path)

    assert limits.compression_target_bytes == 1048576
    assert limits.cache_max_entries == 10
    assert limits.supported_mime_types == frozenset({"video/mp4"})
    assert limits.max_retries == DEFAULT_MEDIA_LIMITS.max_retries


@pytest.mark.unit
def test_unknown_keys_ignored(temp_media_dir):
    config_path = temp_media_dir / "media.yaml"
    config_path.write_text("unknown_key: 5\nmax_retries: 1\n")

    config = MediaConfig(config_path)

    assert config.limits.max_retries == 1
    assert "unknown_key" not in config.to_dict()


@pytest.mark.unit
def test_invalid_value_rejected(temp_media_dir):
    """Out-of-range quality fails fast at load time"""
    config_path = temp_media_dir / "media.yaml"
    config_path.write_text("compression_quality: 1.5\n")

    with pytest.raises(ValueError):
        MediaConfig(config_path)


@pytest.mark.unit
def test_non_mapping_file_uses_defaults(temp_media_dir):
    config_path = temp_media_dir / "media.yaml"
    config_path.write_text("- just\n- a list\n")

    assert load_media_limits(config_path) == DEFAULT_MEDIA_LIMITS


@pytest.mark.unit
def test_save_defaults_round_trip(temp_media_dir):
    config_path = temp_media_dir / "nested" / "media.yaml"

    MediaConfig(config_path).save_defaults()

    assert config_path.exists()
    assert load_media_limits(config_path) == DEFAULT_MEDIA_LIMITS


@pytest.mark.unit
def test_limits_are_immutable():
    with pytest.raises(FrozenInstanceError):
        DEFAULT_MEDIA_LIMITS.max_retries = 10
