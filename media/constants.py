"""
Media Constants

Process-wide media limits and type definitions for the media module.
Values come from config/settings.py; MediaLimits freezes them into one
immutable record that every other component reads.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet

from config.settings import (
    CACHE_MAX_ENTRIES,
    CACHE_TTL_MS,
    CHUNK_SIZE_BYTES,
    COMPRESSION_QUALITY,
    COMPRESSION_TARGET_BYTES,
    MAX_FILE_SIZE_BYTES,
    MAX_RETRIES,
    RETRY_DELAY_MS,
    SUPPORTED_MIME_TYPES,
)

# =============================================================================
# SIZE FORMATTING
# =============================================================================

SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]
SIZE_BASE = 1024

# =============================================================================
# COMPRESSION
# =============================================================================

# Effective quality never drops below this, however far over target a file is
MIN_EFFECTIVE_QUALITY = 0.1

# x264 CRF range used to express a 0..1 quality as an encoder setting
# (quality 1.0 -> CRF_BEST, quality 0.0 -> CRF_WORST)
CRF_BEST = 18
CRF_WORST = 51

COMPRESSED_MIME_TYPE = "video/mp4"
COMPRESSED_SUFFIX = "_compressed.mp4"

# =============================================================================
# LIMITS RECORD
# =============================================================================


@dataclass(frozen=True)
class MediaLimits:
    """
    Immutable media limits.

    Set once at process start and passed by reference to every component
    that needs a limit. Never mutated.

    Attributes:
        max_file_size_bytes: Largest accepted upload
        supported_mime_types: MIME types accepted for upload
        chunk_size_bytes: Resumable upload chunk size
        max_retries: Retries per failed upload chunk
        retry_delay_ms: First retry backoff, doubled per attempt
        compression_target_bytes: Files above this size get compressed
        compression_quality: Base quality in (0, 1]
        cache_ttl_ms: Default metadata cache TTL
        cache_max_entries: Metadata cache capacity
    """

    max_file_size_bytes: int = MAX_FILE_SIZE_BYTES
    supported_mime_types: FrozenSet[str] = field(
        default_factory=lambda: frozenset(SUPPORTED_MIME_TYPES),
    )
    chunk_size_bytes: int = CHUNK_SIZE_BYTES
    max_retries: int = MAX_RETRIES
    retry_delay_ms: int = RETRY_DELAY_MS
    compression_target_bytes: int = COMPRESSION_TARGET_BYTES
    compression_quality: float = COMPRESSION_QUALITY
    cache_ttl_ms: int = CACHE_TTL_MS
    cache_max_entries: int = CACHE_MAX_ENTRIES

    def __post_init__(self):
        # Accept any iterable of MIME types but store a frozenset
        if not isinstance(self.supported_mime_types, frozenset):
            object.__setattr__(
                self,
                "supported_mime_types",
                frozenset(self.supported_mime_types),
            )

        if self.max_file_size_bytes <= 0:
            raise ValueError("max_file_size_bytes must be positive")
        if self.chunk_size_bytes <= 0:
            raise ValueError("chunk_size_bytes must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if self.retry_delay_ms < 0:
            raise ValueError("retry_delay_ms cannot be negative")
        if self.compression_target_bytes <= 0:
            raise ValueError("compression_target_bytes must be positive")
        if not 0.0 < self.compression_quality <= 1.0:
            raise ValueError("compression_quality must be in (0, 1]")
        if self.cache_ttl_ms < 0:
            raise ValueError("cache_ttl_ms cannot be negative")
        if self.cache_max_entries <= 0:
            raise ValueError("cache_max_entries must be positive")


DEFAULT_MEDIA_LIMITS = MediaLimits()


class TransformStep(Enum):
    """Transformation pipeline steps (used in log messages and mock failures)"""

    PROBE = "probe"
    COMPRESS = "compress"
    THUMBNAIL = "thumbnail"
