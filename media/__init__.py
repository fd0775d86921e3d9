"""
Media Module

Validation and transformation of promotional videos before upload.

Architecture mirrors the drive module:
- interfaces/: Abstract base classes (contracts)
- implementations/: Concrete implementations (ffmpeg and mock)
- controllers/: High-level coordination (MediaPipeline)
- models/: Data structures
- utils/: Size predicates and validation

Usage:
    from media import MediaFile, create_pipeline, validate_media_file

    media_file = MediaFile.from_path("clip.mp4")
    verdict = validate_media_file(media_file)
    metadata = create_pipeline().build_metadata(media_file)
"""

from media.config import MediaConfig, load_media_limits
from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits
from media.controllers.media_pipeline import MediaPipeline
from media.factory import create_pipeline, create_transcoder
from media.interfaces.transcoder_interface import TranscodeError, TranscoderInterface
from media.models.media_file import MediaFile, MediaMetadata, ValidationVerdict
from media.utils.size_utils import (
    format_size,
    generate_file_name,
    is_size_valid,
    is_supported_type,
)
from media.utils.validation_utils import validate_media_file

# Public API
__all__ = [
    "DEFAULT_MEDIA_LIMITS",
    "MediaConfig",
    "MediaFile",
    "MediaLimits",
    "MediaMetadata",
    "MediaPipeline",
    "TranscodeError",
    "TranscoderInterface",
    "ValidationVerdict",
    "create_pipeline",
    "create_transcoder",
    "format_size",
    "generate_file_name",
    "is_size_valid",
    "is_supported_type",
    "load_media_limits",
    "validate_media_file",
]
