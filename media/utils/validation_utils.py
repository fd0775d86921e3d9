"""
Validation Utilities

Checks a candidate media file against the media limits.
Validation never raises: every problem found is returned as a reason.
"""

import logging

from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits
from media.models.media_file import MediaFile, ValidationVerdict
from media.utils.size_utils import format_size, is_size_valid, is_supported_type

logger = logging.getLogger(__name__)


def validate_media_file(
    media_file: MediaFile,
    limits: MediaLimits = DEFAULT_MEDIA_LIMITS,
) -> ValidationVerdict:
    """
    Validate a media file before transformation/upload.

    Checks run in a fixed order and all of them run:
    1. MIME type is supported
    2. Size is within the limit
    3. File is not empty

    Args:
        media_file: File to check (only mime_type and size_bytes are used)
        limits: Media limits to check against

    Returns:
        ValidationVerdict with ordered reasons

    Example:
        verdict = validate_media_file(MediaFile.from_path("clip.mp4"))
        if not verdict.is_valid:
            for reason in verdict.errors:
                print(reason)
    """
    errors = []

    if not is_supported_type(media_file.mime_type, limits):
        errors.append(f"unsupported type: {media_file.mime_type}")

    if not is_size_valid(media_file.size_bytes, limits):
        errors.append(f"file too large: {format_size(media_file.size_bytes)}")

    if media_file.size_bytes == 0:
        errors.append("file is empty")

    if errors:
        logger.debug(f"Validation failed for {media_file.name}: {errors}")

    return ValidationVerdict(is_valid=not errors, errors=errors)
