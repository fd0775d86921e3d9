"""
Size Utilities

Pure predicates over MediaLimits plus human-readable size formatting.
"""

import time
from pathlib import PurePath

from media.constants import DEFAULT_MEDIA_LIMITS, SIZE_BASE, SIZE_UNITS, MediaLimits


def is_supported_type(mime_type: str, limits: MediaLimits = DEFAULT_MEDIA_LIMITS) -> bool:
    """Check if MIME type is accepted for upload"""
    return mime_type in limits.supported_mime_types


def is_size_valid(size_bytes: int, limits: MediaLimits = DEFAULT_MEDIA_LIMITS) -> bool:
    """Check if file size is within the upload limit"""
    return size_bytes <= limits.max_file_size_bytes


def format_size(size_bytes: int) -> str:
    """
    Format byte count with binary prefixes.

    Rounds to 2 decimals and drops trailing zeros.

    Example:
        format_size(0)        # "0 Bytes"
        format_size(1536)     # "1.5 KB"
        format_size(1048576)  # "1 MB"
    """
    if size_bytes == 0:
        return "0 Bytes"

    # floor(log1024(size)) in integer arithmetic, clamped to known units
    index = 0
    while index < len(SIZE_UNITS) - 1 and size_bytes >= SIZE_BASE ** (index + 1):
        index += 1

    value = round(size_bytes / SIZE_BASE**index, 2)
    # 2 decimals, no trailing zeros ("1.50" -> "1.5", "1.00" -> "1")
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[index]}"


def generate_file_name(owner_entity_id: str, original_name: str) -> str:
    """
    Build a unique remote file name for an owner.

    Example:
        generate_file_name("D-42", "clip.mp4")  # "D-42_1729332000000.mp4"
    """
    timestamp_ms = int(time.time() * 1000)
    extension = PurePath(original_name).suffix.lstrip(".") or "bin"
    return f"{owner_entity_id}_{timestamp_ms}.{extension}"
