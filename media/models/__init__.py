"""Media data models"""

from media.models.media_file import MediaFile, MediaMetadata, ValidationVerdict

__all__ = [
    "MediaFile",
    "MediaMetadata",
    "ValidationVerdict",
]
