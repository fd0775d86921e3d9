"""
Media File Models

Data classes representing candidate media files and derived metadata.
"""

import mimetypes
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

# Container types the platform mimetypes table may not know about
_EXTRA_MIME_TYPES = {
    ".mov": "video/mov",
    ".avi": "video/avi",
    ".wmv": "video/wmv",
    ".flv": "video/flv",
    ".webm": "video/webm",
    ".ogv": "video/ogg",
}


def guess_mime_type(path: Path) -> str:
    """
    Guess a file's MIME type from its extension.

    Returns "application/octet-stream" when unknown.
    """
    extra = _EXTRA_MIME_TYPES.get(path.suffix.lower())
    if extra:
        return extra
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or "application/octet-stream"


@dataclass(frozen=True)
class MediaFile:
    """
    A candidate media file on local disk.

    This is what callers hand to validation, the transformation pipeline
    and the gateway.
    """

    path: Path
    name: str
    mime_type: str
    size_bytes: int
    last_modified: datetime

    @classmethod
    def from_path(cls, path, mime_type: Optional[str] = None) -> "MediaFile":
        """
        Describe a file on disk.

        Args:
            path: File path
            mime_type: Override the extension-based MIME guess

        Raises:
            FileNotFoundError: If path does not exist
        """
        path = Path(path)
        stat = path.stat()
        return cls(
            path=path,
            name=path.name,
            mime_type=mime_type or guess_mime_type(path),
            size_bytes=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
        )

    def __repr__(self) -> str:
        return (
            f"MediaFile(name='{self.name}', type={self.mime_type}, "
            f"size={self.size_bytes})"
        )


@dataclass
class ValidationVerdict:
    """Outcome of validating a MediaFile; errors keep check order"""

    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MediaMetadata:
    """
    Metadata derived once per source file.

    duration_seconds and thumbnail are None when they could not be derived.
    """

    name: str
    size_bytes: int
    mime_type: str
    duration_seconds: Optional[float]
    thumbnail: Optional[bytes]
    last_modified: datetime

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/display (thumbnail as byte count)"""
        return {
            "name": self.name,
            "size_bytes": self.size_bytes,
            "mime_type": self.mime_type,
            "duration_seconds": self.duration_seconds,
            "thumbnail_bytes": len(self.thumbnail) if self.thumbnail else 0,
            "last_modified": self.last_modified.isoformat(),
        }
