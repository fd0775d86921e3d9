"""
Upload Result Model

Outcome of one ingest (validate -> describe -> compress -> upload).
"""

from dataclasses import dataclass, field
from typing import List, Optional

from drive.constants import DriveErrorCode
from drive.models.remote_media import RemoteMediaObject
from media.models.media_file import MediaMetadata


@dataclass
class UploadResult:
    """
    Result of an ingest operation.

    Attributes:
        success: True if the media is now stored in Drive
        media: Remote object (if successful)
        error_code: Drive error code (None for validation/degraded failures)
        error_message: Error description (if failed)
        validation_errors: Reasons the file was rejected before upload
        metadata: Duration/thumbnail derived from the source file
        upload_duration: Seconds spent in the whole ingest
        file_size: Bytes actually uploaded
        compressed: True if a compressed variant was uploaded
    """

    success: bool
    media: Optional[RemoteMediaObject] = None
    error_code: Optional[DriveErrorCode] = None
    error_message: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)
    metadata: Optional[MediaMetadata] = None
    upload_duration: float = 0.0
    file_size: int = 0
    compressed: bool = False

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "media": self.media.to_dict() if self.media else None,
            "error_code": self.error_code.value if self.error_code else None,
            "error_message": self.error_message,
            "validation_errors": list(self.validation_errors),
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "upload_duration": round(self.upload_duration, 3),
            "file_size": self.file_size,
            "compressed": self.compressed,
        }
