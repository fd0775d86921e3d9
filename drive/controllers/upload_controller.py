"""
Upload Controller

High-level coordinator for media ingest.
Simplifies the validate -> describe -> compress -> upload sequence for
callers such as the upload script.

This follows the same pattern as media/controllers/media_pipeline.py
- Clean, simple API for callers
- Handles all ingest complexity internally
- Proper error handling and logging
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from drive.controllers.media_gateway import MediaGateway
from drive.interfaces.drive_client_interface import DriveError
from drive.models.remote_media import RoleFlags
from drive.models.upload_result import UploadResult
from media.controllers.media_pipeline import MediaPipeline
from media.models.media_file import MediaFile
from media.utils.size_utils import format_size, generate_file_name
from media.utils.validation_utils import validate_media_file


class UploadController:
    """
    High-level media ingest controller.

    This class:
    - Validates the file against the configured limits
    - Derives duration and thumbnail metadata
    - Compresses oversized files (scratch output always cleaned up)
    - Uploads through the gateway and reports an UploadResult

    Usage:
        controller = UploadController(gateway, pipeline)

        result = controller.ingest("/videos/D-42.mp4", "D-42", RoleFlags(is_primary=True))

        if result.success:
            print(f"Uploaded: {result.media.web_content_link}")
    """

    def __init__(self, gateway: MediaGateway, pipeline: MediaPipeline):
        """
        Initialize upload controller.

        Args:
            gateway: Gateway used for the upload (one per process)
            pipeline: Media pipeline; its limits are used for validation
        """
        self.logger = logging.getLogger(__name__)
        self.gateway = gateway
        self.pipeline = pipeline

        self.logger.info("Upload Controller initialized")

    def ingest(
        self,
        path: Union[str, Path],
        owner_entity_id: str,
        roles: RoleFlags = RoleFlags(),
        mime_type: Optional[str] = None,
        unique_name: bool = False,
    ) -> UploadResult:
        """
        Validate, describe, compress and upload one file.

        Never raises for validation, media or provider problems; those are
        reported in the returned UploadResult.

        Args:
            path: Local video file
            owner_entity_id: Catalog entity the media belongs to
            roles: Where the media is surfaced
            mime_type: Override the extension-based MIME guess
            unique_name: Name the remote file "{owner}_{epoch_ms}.{ext}" instead
                of "{owner}_{original name}"

        Returns:
            UploadResult with success status and details

        Example:
            result = controller.ingest("/videos/D-42.mp4", "D-42")
            if not result.success:
                logger.error(f"Ingest failed: {result.error_message}")
        """
        start_time = time.time()

        try:
            media_file = MediaFile.from_path(path, mime_type=mime_type)
        except OSError as e:
            self.logger.error(f"❌ Cannot read {path}: {e}")
            return UploadResult(
                success=False,
                error_message=f"File not found: {path}",
                validation_errors=["file not found"],
            )

        verdict = validate_media_file(media_file, self.pipeline.limits)
        if not verdict.is_valid:
            self.logger.warning(
                f"Rejected {media_file.name}: {', '.join(verdict.errors)}",
            )
            return UploadResult(
                success=False,
                error_message="; ".join(verdict.errors),
                validation_errors=list(verdict.errors),
                file_size=media_file.size_bytes,
            )

        metadata = self.pipeline.build_metadata(media_file)

        try:
            with self.pipeline.compressed(media_file) as upload_file:
                compressed = upload_file.path != media_file.path
                remote_name = (
                    generate_file_name(owner_entity_id, upload_file.path.name)
                    if unique_name
                    else None
                )
                remote = self.gateway.upload_media(
                    upload_file,
                    owner_entity_id,
                    roles,
                    name=remote_name,
                )
                uploaded_size = upload_file.size_bytes

        except DriveError as e:
            self.logger.error(f"❌ Upload failed: {e.message} (code: {e.code.value})")
            return UploadResult(
                success=False,
                error_code=e.code,
                error_message=e.message,
                metadata=metadata,
                upload_duration=time.time() - start_time,
                file_size=media_file.size_bytes,
            )

        upload_duration = time.time() - start_time

        if remote is None:
            return UploadResult(
                success=False,
                error_message="Google Drive is not configured",
                metadata=metadata,
                upload_duration=upload_duration,
                file_size=uploaded_size,
                compressed=compressed,
            )

        self.logger.info(
            f"✅ Ingest successful: {remote.id} "
            f"({upload_duration:.1f}s, {format_size(uploaded_size)}"
            f"{', compressed' if compressed else ''})",
        )

        return UploadResult(
            success=True,
            media=remote,
            metadata=metadata,
            upload_duration=upload_duration,
            file_size=uploaded_size,
            compressed=compressed,
        )
