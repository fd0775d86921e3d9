"""
Media Pipeline

Transformation pipeline for promotional videos:
- Duration extraction
- Compression of oversized files
- Thumbnail generation
- Metadata assembly

Nothing in here raises on a media problem. Every step degrades to a
fallback (original file, None duration, None thumbnail) and logs why.
Scratch files are released on every exit path.
"""

import logging
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional
from uuid import uuid4

from config.settings import (
    MEDIA_WORK_DIR,
    THUMBNAIL_HEIGHT,
    THUMBNAIL_QUALITY,
    THUMBNAIL_SEEK_RATIO,
    THUMBNAIL_SEEK_SECONDS,
    THUMBNAIL_WIDTH,
)
from media.constants import (
    COMPRESSED_MIME_TYPE,
    COMPRESSED_SUFFIX,
    DEFAULT_MEDIA_LIMITS,
    MIN_EFFECTIVE_QUALITY,
    MediaLimits,
)
from media.interfaces.transcoder_interface import TranscoderInterface
from media.models.media_file import MediaFile, MediaMetadata
from media.utils.size_utils import format_size


def effective_quality(size_bytes: int, limits: MediaLimits = DEFAULT_MEDIA_LIMITS) -> float:
    """
    Quality used to compress a file of the given size.

    q = max(0.1, (target / size) * compression_quality)
    """
    ratio = limits.compression_target_bytes / size_bytes
    return max(MIN_EFFECTIVE_QUALITY, ratio * limits.compression_quality)


def thumbnail_seek_position(duration: Optional[float]) -> float:
    """
    Seek to 1 second, or 25% in for clips shorter than 4 seconds.

    Unknown duration seeks to the first frame.
    """
    if duration is None:
        return 0.0
    return min(THUMBNAIL_SEEK_SECONDS, duration * THUMBNAIL_SEEK_RATIO)


class MediaPipeline:
    """
    Derives duration, a compressed variant and a thumbnail from a video.

    Usage:
        pipeline = MediaPipeline(transcoder=FFmpegTranscoder())

        metadata = pipeline.build_metadata(media_file)
        with pipeline.compressed(media_file) as upload_file:
            gateway.upload_media(upload_file, "D-42", roles)
    """

    def __init__(
        self,
        transcoder: TranscoderInterface,
        limits: MediaLimits = DEFAULT_MEDIA_LIMITS,
        work_dir: Optional[Path] = None,
    ):
        """
        Initialize pipeline.

        Args:
            transcoder: Decode/encode primitives
            limits: Compression target and quality come from here
            work_dir: Where compressed output is written
        """
        self.logger = logging.getLogger(__name__)
        self.transcoder = transcoder
        self.limits = limits
        self.work_dir = Path(work_dir or MEDIA_WORK_DIR)

        if not self.transcoder.is_available():
            self.logger.warning(
                "Transcoder tooling not available. Duration and thumbnails "
                "will be empty and files will upload uncompressed.",
            )

        self.logger.info("Media Pipeline initialized")

    # =========================================================================
    # DURATION
    # =========================================================================

    def get_duration(self, media_file: MediaFile) -> Optional[float]:
        """
        Read video duration.

        Returns:
            Duration in seconds, or None if the file cannot be decoded
        """
        try:
            duration = self.transcoder.probe_duration(media_file.path)
        except Exception as e:
            self.logger.warning(f"Could not read duration of {media_file.name}: {e}")
            return None

        self.logger.debug(f"Duration of {media_file.name}: {duration:.2f}s")
        return duration

    # =========================================================================
    # COMPRESSION
    # =========================================================================

    def needs_compression(self, media_file: MediaFile) -> bool:
        return media_file.size_bytes > self.limits.compression_target_bytes

    def compress_if_needed(self, media_file: MediaFile) -> MediaFile:
        """
        Compress a video that exceeds the compression target.

        Files at or under target are returned unchanged (same object).
        On any failure the original file is returned.

        The result is best-effort: output may still exceed the target.
        Output that is not smaller than the source is discarded.

        Returns:
            A MediaFile in work_dir, or media_file itself
        """
        if not self.needs_compression(media_file):
            return media_file

        quality = effective_quality(media_file.size_bytes, self.limits)
        output = self.work_dir / f"{media_file.path.stem}_{uuid4().hex[:8]}{COMPRESSED_SUFFIX}"

        self.logger.info(
            f"Compressing {media_file.name} "
            f"({format_size(media_file.size_bytes)}, quality {quality:.2f})",
        )

        try:
            self.work_dir.mkdir(parents=True, exist_ok=True)
            self.transcoder.compress(media_file.path, output, quality)
            compressed_size = output.stat().st_size
        except Exception as e:
            self.logger.error(f"Compression failed for {media_file.name}: {e}")
            self._remove(output)
            return media_file

        if compressed_size >= media_file.size_bytes:
            self.logger.warning(
                f"Compressed output not smaller than source "
                f"({format_size(compressed_size)}), keeping original",
            )
            self._remove(output)
            return media_file

        if compressed_size > self.limits.compression_target_bytes:
            self.logger.warning(
                f"Compressed {media_file.name} to {format_size(compressed_size)}, "
                f"still above target {format_size(self.limits.compression_target_bytes)}",
            )
        else:
            self.logger.info(
                f"Compressed {media_file.name}: "
                f"{format_size(media_file.size_bytes)} -> {format_size(compressed_size)}",
            )

        return MediaFile(
            path=output,
            name=media_file.name,
            mime_type=COMPRESSED_MIME_TYPE,
            size_bytes=compressed_size,
            last_modified=datetime.now(),
        )

    @contextmanager
    def compressed(self, media_file: MediaFile) -> Iterator[MediaFile]:
        """
        Compress for the duration of a with-block.

        Compressed scratch output is removed when the block exits,
        whether it exits normally or by exception.
        """
        result = self.compress_if_needed(media_file)
        try:
            yield result
        finally:
            self.release(result, media_file)

    def release(self, transformed: MediaFile, original: MediaFile) -> None:
        """Delete a compressed variant; never touches the original file"""
        if transformed.path != original.path:
            self._remove(transformed.path)

    def _remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            self.logger.warning(f"Failed to remove scratch file {path}: {e}")

    # =========================================================================
    # THUMBNAIL
    # =========================================================================

    def create_thumbnail(
        self,
        media_file: MediaFile,
        duration: Optional[float] = None,
    ) -> Optional[bytes]:
        """
        Capture a 320x240 JPEG still.

        Args:
            media_file: Source video
            duration: Known duration (probed if None; seeks to 0s if unknown)

        Returns:
            JPEG bytes, or None on any decode/seek/encode failure
        """
        if duration is None:
            duration = self.get_duration(media_file)
        return self._capture_thumbnail(media_file, thumbnail_seek_position(duration))

    def _capture_thumbnail(self, media_file: MediaFile, position: float) -> Optional[bytes]:
        try:
            with tempfile.TemporaryDirectory(prefix="thumb_") as tmp:
                frame = self.transcoder.extract_frame(
                    media_file.path,
                    Path(tmp) / "thumbnail.jpg",
                    at_seconds=position,
                    width=THUMBNAIL_WIDTH,
                    height=THUMBNAIL_HEIGHT,
                    quality=THUMBNAIL_QUALITY,
                )
                thumbnail = frame.read_bytes()
        except Exception as e:
            self.logger.error(f"Failed to create thumbnail for {media_file.name}: {e}")
            return None

        self.logger.debug(
            f"Thumbnail for {media_file.name} at {position:.2f}s ({len(thumbnail)} bytes)",
        )
        return thumbnail

    # =========================================================================
    # METADATA
    # =========================================================================

    def build_metadata(self, media_file: MediaFile) -> MediaMetadata:
        """
        Derive metadata for a source file.

        Returns:
            MediaMetadata (duration/thumbnail None when not derivable)
        """
        duration = self.get_duration(media_file)
        thumbnail = self._capture_thumbnail(media_file, thumbnail_seek_position(duration))

        return MediaMetadata(
            name=media_file.name,
            size_bytes=media_file.size_bytes,
            mime_type=media_file.mime_type,
            duration_seconds=duration,
            thumbnail=thumbnail,
            last_modified=media_file.last_modified,
        )
