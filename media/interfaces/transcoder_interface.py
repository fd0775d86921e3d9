"""
Transcoder Interface

Abstract interface for media decode/encode primitives.
The transformation pipeline depends on this abstraction, not on ffmpeg
directly, so tests can run with MockTranscoder.

Every method is a single blocking step that either returns a value or
raises TranscodeError. No callbacks leak out of an implementation.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class TranscoderInterface(ABC):
    """
    Abstract base class for media transcoders.

    Implementations: FFmpegTranscoder (real), MockTranscoder (tests).
    """

    @abstractmethod
    def probe_duration(self, source: Path) -> float:
        """
        Read the media duration in seconds.

        Args:
            source: Media file

        Returns:
            Duration in seconds

        Raises:
            TranscodeError: If the file cannot be decoded
        """

    @abstractmethod
    def compress(self, source: Path, output: Path, quality: float) -> Path:
        """
        Re-encode a video with both dimensions scaled by quality.

        Args:
            source: Input video
            output: Where to write the compressed video
            quality: Effective quality in (0, 1]; also the scale factor

        Returns:
            Path to the written file (== output)

        Raises:
            TranscodeError: If decode or encode fails
        """

    @abstractmethod
    def extract_frame(
        self,
        source: Path,
        output: Path,
        at_seconds: float,
        width: int,
        height: int,
        quality: float,
    ) -> Path:
        """
        Capture a single frame as a JPEG still.

        Args:
            source: Input video
            output: Where to write the JPEG
            at_seconds: Seek position
            width: Output raster width
            height: Output raster height
            quality: JPEG quality in (0, 1]

        Returns:
            Path to the written file (== output)

        Raises:
            TranscodeError: If decode, seek or encode fails
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the transcoder's tooling can run"""


class TranscodeError(Exception):
    """
    Exception raised when a decode/seek/encode step fails.

    The pipeline turns this into a fallback value; it never escapes
    MediaPipeline.
    """
