"""
Media Factory

Factory pattern for creating transcoder implementations.
Follows same pattern as drive/factory.py for consistency.
"""

import logging
from typing import Literal, Optional

from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits
from media.controllers.media_pipeline import MediaPipeline
from media.implementations.ffmpeg_transcoder import FFmpegTranscoder
from media.implementations.mock_transcoder import MockTranscoder
from media.interfaces.transcoder_interface import TranscoderInterface

# Type alias
TranscoderMode = Literal["auto", "ffmpeg", "mock"]

logger = logging.getLogger(__name__)


def create_transcoder(mode: TranscoderMode = "auto") -> TranscoderInterface:
    """
    Create a transcoder instance.

    Args:
        mode: "auto" (ffmpeg if installed), "ffmpeg" (force real), "mock"

    Returns:
        TranscoderInterface implementation

    Raises:
        RuntimeError: If mode="ffmpeg" but ffmpeg/ffprobe are not installed
    """
    if mode == "mock":
        logger.info("Creating Mock Transcoder (forced)")
        return MockTranscoder()

    transcoder = FFmpegTranscoder()

    if mode == "ffmpeg":
        if not transcoder.is_available():
            raise RuntimeError("ffmpeg transcoder requested but ffmpeg/ffprobe not found")
        logger.info("Creating FFmpeg Transcoder (forced)")
        return transcoder

    # mode == "auto" - real ffmpeg even if missing; the pipeline degrades
    if transcoder.is_available():
        logger.info("Creating FFmpeg Transcoder (auto-detected)")
    else:
        logger.warning("ffmpeg not found in PATH, media transforms will degrade")
    return transcoder


def create_pipeline(
    limits: MediaLimits = DEFAULT_MEDIA_LIMITS,
    transcoder: Optional[TranscoderInterface] = None,
) -> MediaPipeline:
    """Quick pipeline creation with auto-detected transcoder"""
    return MediaPipeline(transcoder=transcoder or create_transcoder(), limits=limits)
