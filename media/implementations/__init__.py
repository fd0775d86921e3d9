"""
Implementations Package

Concrete transcoder implementations.
"""

from media.implementations.ffmpeg_transcoder import FFmpegTranscoder
from media.implementations.mock_transcoder import MockTranscoder

__all__ = [
    "FFmpegTranscoder",
    "MockTranscoder",
]
