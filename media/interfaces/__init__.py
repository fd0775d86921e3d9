"""
Interfaces Package

Abstract interfaces for transcoder implementations.
"""

from media.interfaces.transcoder_interface import TranscodeError, TranscoderInterface

__all__ = [
    "TranscodeError",
    "TranscoderInterface",
]
