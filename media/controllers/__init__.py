"""
Controllers Package

High-level media transformation coordinators.
"""

from media.controllers.media_pipeline import MediaPipeline

__all__ = [
    "MediaPipeline",
]
