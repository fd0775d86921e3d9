"""
Controllers Package

High-level coordinators built on the Drive client.
"""

from drive.controllers.media_gateway import MediaGateway
from drive.controllers.upload_controller import UploadController

__all__ = [
    "MediaGateway",
    "UploadController",
]
