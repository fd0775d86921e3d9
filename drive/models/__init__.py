"""
Models Package

Data structures for remote media.
"""

from drive.models.remote_media import (
    MediaProperties,
    RemoteMediaObject,
    RoleFlags,
    StorageUsage,
)
from drive.models.upload_result import UploadResult

__all__ = [
    "MediaProperties",
    "RemoteMediaObject",
    "RoleFlags",
    "StorageUsage",
    "UploadResult",
]
