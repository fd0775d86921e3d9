"""
Drive Module

Remote media storage on Google Drive with OAuth authentication.

Public API:
    - MediaGateway: Session lifecycle and remote media operations
    - UploadController: Validate/compress/upload coordinator
    - UploadResult: Ingest operation result
    - RemoteMediaObject, RoleFlags: Remote media records
    - DriveError, DriveErrorCode: Error taxonomy
    - create_gateway: Factory function

Usage:
    from drive import RoleFlags, create_gateway

    gateway = create_gateway()
    videos = gateway.get_media_by_owner("D-42")
"""

from drive.constants import DriveErrorCode, GatewayState
from drive.controllers.media_gateway import MediaGateway
from drive.controllers.upload_controller import UploadController
from drive.factory import DriveClientFactory, create_gateway
from drive.interfaces.drive_client_interface import DriveError, create_drive_error
from drive.models.remote_media import (
    MediaProperties,
    RemoteMediaObject,
    RoleFlags,
    StorageUsage,
)
from drive.models.upload_result import UploadResult

# Public API
__all__ = [
    "DriveClientFactory",
    "DriveError",
    "DriveErrorCode",
    "GatewayState",
    "MediaGateway",
    "MediaProperties",
    "RemoteMediaObject",
    "RoleFlags",
    "StorageUsage",
    "UploadController",
    "UploadResult",
    "create_drive_error",
    "create_gateway",
]
