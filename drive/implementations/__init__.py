"""
Implementations Package

Concrete Drive client implementations.
"""

from drive.implementations.google_drive_client import GoogleDriveClient
from drive.implementations.mock_drive_client import MockDriveClient

__all__ = [
    "GoogleDriveClient",
    "MockDriveClient",
]
