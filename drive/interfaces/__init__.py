"""
Interfaces Package

Abstract provider contract and its error type.
"""

from drive.interfaces.drive_client_interface import (
    DriveClientInterface,
    DriveError,
    create_drive_error,
)

__all__ = [
    "DriveClientInterface",
    "DriveError",
    "create_drive_error",
]
