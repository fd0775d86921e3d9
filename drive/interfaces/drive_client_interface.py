"""
Drive Client Interface

Abstract interface for the remote media provider.
Follows Dependency Inversion Principle - the gateway depends on this
abstraction, not on the concrete Google API client.

Implementations return raw Drive file resources (dicts with id, name,
webViewLink, size, mimeType, properties, createdTime) and raise DriveError
for every provider failure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from drive.constants import DRIVE_ERROR_MESSAGES, DriveErrorCode


class DriveClientInterface(ABC):
    """
    Abstract base class for remote media providers.

    Any provider (Google Drive, a fake for tests, ...) must implement
    these methods.
    """

    @abstractmethod
    def authenticate(self) -> None:
        """
        Load the provider library and establish an authenticated session.

        May run an interactive consent flow if no session exists.

        Raises:
            DriveError: INITIALIZATION_FAILED or AUTHENTICATION_FAILED
        """

    @abstractmethod
    def is_authenticated(self) -> bool:
        """True if the session holds valid credentials"""

    @abstractmethod
    def upload_object(
        self,
        path: Path,
        name: str,
        mime_type: str,
        properties: Dict[str, str],
    ) -> Dict[str, Any]:
        """
        Upload a file with its tagged properties.

        Args:
            path: Local file to upload
            name: Remote file name
            mime_type: Content type
            properties: Drive custom properties (string values)

        Returns:
            Created file resource

        Raises:
            DriveError: If the provider does not report success
        """

    @abstractmethod
    def set_public_readable(self, file_id: str) -> None:
        """
        Grant anyone-with-link read access.

        Raises:
            DriveError: If the permission cannot be created
        """

    @abstractmethod
    def list_objects(self, owner_entity_id: str) -> List[Dict[str, Any]]:
        """
        List files tagged with owner_entity_id, newest first.

        Raises:
            DriveError: If the query fails
        """

    @abstractmethod
    def get_object(self, file_id: str) -> Dict[str, Any]:
        """
        Fetch one file resource.

        Raises:
            DriveError: FILE_NOT_FOUND if it does not exist
        """

    @abstractmethod
    def delete_object(self, file_id: str) -> None:
        """
        Delete a file.

        Raises:
            DriveError: If the delete fails
        """

    @abstractmethod
    def get_storage_quota(self) -> Dict[str, Optional[int]]:
        """
        Get storage quota as {"usage": bytes, "limit": bytes or None}.

        Raises:
            DriveError: If the query fails
        """

    @abstractmethod
    def revoke(self) -> bool:
        """
        Sign out: revoke the session and forget cached credentials.

        Returns:
            True if successfully revoked
        """


class DriveError(Exception):
    """
    Exception raised for Drive gateway failures.

    Callers branch on .code; .message is the stable user-facing text and
    .details carries the underlying cause.

    Examples:
    - Authentication failed
    - Network error
    - Provider rejected the file
    - Storage quota exceeded
    """

    def __init__(
        self,
        message: str,
        code: DriveErrorCode = DriveErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"DriveError(code={self.code.value}, message='{self.message}')"


def create_drive_error(
    code: DriveErrorCode,
    details: Optional[Dict[str, Any]] = None,
) -> DriveError:
    """
    Build a DriveError with the stable message for code.

    Example:
        raise create_drive_error(DriveErrorCode.UPLOAD_FAILED, {"reason": "503"})
    """
    message = DRIVE_ERROR_MESSAGES.get(
        code,
        DRIVE_ERROR_MESSAGES[DriveErrorCode.UNKNOWN_ERROR],
    )
    return DriveError(message, code, details)
