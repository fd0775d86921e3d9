"""
Mock Drive Client Implementation

In-memory Drive for testing without Google credentials.
Similar to MockTranscoder in the media module.
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set
from uuid import uuid4

from drive.constants import DriveErrorCode
from drive.interfaces.drive_client_interface import (
    DriveClientInterface,
    create_drive_error,
)
from drive.models.remote_media import PROP_OWNER_ENTITY_ID

# Operations that can be told to fail
MOCK_OPERATIONS = {
    "authenticate",
    "upload",
    "set_public",
    "list",
    "get",
    "delete",
    "quota",
}


class MockDriveClient(DriveClientInterface):
    """
    Mock Drive client for testing.

    Stores file resources in a dict, shaped like the real API's.
    Useful for:
    - Unit tests
    - Development without Google credentials
    - CI/CD pipelines
    """

    def __init__(
        self,
        quota_limit: Optional[int] = 15 * 1024 ** 3,
    ):
        """
        Initialize mock Drive client.

        Args:
            quota_limit: Reported storage limit (None for unlimited)

        Example:
            client = MockDriveClient()
            client.fail_on("set_public")  # Uploads succeed, sharing fails
        """
        self.logger = logging.getLogger(__name__)
        self.quota_limit = quota_limit

        self.files: Dict[str, Dict[str, Any]] = {}
        self.permissions: Dict[str, List[Dict[str, str]]] = {}
        self.authenticated = False

        # Call tracking for tests
        self.upload_history: List[Dict[str, Any]] = []
        self.call_counts: Dict[str, int] = {op: 0 for op in MOCK_OPERATIONS}

        self._failures: Dict[str, DriveErrorCode] = {}

        # Monotonic fake clock so createdTime ordering is deterministic
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

        self.logger.info("Mock Drive Client initialized")

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def fail_on(
        self,
        operation: str,
        code: DriveErrorCode = DriveErrorCode.NETWORK_ERROR,
    ) -> None:
        """
        Make an operation raise DriveError(code) until cleared.

        Args:
            operation: One of MOCK_OPERATIONS
            code: Error code to raise
        """
        if operation not in MOCK_OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        self._failures[operation] = code

    def clear_failures(self) -> None:
        self._failures.clear()

    def add_fake_file(
        self,
        owner_entity_id: str,
        name: str = "video.mp4",
        size: int = 1024,
        mime_type: str = "video/mp4",
        properties: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Insert a file resource directly, bypassing upload"""
        props = {PROP_OWNER_ENTITY_ID: owner_entity_id}
        props.update(properties or {})
        return self._store(name, mime_type, size, props)

    def get_last_upload(self) -> Optional[Dict[str, Any]]:
        return self.upload_history[-1] if self.upload_history else None

    def is_public(self, file_id: str) -> bool:
        return any(p.get("type") == "anyone" for p in self.permissions.get(file_id, []))

    def _check(self, operation: str) -> None:
        self.call_counts[operation] += 1
        code = self._failures.get(operation)
        if code:
            self.logger.debug(f"[MOCK] Simulated {operation} failure: {code.value}")
            raise create_drive_error(code, {"reason": "simulated"})

    def _next_timestamp(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat().replace("+00:00", "Z")

    def _store(
        self,
        name: str,
        mime_type: str,
        size: int,
        properties: Dict[str, str],
    ) -> Dict[str, Any]:
        file_id = f"mock_{uuid4().hex[:16]}"
        resource = {
            "id": file_id,
            "name": name,
            "mimeType": mime_type,
            "size": str(size),
            "webViewLink": f"https://drive.google.com/file/d/{file_id}/view",
            "webContentLink": f"https://drive.google.com/uc?id={file_id}&export=download",
            "properties": dict(properties),
            "createdTime": self._next_timestamp(),
        }
        self.files[file_id] = resource
        return dict(resource)

    # =========================================================================
    # INTERFACE
    # =========================================================================

    def authenticate(self) -> None:
        self._check("authenticate")
        self.authenticated = True
        self.logger.info("[MOCK] ✅ Authenticated")

    def is_authenticated(self) -> bool:
        return self.authenticated

    def upload_object(
        self,
        path: Path,
        name: str,
        mime_type: str,
        properties: Dict[str, str],
    ) -> Dict[str, Any]:
        self._check("upload")

        path = Path(path)
        if not path.exists():
            raise create_drive_error(
                DriveErrorCode.INVALID_FILE,
                {"reason": f"File not found: {path}"},
            )

        resource = self._store(name, mime_type, path.stat().st_size, properties)
        self.upload_history.append(
            {
                "file_id": resource["id"],
                "path": str(path),
                "name": name,
                "mime_type": mime_type,
                "properties": dict(properties),
            },
        )
        self.logger.info(f"[MOCK] ✅ Uploaded: {name} -> {resource['id']}")
        return resource

    def set_public_readable(self, file_id: str) -> None:
        self._check("set_public")
        if file_id not in self.files:
            raise create_drive_error(DriveErrorCode.FILE_NOT_FOUND, {"file_id": file_id})
        self.permissions.setdefault(file_id, []).append({"type": "anyone", "role": "reader"})

    def list_objects(self, owner_entity_id: str) -> List[Dict[str, Any]]:
        self._check("list")
        matches = [
            dict(resource)
            for resource in self.files.values()
            if resource["properties"].get(PROP_OWNER_ENTITY_ID) == owner_entity_id
        ]
        matches.sort(key=lambda r: r["createdTime"], reverse=True)
        return matches

    def get_object(self, file_id: str) -> Dict[str, Any]:
        self._check("get")
        if file_id not in self.files:
            raise create_drive_error(DriveErrorCode.FILE_NOT_FOUND, {"file_id": file_id})
        return dict(self.files[file_id])

    def delete_object(self, file_id: str) -> None:
        self._check("delete")
        if file_id not in self.files:
            raise create_drive_error(DriveErrorCode.FILE_NOT_FOUND, {"file_id": file_id})
        del self.files[file_id]
        self.permissions.pop(file_id, None)

    def get_storage_quota(self) -> Dict[str, Optional[int]]:
        self._check("quota")
        usage = sum(int(resource["size"]) for resource in self.files.values())
        return {"usage": usage, "limit": self.quota_limit}

    def revoke(self) -> bool:
        self.authenticated = False
        self.logger.info("[MOCK] Credentials revoked")
        return True

    @property
    def failing_operations(self) -> Set[str]:
        return set(self._failures)
