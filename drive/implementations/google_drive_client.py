"""
Google Drive Client Implementation

Concrete implementation of DriveClientInterface for Google Drive API v3.

Uploads up to one chunk in size go out as a single multipart request.
Larger uploads use the resumable protocol in fixed-size chunks, retrying
transient chunk failures with exponential backoff.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

try:
    from googleapiclient.discovery import build
    from googleapiclient.errors import HttpError
    from googleapiclient.http import MediaFileUpload

    GOOGLE_API_AVAILABLE = True
except ImportError:
    GOOGLE_API_AVAILABLE = False

from drive.auth.oauth_manager import OAuthManager
from drive.constants import (
    DRIVE_API_SERVICE_NAME,
    DRIVE_API_VERSION,
    DRIVE_FILE_FIELDS,
    QUOTA_ERROR_REASONS,
    RESUMABLE_CHUNK_MULTIPLE,
    RETRYABLE_STATUS_CODES,
    DriveErrorCode,
)
from drive.interfaces.drive_client_interface import (
    DriveClientInterface,
    create_drive_error,
)
from drive.models.remote_media import PROP_OWNER_ENTITY_ID
from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits


def align_chunk_size(chunk_size: int) -> int:
    """Round a chunk size down to a multiple of 256 KB (minimum 256 KB)"""
    return max(RESUMABLE_CHUNK_MULTIPLE, chunk_size - chunk_size % RESUMABLE_CHUNK_MULTIPLE)


def escape_query_value(value: str) -> str:
    """Escape a value for a Drive search query string literal"""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def owner_query(owner_entity_id: str) -> str:
    """Drive search query for files tagged with an owner"""
    return (
        f"properties has {{ key='{PROP_OWNER_ENTITY_ID}' and "
        f"value='{escape_query_value(owner_entity_id)}' }} and trashed = false"
    )


def http_error_reasons(error: "HttpError") -> List[str]:
    """Extract the machine-readable reasons from an API error body"""
    try:
        content = error.content.decode("utf-8") if isinstance(error.content, bytes) else error.content
        body = json.loads(content)
        return [item.get("reason", "") for item in body["error"].get("errors", [])]
    except (ValueError, KeyError, TypeError, AttributeError):
        return []


def parse_http_error(
    error: "HttpError",
    default: DriveErrorCode = DriveErrorCode.UNKNOWN_ERROR,
) -> DriveErrorCode:
    """
    Map an HTTP error from the Drive API to an error code.

    Args:
        error: HTTP error from the Drive API
        default: Code for statuses with no specific mapping

    Returns:
        Appropriate DriveErrorCode
    """
    status = error.resp.status
    if status == 400:
        return DriveErrorCode.INVALID_FILE
    if status == 401:
        return DriveErrorCode.AUTHENTICATION_FAILED
    if status == 403:
        if any(reason in QUOTA_ERROR_REASONS for reason in http_error_reasons(error)):
            return DriveErrorCode.QUOTA_EXCEEDED
        return DriveErrorCode.PERMISSION_DENIED
    if status == 404:
        return DriveErrorCode.FILE_NOT_FOUND
    if status == 429:
        return DriveErrorCode.QUOTA_EXCEEDED
    if status >= 500:
        return DriveErrorCode.NETWORK_ERROR
    return default


class GoogleDriveClient(DriveClientInterface):
    """
    Google Drive provider using Drive API v3.

    Features:
    - Multipart upload for small files
    - Resumable, chunked upload with retry/backoff for large files
    - Property-based owner queries, newest first
    - Error mapping onto DriveErrorCode
    """

    def __init__(
        self,
        oauth_manager: OAuthManager,
        api_key: str,
        limits: MediaLimits = DEFAULT_MEDIA_LIMITS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize Google Drive client.

        The API service is built by authenticate(), not here.

        Args:
            oauth_manager: OAuth manager for authentication
            api_key: Google API key (sent as developerKey)
            limits: Chunk size and retry policy come from here
            sleep: Backoff sleep function (injectable for tests)

        Raises:
            ImportError: If google-api-python-client is not installed
        """
        self.logger = logging.getLogger(__name__)

        if not GOOGLE_API_AVAILABLE:
            raise ImportError(
                "Google API client not available. "
                "Install with: pip install google-api-python-client",
            )

        self.oauth_manager = oauth_manager
        self.api_key = api_key
        self.limits = limits
        self._sleep = sleep
        self.drive_service = None

        self.logger.info("Google Drive Client initialized")

    # =========================================================================
    # SESSION
    # =========================================================================

    def authenticate(self) -> None:
        try:
            credentials = self.oauth_manager.get_credentials()
        except Exception as e:
            raise create_drive_error(
                DriveErrorCode.AUTHENTICATION_FAILED,
                {"reason": str(e)},
            ) from e

        try:
            self.drive_service = build(
                DRIVE_API_SERVICE_NAME,
                DRIVE_API_VERSION,
                credentials=credentials,
                developerKey=self.api_key,
                cache_discovery=False,
            )
        except Exception as e:
            raise create_drive_error(
                DriveErrorCode.INITIALIZATION_FAILED,
                {"reason": str(e)},
            ) from e

        self.logger.debug("Drive API service initialized")

    def is_authenticated(self) -> bool:
        return self.drive_service is not None and self.oauth_manager.is_authenticated()

    def revoke(self) -> bool:
        revoked = self.oauth_manager.revoke_credentials()
        self.drive_service = None
        return revoked

    def _service(self):
        if self.drive_service is None:
            raise create_drive_error(
                DriveErrorCode.INITIALIZATION_FAILED,
                {"reason": "Drive service not initialized"},
            )
        return self.drive_service

    def _execute(self, request, default: DriveErrorCode, context: str) -> Any:
        """Execute one API request, translating failures to DriveError"""
        try:
            return request.execute()
        except HttpError as e:
            code = parse_http_error(e, default)
            raise create_drive_error(
                code,
                {"operation": context, "status": e.resp.status, "reason": str(e.reason)},
            ) from e
        except OSError as e:
            raise create_drive_error(
                DriveErrorCode.NETWORK_ERROR,
                {"operation": context, "reason": str(e)},
            ) from e

    # =========================================================================
    # UPLOAD
    # =========================================================================

    def upload_object(
        self,
        path: Path,
        name: str,
        mime_type: str,
        properties: Dict[str, str],
    ) -> Dict[str, Any]:
        service = self._service()
        file_size = Path(path).stat().st_size
        body = {
            "name": name,
            "mimeType": mime_type,
            "properties": properties,
        }

        if file_size <= self.limits.chunk_size_bytes:
            self.logger.debug(f"Multipart upload: {name} ({file_size} bytes)")
            media = MediaFileUpload(str(path), mimetype=mime_type, resumable=False)
            request = service.files().create(
                body=body,
                media_body=media,
                fields=DRIVE_FILE_FIELDS,
            )
            response = self._execute(request, DriveErrorCode.UPLOAD_FAILED, "upload")
        else:
            chunk_size = align_chunk_size(self.limits.chunk_size_bytes)
            self.logger.debug(
                f"Resumable upload: {name} ({file_size} bytes, {chunk_size} byte chunks)",
            )
            media = MediaFileUpload(
                str(path),
                mimetype=mime_type,
                chunksize=chunk_size,
                resumable=True,
            )
            request = service.files().create(
                body=body,
                media_body=media,
                fields=DRIVE_FILE_FIELDS,
            )
            response = self._execute_resumable(request)

        if not response or "id" not in response:
            raise create_drive_error(
                DriveErrorCode.UPLOAD_FAILED,
                {"reason": "Upload completed but no file ID returned"},
            )
        return response

    def _backoff_seconds(self, attempt: int) -> float:
        return (self.limits.retry_delay_ms / 1000) * (2 ** (attempt - 1))

    def _execute_resumable(self, request) -> Dict[str, Any]:
        """
        Send a resumable upload chunk by chunk.

        Each chunk may be retried up to max_retries times on transient
        errors. The retry counter resets after every successful chunk.

        Raises:
            DriveError: If a chunk fails permanently or retries run out
        """
        response = None
        attempt = 0
        last_progress = 0

        while response is None:
            try:
                status, response = request.next_chunk()
                attempt = 0

                if status:
                    progress = int(status.progress() * 100)
                    if progress >= last_progress + 10:  # Log every 10%
                        self.logger.info(f"Upload progress: {progress}%")
                        last_progress = progress

            except HttpError as e:
                if e.resp.status not in RETRYABLE_STATUS_CODES:
                    raise create_drive_error(
                        parse_http_error(e, DriveErrorCode.UPLOAD_FAILED),
                        {"status": e.resp.status, "reason": str(e.reason)},
                    ) from e
                attempt = self._retry_or_raise(attempt, f"HTTP {e.resp.status}", e)

            except OSError as e:
                attempt = self._retry_or_raise(attempt, str(e), e)

        return response

    def _retry_or_raise(self, attempt: int, reason: str, error: Exception) -> int:
        attempt += 1
        if attempt > self.limits.max_retries:
            code = (
                DriveErrorCode.NETWORK_ERROR
                if isinstance(error, OSError)
                else DriveErrorCode.UPLOAD_FAILED
            )
            raise create_drive_error(
                code,
                {"reason": reason, "retries": self.limits.max_retries},
            ) from error

        delay = self._backoff_seconds(attempt)
        self.logger.warning(
            f"Retryable upload error ({reason}), "
            f"retry {attempt}/{self.limits.max_retries} in {delay:.1f}s",
        )
        self._sleep(delay)
        return attempt

    def set_public_readable(self, file_id: str) -> None:
        request = self._service().permissions().create(
            fileId=file_id,
            body={"type": "anyone", "role": "reader"},
        )
        self._execute(request, DriveErrorCode.PERMISSION_DENIED, "make public")

    # =========================================================================
    # READ / DELETE
    # =========================================================================

    def list_objects(self, owner_entity_id: str) -> List[Dict[str, Any]]:
        service = self._service()
        files: List[Dict[str, Any]] = []
        page_token: Optional[str] = None

        while True:
            request = service.files().list(
                q=owner_query(owner_entity_id),
                fields=f"nextPageToken, files({DRIVE_FILE_FIELDS})",
                orderBy="createdTime desc",
                pageToken=page_token,
            )
            response = self._execute(request, DriveErrorCode.DOWNLOAD_FAILED, "list")
            files.extend(response.get("files", []))

            page_token = response.get("nextPageToken")
            if not page_token:
                return files

    def get_object(self, file_id: str) -> Dict[str, Any]:
        request = self._service().files().get(fileId=file_id, fields=DRIVE_FILE_FIELDS)
        return self._execute(request, DriveErrorCode.DOWNLOAD_FAILED, "get")

    def delete_object(self, file_id: str) -> None:
        request = self._service().files().delete(fileId=file_id)
        self._execute(request, DriveErrorCode.UNKNOWN_ERROR, "delete")

    def get_storage_quota(self) -> Dict[str, Optional[int]]:
        request = self._service().about().get(fields="storageQuota")
        response = self._execute(request, DriveErrorCode.UNKNOWN_ERROR, "storage quota")

        quota = response.get("storageQuota", {})
        limit = quota.get("limit")
        return {
            "usage": int(quota.get("usage", 0)),
            "limit": int(limit) if limit else None,
        }
