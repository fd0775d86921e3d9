"""
Google Drive Client Tests

Tests for the Drive API v3 client with the API service replaced by
MagicMock, so no network or credentials are needed.

Covers:
- HTTP error mapping
- Multipart vs resumable upload selection
- Chunk retry with exponential backoff
- Owner queries and pagination

To run these tests:
    pytest tests/drive/implementations/test_google_drive_client.py -v
"""

import json
from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from drive.constants import DriveErrorCode
from drive.implementations import google_drive_client
from drive.implementations.google_drive_client import (
    GoogleDriveClient,
    align_chunk_size,
    owner_query,
    parse_http_error,
)
from drive.interfaces.drive_client_interface import DriveError
from media.constants import MediaLimits


def make_http_error(status: int, reason: str = "") -> HttpError:
    """Build an HttpError like the API client raises"""
    body = {"error": {"code": status, "message": "boom", "errors": []}}
    if reason:
        body["error"]["errors"].append({"reason": reason, "message": "boom"})
    return HttpError(httplib2.Response({"status": status}), json.dumps(body).encode("utf-8"))


@pytest.fixture
def oauth_manager():
    manager = MagicMock()
    manager.is_authenticated.return_value = True
    return manager


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(oauth_manager, sleeps):
    """Client with a mocked service and small chunks (256 KB, 2 retries)"""
    limits = MediaLimits(chunk_size_bytes=256 * 1024, max_retries=2, retry_delay_ms=1000)
    drive_client = GoogleDriveClient(
        oauth_manager=oauth_manager,
        api_key="test-key",
        limits=limits,
        sleep=sleeps.append,
    )
    drive_client.drive_service = MagicMock()
    return drive_client


@pytest.fixture
def media_upload(monkeypatch):
    """Replace MediaFileUpload so no file handles are opened"""
    upload_class = MagicMock()
    monkeypatch.setattr(google_drive_client, "MediaFileUpload", upload_class)
    return upload_class


def write_file(tmp_path, size: int):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00" * size)
    return path


# =============================================================================
# HELPERS
# =============================================================================

@pytest.mark.unit
def test_align_chunk_size():
    assert align_chunk_size(5 * 1024 * 1024) == 5 * 1024 * 1024
    assert align_chunk_size(300 * 1024) == 256 * 1024
    assert align_chunk_size(100) == 256 * 1024


@pytest.mark.unit
def test_owner_query_escapes_quotes():
    query = owner_query("D'42")

    assert "key='ownerEntityId'" in query
    assert "value='D\\'42'" in query
    assert "trashed = false" in query


@pytest.mark.unit
@pytest.mark.parametrize(
    "status, reason, expected",
    [
        (400, "", DriveErrorCode.INVALID_FILE),
        (401, "", DriveErrorCode.AUTHENTICATION_FAILED),
        (403, "forbidden", DriveErrorCode.PERMISSION_DENIED),
        (403, "storageQuotaExceeded", DriveErrorCode.QUOTA_EXCEEDED),
        (403, "userRateLimitExceeded", DriveErrorCode.QUOTA_EXCEEDED),
        (404, "", DriveErrorCode.FILE_NOT_FOUND),
        (429, "", DriveErrorCode.QUOTA_EXCEEDED),
        (500, "", DriveErrorCode.NETWORK_ERROR),
        (503, "", DriveErrorCode.NETWORK_ERROR),
        (409, "", DriveErrorCode.UPLOAD_FAILED),
    ],
)
def test_parse_http_error(status, reason, expected):
    error = make_http_error(status, reason)

    assert parse_http_error(error, DriveErrorCode.UPLOAD_FAILED) == expected


# =============================================================================
# SESSION
# =============================================================================

@pytest.mark.unit
def test_authenticate_builds_service(monkeypatch, oauth_manager):
    build = MagicMock(return_value="service")
    monkeypatch.setattr(google_drive_client, "build", build)
    drive_client = GoogleDriveClient(oauth_manager=oauth_manager, api_key="test-key")

    drive_client.authenticate()

    assert drive_client.drive_service == "service"
    args, kwargs = build.call_args
    assert args == ("drive", "v3")
    assert kwargs["developerKey"] == "test-key"
    assert kwargs["cache_discovery"] is False
    assert kwargs["credentials"] is oauth_manager.get_credentials.return_value


@pytest.mark.unit
def test_authenticate_credential_failure(oauth_manager):
    oauth_manager.get_credentials.side_effect = RuntimeError("no token")
    drive_client = GoogleDriveClient(oauth_manager=oauth_manager, api_key="test-key")

    with pytest.raises(DriveError) as exc_info:
        drive_client.authenticate()

    assert exc_info.value.code == DriveErrorCode.AUTHENTICATION_FAILED


@pytest.mark.unit
def test_calls_before_authenticate_fail(oauth_manager):
    drive_client = GoogleDriveClient(oauth_manager=oauth_manager, api_key="test-key")

    with pytest.raises(DriveError) as exc_info:
        drive_client.get_object("abc")

    assert exc_info.value.code == DriveErrorCode.INITIALIZATION_FAILED
    assert drive_client.is_authenticated() is False


@pytest.mark.unit
def test_revoke_drops_service(client, oauth_manager):
    oauth_manager.revoke_credentials.return_value = True

    assert client.revoke() is True
    assert client.drive_service is None


# =============================================================================
# UPLOAD
# =============================================================================

@pytest.mark.unit
def test_small_file_uses_multipart(client, media_upload, tmp_path):
    path = write_file(tmp_path, 1024)
    request = client.drive_service.files.return_value.create.return_value
    request.execute.return_value = {"id": "file-1", "name": "D-42_clip.mp4"}

    response = client.upload_object(path, "D-42_clip.mp4", "video/mp4", {"ownerEntityId": "D-42"})

    assert response["id"] == "file-1"
    assert media_upload.call_args.kwargs["resumable"] is False
    create_kwargs = client.drive_service.files.return_value.create.call_args.kwargs
    assert create_kwargs["body"]["properties"] == {"ownerEntityId": "D-42"}
    assert create_kwargs["body"]["name"] == "D-42_clip.mp4"


@pytest.mark.unit
def test_multipart_http_error_is_mapped(client, media_upload, tmp_path):
    path = write_file(tmp_path, 1024)
    request = client.drive_service.files.return_value.create.return_value
    request.execute.side_effect = make_http_error(403, "storageQuotaExceeded")

    with pytest.raises(DriveError) as exc_info:
        client.upload_object(path, "clip.mp4", "video/mp4", {})

    assert exc_info.value.code == DriveErrorCode.QUOTA_EXCEEDED


@pytest.mark.unit
def test_large_file_uses_resumable_chunks(client, media_upload, tmp_path, sleeps):
    path = write_file(tmp_path, 600 * 1024)
    progress = MagicMock()
    progress.progress.return_value = 0.5
    request = client.drive_service.files.return_value.create.return_value
    request.next_chunk.side_effect = [
        (progress, None),
        (None, {"id": "file-2"}),
    ]

    response = client.upload_object(path, "clip.mp4", "video/mp4", {})

    assert response["id"] == "file-2"
    assert media_upload.call_args.kwargs["resumable"] is True
    assert media_upload.call_args.kwargs["chunksize"] == 256 * 1024
    assert sleeps == []


@pytest.mark.unit
def test_transient_chunk_error_is_retried(client, media_upload, tmp_path, sleeps):
    path = write_file(tmp_path, 600 * 1024)
    request = client.drive_service.files.return_value.create.return_value
    request.next_chunk.side_effect = [
        make_http_error(503),
        ConnectionResetError("reset"),
        (None, {"id": "file-3"}),
    ]

    response = client.upload_object(path, "clip.mp4", "video/mp4", {})

    assert response["id"] == "file-3"
    assert sleeps == [1.0, 2.0]  # exponential backoff from retry_delay_ms


@pytest.mark.unit
def test_retries_exhausted(client, media_upload, tmp_path, sleeps):
    path = write_file(tmp_path, 600 * 1024)
    request = client.drive_service.files.return_value.create.return_value
    request.next_chunk.side_effect = make_http_error(503)

    with pytest.raises(DriveError) as exc_info:
        client.upload_object(path, "clip.mp4", "video/mp4", {})

    assert exc_info.value.code == DriveErrorCode.UPLOAD_FAILED
    assert sleeps == [1.0, 2.0]
    assert request.next_chunk.call_count == 3


@pytest.mark.unit
def test_permanent_chunk_error_not_retried(client, media_upload, tmp_path, sleeps):
    path = write_file(tmp_path, 600 * 1024)
    request = client.drive_service.files.return_value.create.return_value
    request.next_chunk.side_effect = make_http_error(400)

    with pytest.raises(DriveError) as exc_info:
        client.upload_object(path, "clip.mp4", "video/mp4", {})

    assert exc_info.value.code == DriveErrorCode.INVALID_FILE
    assert sleeps == []


@pytest.mark.unit
def test_upload_without_id_fails(client, media_upload, tmp_path):
    path = write_file(tmp_path, 1024)
    request = client.drive_service.files.return_value.create.return_value
    request.execute.return_value = {}

    with pytest.raises(DriveError) as exc_info:
        client.upload_object(path, "clip.mp4", "video/mp4", {})

    assert exc_info.value.code == DriveErrorCode.UPLOAD_FAILED


@pytest.mark.unit
def test_set_public_readable(client):
    client.set_public_readable("file-1")

    kwargs = client.drive_service.permissions.return_value.create.call_args.kwargs
    assert kwargs["fileId"] == "file-1"
    assert kwargs["body"] == {"type": "anyone", "role": "reader"}


# =============================================================================
# READ / DELETE
# =============================================================================

@pytest.mark.unit
def test_list_objects_follows_pages(client):
    files_api = client.drive_service.files.return_value
    files_api.list.return_value.execute.side_effect = [
        {"files": [{"id": "a"}], "nextPageToken": "page-2"},
        {"files": [{"id": "b"}]},
    ]

    result = client.list_objects("D-42")

    assert [item["id"] for item in result] == ["a", "b"]
    first_call, second_call = files_api.list.call_args_list
    assert first_call.kwargs["pageToken"] is None
    assert second_call.kwargs["pageToken"] == "page-2"
    assert first_call.kwargs["orderBy"] == "createdTime desc"
    assert "value='D-42'" in first_call.kwargs["q"]


@pytest.mark.unit
def test_get_object_not_found(client):
    files_api = client.drive_service.files.return_value
    files_api.get.return_value.execute.side_effect = make_http_error(404)

    with pytest.raises(DriveError) as exc_info:
        client.get_object("missing")

    assert exc_info.value.code == DriveErrorCode.FILE_NOT_FOUND


@pytest.mark.unit
def test_network_failure_maps_to_network_error(client):
    files_api = client.drive_service.files.return_value
    files_api.delete.return_value.execute.side_effect = TimeoutError("timed out")

    with pytest.raises(DriveError) as exc_info:
        client.delete_object("abc")

    assert exc_info.value.code == DriveErrorCode.NETWORK_ERROR


@pytest.mark.unit
def test_storage_quota(client):
    about_api = client.drive_service.about.return_value
    about_api.get.return_value.execute.return_value = {
        "storageQuota": {"usage": "1024", "limit": "4096"},
    }

    assert client.get_storage_quota() == {"usage": 1024, "limit": 4096}


@pytest.mark.unit
def test_storage_quota_unlimited(client):
    about_api = client.drive_service.about.return_value
    about_api.get.return_value.execute.return_value = {"storageQuota": {"usage": "10"}}

    assert client.get_storage_quota() == {"usage": 10, "limit": None}
