"""
Remote Media Model Tests

Tests for the fixed-schema Drive property bag and file resource parsing.

To run these tests:
    pytest tests/drive/models/test_remote_media.py -v
"""

from datetime import datetime, timezone

import pytest

from drive.models.remote_media import (
    MediaProperties,
    RemoteMediaObject,
    RoleFlags,
    StorageUsage,
    content_url,
    parse_timestamp,
)


@pytest.mark.unit
def test_properties_serialize_to_strings():
    properties = MediaProperties(
        owner_entity_id="D-42",
        roles=RoleFlags(is_primary=True, show_in_gallery=True),
        uploaded_at=datetime(2025, 10, 12, 18, 30, 45, tzinfo=timezone.utc),
    )

    assert properties.to_drive_properties() == {
        "ownerEntityId": "D-42",
        "isPrimary": "true",
        "showInGallery": "true",
        "showOnHomepage": "false",
        "uploadedAt": "2025-10-12T18:30:45+00:00",
    }


@pytest.mark.unit
def test_for_upload_stamps_time():
    properties = MediaProperties.for_upload("D-42", RoleFlags())

    assert properties.uploaded_at is not None
    assert properties.uploaded_at.tzinfo is not None


@pytest.mark.unit
def test_parse_ignores_unknown_keys():
    properties = MediaProperties.from_drive_properties(
        {
            "ownerEntityId": "D-42",
            "showOnHomepage": "true",
            "somethingElse": "x",
        },
    )

    assert properties.owner_entity_id == "D-42"
    assert properties.roles == RoleFlags(show_on_homepage=True)
    assert properties.uploaded_at is None


@pytest.mark.unit
def test_parse_without_owner_returns_none():
    assert MediaProperties.from_drive_properties({"isPrimary": "true"}) is None
    assert MediaProperties.from_drive_properties(None) is None


@pytest.mark.unit
def test_from_drive_file():
    resource = {
        "id": "abc123",
        "name": "D-42_clip.mp4",
        "webViewLink": "https://drive.google.com/file/d/abc123/view",
        "webContentLink": "https://drive.google.com/uc?id=abc123&export=download",
        "size": "2048",
        "mimeType": "video/mp4",
        "properties": {"ownerEntityId": "D-42", "isPrimary": "true"},
        "createdTime": "2025-10-12T18:30:45.123Z",
    }

    media = RemoteMediaObject.from_drive_file(resource)

    assert media.id == "abc123"
    assert media.size_bytes == 2048
    assert media.owner_entity_id == "D-42"
    assert media.properties.roles.is_primary is True
    assert media.created_at == datetime(2025, 10, 12, 18, 30, 45, 123000, tzinfo=timezone.utc)
    # Derived from the id, not copied from the resource
    assert media.web_content_link == "https://drive.google.com/uc?export=view&id=abc123"
    assert media.to_dict()["owner_entity_id"] == "D-42"


@pytest.mark.unit
def test_from_drive_file_minimal():
    media = RemoteMediaObject.from_drive_file({"id": "abc"})

    assert media.size_bytes == 0
    assert media.properties is None
    assert media.owner_entity_id is None
    assert media.created_at is None


@pytest.mark.unit
def test_content_url():
    assert content_url("xyz") == "https://drive.google.com/uc?export=view&id=xyz"


@pytest.mark.unit
def test_parse_timestamp_invalid():
    assert parse_timestamp("not a date") is None
    assert parse_timestamp("") is None


@pytest.mark.unit
def test_storage_usage_percentage():
    assert StorageUsage(used_bytes=25, total_bytes=100).percentage == pytest.approx(25.0)
    assert StorageUsage(used_bytes=25, total_bytes=None).percentage is None
