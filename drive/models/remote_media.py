"""
Remote Media Models

Data classes for media objects stored in Google Drive.

Drive keeps custom file properties as a flat string -> string bag. The
MediaProperties record gives it a fixed schema: unknown keys are dropped
on read and never written.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from drive.constants import DRIVE_CONTENT_URL

# Drive property keys
PROP_OWNER_ENTITY_ID = "ownerEntityId"
PROP_IS_PRIMARY = "isPrimary"
PROP_SHOW_IN_GALLERY = "showInGallery"
PROP_SHOW_ON_HOMEPAGE = "showOnHomepage"
PROP_UPLOADED_AT = "uploadedAt"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp as returned by Drive.

    Example:
        parse_timestamp("2025-10-12T18:30:45.123Z")
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def content_url(media_id: str) -> str:
    """Canonical public content URL for a Drive file id"""
    return DRIVE_CONTENT_URL.format(id=media_id)


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class RoleFlags:
    """Where a media object is surfaced on the storefront"""

    is_primary: bool = False
    show_in_gallery: bool = False
    show_on_homepage: bool = False


@dataclass(frozen=True)
class MediaProperties:
    """Tagged properties attached to every uploaded media object"""

    owner_entity_id: str
    roles: RoleFlags = field(default_factory=RoleFlags)
    uploaded_at: Optional[datetime] = None

    @classmethod
    def for_upload(cls, owner_entity_id: str, roles: RoleFlags) -> "MediaProperties":
        """Properties stamped with the current UTC time"""
        return cls(
            owner_entity_id=owner_entity_id,
            roles=roles,
            uploaded_at=datetime.now(timezone.utc),
        )

    def to_drive_properties(self) -> Dict[str, str]:
        """Serialize to Drive's string property bag"""
        properties = {
            PROP_OWNER_ENTITY_ID: self.owner_entity_id,
            PROP_IS_PRIMARY: _flag(self.roles.is_primary),
            PROP_SHOW_IN_GALLERY: _flag(self.roles.show_in_gallery),
            PROP_SHOW_ON_HOMEPAGE: _flag(self.roles.show_on_homepage),
        }
        if self.uploaded_at:
            properties[PROP_UPLOADED_AT] = self.uploaded_at.isoformat()
        return properties

    @classmethod
    def from_drive_properties(
        cls,
        properties: Optional[Dict[str, str]],
    ) -> Optional["MediaProperties"]:
        """
        Parse Drive's property bag. Unknown keys are ignored.

        Returns:
            MediaProperties, or None if the owner tag is missing
        """
        if not properties or not properties.get(PROP_OWNER_ENTITY_ID):
            return None

        return cls(
            owner_entity_id=properties[PROP_OWNER_ENTITY_ID],
            roles=RoleFlags(
                is_primary=properties.get(PROP_IS_PRIMARY) == "true",
                show_in_gallery=properties.get(PROP_SHOW_IN_GALLERY) == "true",
                show_on_homepage=properties.get(PROP_SHOW_ON_HOMEPAGE) == "true",
            ),
            uploaded_at=parse_timestamp(properties.get(PROP_UPLOADED_AT)),
        )


@dataclass(frozen=True)
class RemoteMediaObject:
    """
    A media object as stored in Drive.

    Drive is the source of truth; instances are snapshots.
    """

    id: str
    name: str
    web_view_link: str
    web_content_link: str
    size_bytes: int
    mime_type: str
    properties: Optional[MediaProperties] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_drive_file(cls, resource: Dict[str, Any]) -> "RemoteMediaObject":
        """
        Build from a Drive file resource.

        web_content_link is always derived from the id.
        """
        media_id = resource["id"]
        return cls(
            id=media_id,
            name=resource.get("name", ""),
            web_view_link=resource.get("webViewLink", ""),
            web_content_link=content_url(media_id),
            size_bytes=int(resource.get("size") or 0),
            mime_type=resource.get("mimeType", ""),
            properties=MediaProperties.from_drive_properties(resource.get("properties")),
            created_at=parse_timestamp(resource.get("createdTime")),
        )

    @property
    def owner_entity_id(self) -> Optional[str]:
        return self.properties.owner_entity_id if self.properties else None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/display"""
        return {
            "id": self.id,
            "name": self.name,
            "web_view_link": self.web_view_link,
            "web_content_link": self.web_content_link,
            "size_bytes": self.size_bytes,
            "mime_type": self.mime_type,
            "owner_entity_id": self.owner_entity_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class StorageUsage:
    """Drive storage quota snapshot"""

    used_bytes: int
    total_bytes: Optional[int]  # None for unlimited accounts

    @property
    def percentage(self) -> Optional[float]:
        if not self.total_bytes:
            return None
        return (self.used_bytes / self.total_bytes) * 100
