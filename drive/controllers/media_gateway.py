"""
Media Gateway

Owns the Drive session lifecycle and every remote media operation.

State machine:
    UNINITIALIZED -> INITIALIZING -> READY
                          |
                          v
                        FAILED

Missing credentials put the gateway in a degraded mode: FAILED for the
lifetime of the process, and every public method returns a safe empty
value (None, [], False) instead of raising.

Reads go through the TTL cache first (keys "owner:{id}" and "media:{id}").
Writes never touch the cache, so a listing may lag an upload or delete by
at most one TTL.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from cache.ttl_cache import TTLCache
from drive.constants import (
    MEDIA_CACHE_KEY,
    OWNER_CACHE_KEY,
    DriveErrorCode,
    GatewayState,
)
from drive.interfaces.drive_client_interface import (
    DriveClientInterface,
    DriveError,
    create_drive_error,
)
from drive.models.remote_media import (
    MediaProperties,
    RemoteMediaObject,
    RoleFlags,
    StorageUsage,
)
from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits
from media.models.media_file import MediaFile

CachedValue = Union[RemoteMediaObject, List[RemoteMediaObject]]

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class MediaGateway:
    """
    Remote media gateway backed by a DriveClientInterface.

    Construct one per process and pass it to whatever needs it.

    Usage:
        gateway = MediaGateway(client_factory=lambda: MockDriveClient())
        remote = gateway.upload_media(media_file, "D-42", RoleFlags(is_primary=True))
        videos = gateway.get_media_by_owner("D-42")
    """

    def __init__(
        self,
        client_factory: Callable[[], DriveClientInterface],
        limits: MediaLimits = DEFAULT_MEDIA_LIMITS,
        cache: Optional[TTLCache] = None,
        credentials_present: bool = True,
    ):
        """
        Initialize gateway. No network or library work happens here.

        Args:
            client_factory: Builds the provider client on initialize()
            limits: Cache sizing comes from here
            cache: Shared cache (default: new TTLCache from limits)
            credentials_present: False puts the gateway in degraded mode
        """
        self.logger = logging.getLogger(__name__)
        self.limits = limits
        self.cache: TTLCache[CachedValue] = cache if cache is not None else TTLCache(
            max_entries=limits.cache_max_entries,
            default_ttl_ms=limits.cache_ttl_ms,
        )
        self.credentials_present = credentials_present

        self._client_factory = client_factory
        self._client: Optional[DriveClientInterface] = None
        self._state = GatewayState.UNINITIALIZED

        if not credentials_present:
            self.logger.warning(
                "Google Drive credentials not configured, "
                "media gateway running in degraded mode",
            )

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def state(self) -> GatewayState:
        return self._state

    @property
    def is_degraded(self) -> bool:
        return not self.credentials_present

    def initialize(self) -> bool:
        """
        Bring the Drive session to READY.

        Returns:
            True if READY, False in degraded mode

        Raises:
            DriveError: INITIALIZATION_FAILED or AUTHENTICATION_FAILED
        """
        if self._state == GatewayState.READY:
            return True

        if not self.credentials_present:
            self._state = GatewayState.FAILED
            return False

        self._state = GatewayState.INITIALIZING
        self.logger.info("Initializing Google Drive session...")

        try:
            if self._client is None:
                self._client = self._client_factory()
        except DriveError:
            self._state = GatewayState.FAILED
            raise
        except Exception as e:
            self._state = GatewayState.FAILED
            self.logger.error(f"❌ Failed to load Drive client: {e}")
            raise create_drive_error(
                DriveErrorCode.INITIALIZATION_FAILED,
                {"reason": str(e)},
            ) from e

        try:
            self._client.authenticate()
        except DriveError as e:
            self._state = GatewayState.FAILED
            self.logger.error(f"❌ Drive authentication failed: {e.message}")
            raise
        except Exception as e:
            self._state = GatewayState.FAILED
            self.logger.error(f"❌ Drive authentication failed: {e}")
            raise create_drive_error(
                DriveErrorCode.AUTHENTICATION_FAILED,
                {"reason": str(e)},
            ) from e

        self._state = GatewayState.READY
        self.logger.info("✅ Google Drive session ready")
        return True

    def _ensure_ready(self) -> bool:
        """Lazy initialize. False only in degraded mode."""
        if self._state == GatewayState.READY:
            return True
        return self.initialize()

    def is_signed_in(self) -> bool:
        return (
            self._state == GatewayState.READY
            and self._client is not None
            and self._client.is_authenticated()
        )

    def sign_out(self) -> bool:
        """
        Revoke the session and drop cached reads.

        Returns:
            True if the provider confirmed the revoke
        """
        if self._client is None:
            return False

        revoked = self._client.revoke()
        self._state = GatewayState.UNINITIALIZED
        self.cache.clear()
        self.logger.info("Signed out of Google Drive")
        return revoked

    def close(self) -> None:
        """Stop background cache sweeping, if running"""
        self.cache.stop_sweeper()

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def upload_media(
        self,
        media_file: MediaFile,
        owner_entity_id: str,
        roles: RoleFlags = RoleFlags(),
        name: Optional[str] = None,
    ) -> Optional[RemoteMediaObject]:
        """
        Upload a validated file and tag it with its owner and roles.

        The file is made publicly readable afterwards; if that fails the
        upload still succeeds and a warning is logged.

        Args:
            media_file: File to upload (already validated/compressed)
            owner_entity_id: Catalog entity the media belongs to
            roles: Where the media is surfaced
            name: Remote file name (default "{owner}_{original name}")

        Returns:
            RemoteMediaObject, or None in degraded mode

        Raises:
            DriveError: UPLOAD_FAILED, AUTHENTICATION_FAILED, INVALID_FILE,
                QUOTA_EXCEEDED, ... as reported by the provider
        """
        if not self._ensure_ready():
            self.logger.warning(f"Drive unavailable, skipping upload of {media_file.name}")
            return None

        remote_name = name or f"{owner_entity_id}_{media_file.name}"
        properties = MediaProperties.for_upload(owner_entity_id, roles)

        self.logger.info(
            f"Uploading {remote_name} ({media_file.size_bytes} bytes) for {owner_entity_id}",
        )

        try:
            resource = self._client.upload_object(
                media_file.path,
                remote_name,
                media_file.mime_type,
                properties.to_drive_properties(),
            )
        except DriveError as e:
            self.logger.error(f"❌ Upload failed: {e.code.value} {e.details}")
            raise
        except Exception as e:
            self.logger.error(f"❌ Upload failed: {e}")
            raise create_drive_error(
                DriveErrorCode.UPLOAD_FAILED,
                {"reason": str(e)},
            ) from e

        remote = RemoteMediaObject.from_drive_file(resource)

        try:
            self._client.set_public_readable(remote.id)
        except Exception as e:
            self.logger.warning(f"Could not make {remote.id} public: {e}")

        self.logger.info(f"✅ Uploaded {remote.name} -> {remote.id}")
        return remote

    def delete_media(self, media_id: str) -> bool:
        """
        Delete a media object.

        Cached listings are left alone and may show the object until
        they expire.

        Returns:
            True if deleted; False in degraded mode or if already gone

        Raises:
            DriveError: For any other provider failure
        """
        if not self._ensure_ready():
            return False

        try:
            self._client.delete_object(media_id)
        except DriveError as e:
            if e.code == DriveErrorCode.FILE_NOT_FOUND:
                self.logger.warning(f"Media {media_id} not found, nothing to delete")
                return False
            self.logger.error(f"❌ Delete failed for {media_id}: {e.code.value}")
            raise

        self.logger.info(f"Deleted media {media_id}")
        return True

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_media_by_owner(self, owner_entity_id: str) -> List[RemoteMediaObject]:
        """
        List an owner's media, newest first.

        Never raises: provider failures with nothing cached return [].
        """
        key = OWNER_CACHE_KEY.format(owner_entity_id=owner_entity_id)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug(f"Cache hit: {key}")
            return list(cached)

        if self.is_degraded:
            return []

        try:
            self._ensure_ready()
            resources = self._client.list_objects(owner_entity_id)
        except Exception as e:
            self.logger.error(f"Failed to list media for {owner_entity_id}: {e}")
            return []

        media = sorted(
            (RemoteMediaObject.from_drive_file(resource) for resource in resources),
            key=lambda item: item.created_at or _EPOCH,
            reverse=True,
        )
        self.cache.set(key, media)
        return list(media)

    def get_media(self, media_id: str) -> Optional[RemoteMediaObject]:
        """
        Fetch a single media object.

        Returns:
            RemoteMediaObject, or None if missing, unreachable or degraded
        """
        key = MEDIA_CACHE_KEY.format(media_id=media_id)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug(f"Cache hit: {key}")
            return cached

        if self.is_degraded:
            return None

        try:
            self._ensure_ready()
            resource = self._client.get_object(media_id)
        except DriveError as e:
            if e.code != DriveErrorCode.FILE_NOT_FOUND:
                self.logger.error(f"Failed to get media {media_id}: {e.code.value}")
            return None
        except Exception as e:
            self.logger.error(f"Failed to get media {media_id}: {e}")
            return None

        media = RemoteMediaObject.from_drive_file(resource)
        self.cache.set(key, media)
        return media

    def get_storage_usage(self) -> Optional[StorageUsage]:
        """Drive quota snapshot, or None if unavailable"""
        if self.is_degraded:
            return None

        try:
            self._ensure_ready()
            quota = self._client.get_storage_quota()
        except Exception as e:
            self.logger.error(f"Failed to get storage usage: {e}")
            return None

        return StorageUsage(used_bytes=quota["usage"] or 0, total_bytes=quota["limit"])

    def __repr__(self) -> str:
        return f"MediaGateway(state={self._state.value}, cache={self.cache!r})"
