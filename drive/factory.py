"""
Drive Factory

Factory pattern for creating Drive client implementations and the gateway.
Follows same pattern as media/factory.py for consistency.

Automatically configures from environment variables (config.settings).
"""

import logging
from typing import Literal, Optional

from cache.ttl_cache import TTLCache
from config.settings import (
    CACHE_SWEEP_INTERVAL_SECONDS,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    GOOGLE_DRIVE_API_KEY,
    GOOGLE_DRIVE_TOKEN_PATH,
)
from drive.auth.oauth_manager import OAuthManager
from drive.controllers.media_gateway import MediaGateway
from drive.implementations.google_drive_client import GoogleDriveClient
from drive.implementations.mock_drive_client import MockDriveClient
from drive.interfaces.drive_client_interface import DriveClientInterface
from media.constants import DEFAULT_MEDIA_LIMITS, MediaLimits

# Type alias
DriveMode = Literal["auto", "google", "mock"]


class DriveClientFactory:
    """
    Factory for creating Drive client implementations.

    Reads configuration from environment variables:
    - GOOGLE_DRIVE_API_KEY: API key (required)
    - GOOGLE_CLIENT_ID: OAuth client ID (required)
    - GOOGLE_CLIENT_SECRET: OAuth client secret (desktop clients)
    - GOOGLE_DRIVE_TOKEN_PATH: Where the OAuth token is cached

    Usage:
        # Real client from environment
        client = DriveClientFactory.create_client(mode="google")

        # Force mock for testing
        client = DriveClientFactory.create_client(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def credentials_present(cls) -> bool:
        """True if both required Google secrets are configured"""
        return bool(GOOGLE_DRIVE_API_KEY and GOOGLE_CLIENT_ID)

    @classmethod
    def create_client(
        cls,
        mode: DriveMode = "google",
        limits: MediaLimits = DEFAULT_MEDIA_LIMITS,
        interactive: bool = True,
    ) -> DriveClientInterface:
        """
        Create a Drive client instance.

        Args:
            mode: "google"/"auto" (real client) or "mock" (in-memory)
            limits: Chunk size and retry policy for uploads
            interactive: Allow the browser consent flow

        Returns:
            DriveClientInterface implementation

        Raises:
            ValueError: If required env vars are missing
            ImportError: If Google client libraries are not installed
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Drive Client (forced)")
            return MockDriveClient()

        return cls._create_google_client(limits, interactive)

    @classmethod
    def _create_google_client(
        cls,
        limits: MediaLimits,
        interactive: bool,
    ) -> GoogleDriveClient:
        """
        Create Google Drive client from environment configuration.

        Returns:
            Configured GoogleDriveClient

        Raises:
            ValueError: If required env vars missing
        """
        if not GOOGLE_DRIVE_API_KEY:
            raise ValueError(
                "GOOGLE_DRIVE_API_KEY not set in environment. "
                "Add to .env file: GOOGLE_DRIVE_API_KEY=your-api-key"
            )

        if not GOOGLE_CLIENT_ID:
            raise ValueError(
                "GOOGLE_CLIENT_ID not set in environment. "
                "Add to .env file: GOOGLE_CLIENT_ID=your-client-id.apps.googleusercontent.com"
            )

        oauth_manager = OAuthManager(
            client_id=GOOGLE_CLIENT_ID,
            token_path=GOOGLE_DRIVE_TOKEN_PATH,
            client_secret=GOOGLE_CLIENT_SECRET,
            interactive=interactive,
        )

        cls._logger.info("Creating Google Drive Client")
        return GoogleDriveClient(
            oauth_manager=oauth_manager,
            api_key=GOOGLE_DRIVE_API_KEY,
            limits=limits,
        )


def create_gateway(
    mode: DriveMode = "auto",
    limits: MediaLimits = DEFAULT_MEDIA_LIMITS,
    interactive: bool = True,
    sweep_interval_seconds: Optional[float] = CACHE_SWEEP_INTERVAL_SECONDS,
) -> MediaGateway:
    """
    Build the process-wide media gateway.

    In "auto"/"google" mode without credentials the gateway runs degraded
    (safe empty results) rather than failing. The client itself is only
    created on the first operation that needs it.

    Args:
        mode: "auto"/"google" (real Drive) or "mock" (in-memory)
        limits: Limits for cache sizing and uploads
        interactive: Allow the browser consent flow
        sweep_interval_seconds: Background cache sweep period (None = off)

    Returns:
        MediaGateway

    Example:
        gateway = create_gateway()
        try:
            videos = gateway.get_media_by_owner("D-42")
        finally:
            gateway.close()
    """
    cache: TTLCache = TTLCache(
        max_entries=limits.cache_max_entries,
        default_ttl_ms=limits.cache_ttl_ms,
    )
    if sweep_interval_seconds:
        cache.start_sweeper(sweep_interval_seconds)

    if mode == "mock":
        client = MockDriveClient()
        return MediaGateway(
            client_factory=lambda: client,
            limits=limits,
            cache=cache,
        )

    return MediaGateway(
        client_factory=lambda: DriveClientFactory.create_client(
            mode="google",
            limits=limits,
            interactive=interactive,
        ),
        limits=limits,
        cache=cache,
        credentials_present=DriveClientFactory.credentials_present(),
    )
