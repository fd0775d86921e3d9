"""
OAuth Manager

Handles Google OAuth 2.0 authentication for the Drive API.
Uses a cached refresh token for automated, long-lived authentication.

Flow:
1. Initial setup: run setup_drive_auth.py once (or let the first
   initialize() open the consent page) to generate the token file
2. Runtime: this class loads the token file and refreshes as needed
3. Token refresh: happens automatically when needed
"""

import logging
import os
from typing import Any, Dict, Optional

try:
    from google.auth.transport.requests import Request
    from google.oauth2.credentials import Credentials
    from google_auth_oauthlib.flow import InstalledAppFlow

    GOOGLE_AUTH_AVAILABLE = True
except ImportError:
    GOOGLE_AUTH_AVAILABLE = False

from drive.constants import (
    DRIVE_SCOPES,
    GOOGLE_AUTH_URI,
    GOOGLE_TOKEN_URI,
    OAUTH_LOCAL_PORT,
)

GOOGLE_REVOKE_URI = "https://oauth2.googleapis.com/revoke"


def build_client_config(client_id: str, client_secret: str = "") -> Dict[str, Any]:
    """Installed-app client config for InstalledAppFlow"""
    return {
        "installed": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": GOOGLE_AUTH_URI,
            "token_uri": GOOGLE_TOKEN_URI,
            "redirect_uris": ["http://localhost"],
        },
    }


class OAuthManager:
    """
    Manages Google OAuth 2.0 authentication.

    This class:
    - Loads credentials from the token file
    - Refreshes expired tokens automatically
    - Runs the consent flow when no usable token exists (interactive mode)
    - Revokes credentials on sign-out
    """

    def __init__(
        self,
        client_id: str,
        token_path: str,
        client_secret: str = "",
        interactive: bool = True,
        port: int = OAUTH_LOCAL_PORT,
    ):
        """
        Initialize OAuth manager.

        Nothing is loaded until get_credentials() is called.

        Args:
            client_id: OAuth client ID from Google Cloud
            token_path: Where the authorized-user token is cached
            client_secret: OAuth client secret (desktop clients)
            interactive: Allow opening a browser for consent
            port: Local port for the consent redirect

        Raises:
            ImportError: If google-auth libraries are not installed
        """
        self.logger = logging.getLogger(__name__)

        if not GOOGLE_AUTH_AVAILABLE:
            raise ImportError(
                "Google auth libraries not available. "
                "Install with: pip install google-auth google-auth-oauthlib",
            )

        self.client_id = client_id
        self.client_secret = client_secret
        self.token_path = token_path
        self.interactive = interactive
        self.port = port
        self.credentials: Optional[Credentials] = None

        self.logger.info("OAuth Manager initialized")

    def _load_credentials(self) -> None:
        """Load credentials from the token file, refreshing if expired"""
        if not os.path.exists(self.token_path):
            self.logger.debug(f"Token file not found: {self.token_path}")
            return

        self.credentials = Credentials.from_authorized_user_file(
            self.token_path,
            DRIVE_SCOPES,
        )

        if (
            self.credentials
            and self.credentials.expired
            and self.credentials.refresh_token
        ):
            self.logger.info("Access token expired, refreshing...")
            self.credentials.refresh(Request())
            self._save_credentials()
            self.logger.info("Access token refreshed successfully")

    def authorize(self) -> None:
        """Open the browser consent page and store the resulting token"""
        self.logger.info("🔐 No valid session, requesting authorization...")
        flow = InstalledAppFlow.from_client_config(
            build_client_config(self.client_id, self.client_secret),
            DRIVE_SCOPES,
        )
        self.credentials = flow.run_local_server(port=self.port)
        self._save_credentials()
        self.logger.info("✅ Authorization granted")

    def _save_credentials(self) -> None:
        """Save credentials back to the token file"""
        try:
            token_dir = os.path.dirname(self.token_path)
            if token_dir:
                os.makedirs(token_dir, exist_ok=True)
            with open(self.token_path, "w") as token_file:
                token_file.write(self.credentials.to_json())
            self.logger.debug("Credentials saved to token file")
        except OSError as e:
            self.logger.warning(f"Failed to save credentials: {e}")

    def get_credentials(self) -> "Credentials":
        """
        Get valid OAuth credentials.

        Loads the token file on first use, refreshes expired tokens, and
        runs the consent flow if allowed and nothing usable exists.

        Returns:
            Valid Google OAuth credentials

        Raises:
            RuntimeError: If credentials cannot be obtained
        """
        if self.credentials is None:
            self._load_credentials()

        if (
            self.credentials
            and self.credentials.expired
            and self.credentials.refresh_token
        ):
            self.logger.debug("Token expired, refreshing...")
            self.credentials.refresh(Request())
            self._save_credentials()

        if not self.credentials or not self.credentials.valid:
            if not self.interactive:
                raise RuntimeError(
                    "Cannot get valid credentials. "
                    "Run 'python setup_drive_auth.py' to authenticate",
                )
            self.authorize()

        if not self.credentials or not self.credentials.valid:
            raise RuntimeError("Authorization did not produce valid credentials")

        return self.credentials

    def is_authenticated(self) -> bool:
        """
        Check if currently holding valid credentials.

        Never starts the consent flow.
        """
        return self.credentials is not None and self.credentials.valid

    def revoke_credentials(self) -> bool:
        """
        Revoke current credentials.

        This signs the application out. The next session needs consent again.

        Returns:
            True if successfully revoked
        """
        try:
            if self.credentials and self.credentials.token:
                Request()(
                    url=f"{GOOGLE_REVOKE_URI}?token={self.credentials.token}",
                    method="POST",
                    headers={"content-type": "application/x-www-form-urlencoded"},
                )

            if os.path.exists(self.token_path):
                os.remove(self.token_path)

            self.credentials = None
            self.logger.info("Credentials revoked")
            return True

        except Exception as e:
            self.logger.error(f"Failed to revoke credentials: {e}")
            return False


def run_initial_auth(
    client_id: str,
    token_path: str,
    client_secret: str = "",
    port: int = OAUTH_LOCAL_PORT,
) -> bool:
    """
    Run initial OAuth authentication flow.

    Standalone function for the setup script.
    Opens browser for user to grant permissions.

    Returns:
        True if authentication successful
    """
    logger = logging.getLogger(__name__)

    if not GOOGLE_AUTH_AVAILABLE:
        logger.error("Google auth libraries not installed")
        return False

    try:
        manager = OAuthManager(
            client_id=client_id,
            token_path=token_path,
            client_secret=client_secret,
            interactive=True,
            port=port,
        )
        manager.authorize()
        logger.info(f"✅ Authentication successful! Token saved to: {token_path}")
        return True

    except Exception as e:
        logger.error(f"Authentication failed: {e}")
        return False
