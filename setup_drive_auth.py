#!/usr/bin/env python3
"""
Google Drive Authentication Setup Script

Run this ONCE to authenticate with Google Drive and generate the token file.
After this, the media gateway refreshes tokens automatically as needed.

Usage:
    python setup_drive_auth.py
    python setup_drive_auth.py --port 8090

Requirements:
    1. OAuth client ID (Desktop app) from Google Cloud Console
    2. .env file with GOOGLE_DRIVE_API_KEY, GOOGLE_CLIENT_ID
       (and GOOGLE_CLIENT_SECRET for desktop clients)
    3. pip install google-auth google-auth-oauthlib google-api-python-client
"""

import argparse
import logging
import os
import sys

from config.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def validate_settings():
    """Validate the Google secrets are configured"""
    from config import settings

    if not os.path.exists(".env"):
        logger.warning("⚠️  .env file not found in project root, using process environment")

    if not settings.GOOGLE_CLIENT_ID:
        logger.error("❌ GOOGLE_CLIENT_ID not set in .env")
        logger.info("\nTo get a client ID:")
        logger.info("1. Go to: https://console.cloud.google.com/apis/credentials")
        logger.info("2. Create OAuth 2.0 Client ID (Desktop app)")
        logger.info("3. Copy the client ID and secret into .env")
        sys.exit(1)

    if not settings.GOOGLE_DRIVE_API_KEY:
        logger.warning(
            "⚠️  GOOGLE_DRIVE_API_KEY not set - the gateway will stay in degraded mode "
            "until it is added",
        )

    logger.info(f"✅ Client ID: {settings.GOOGLE_CLIENT_ID[:12]}...")
    return settings


def check_dependencies():
    """Check required Python packages are installed"""
    from drive.auth.oauth_manager import GOOGLE_AUTH_AVAILABLE
    from drive.implementations.google_drive_client import GOOGLE_API_AVAILABLE

    if not (GOOGLE_AUTH_AVAILABLE and GOOGLE_API_AVAILABLE):
        logger.error("❌ Missing required Google packages")
        logger.info("\nInstall with:")
        logger.info(
            "pip install google-auth google-auth-oauthlib google-api-python-client",
        )
        sys.exit(1)

    logger.info("✅ All required packages installed")


def run_authentication(settings, port: int):
    """Run OAuth authentication flow"""
    from drive.auth.oauth_manager import run_initial_auth

    logger.info("\n" + "=" * 60)
    logger.info("Starting Google Drive Authentication")
    logger.info("=" * 60)
    logger.info("\nSteps:")
    logger.info("1. Browser will open automatically")
    logger.info("2. Log in to the Google account that stores the media")
    logger.info("3. Grant permissions to the app")
    logger.info("4. Token will be saved automatically")
    logger.info("\nPress Enter to continue...")
    input()

    success = run_initial_auth(
        client_id=settings.GOOGLE_CLIENT_ID,
        token_path=settings.GOOGLE_DRIVE_TOKEN_PATH,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        port=port,
    )

    if success:
        logger.info("\n" + "=" * 60)
        logger.info("✅ AUTHENTICATION SUCCESSFUL!")
        logger.info("=" * 60)
        logger.info(f"\nToken saved to: {settings.GOOGLE_DRIVE_TOKEN_PATH}")
        logger.info("\nYou can now use the drive module:")
        logger.info("  from drive import create_gateway")
        logger.info("  gateway = create_gateway()")
        logger.info(
            "\n⚠️  Keep the token file secret - it grants access to your Drive files!",
        )
    else:
        logger.error("\n" + "=" * 60)
        logger.error("❌ AUTHENTICATION FAILED")
        logger.error("=" * 60)
        logger.error("\nTroubleshooting:")
        logger.error("1. Check GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET are correct")
        logger.error("2. Ensure the OAuth consent screen is configured")
        logger.error("3. Check the redirect port is free")
        sys.exit(1)


def main():
    """Main setup flow"""
    parser = argparse.ArgumentParser(description="Authorize Google Drive access")
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Local port for the OAuth redirect (default: 8080)",
    )
    args = parser.parse_args()

    setup_logging(log_to_file=False)

    logger.info("=" * 60)
    logger.info("Google Drive Authentication Setup")
    logger.info("=" * 60)

    logger.info("\n[Step 1/3] Validating configuration...")
    settings = validate_settings()

    logger.info("\n[Step 2/3] Checking dependencies...")
    check_dependencies()

    logger.info("\n[Step 3/3] Running authentication flow...")
    run_authentication(settings, args.port)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("\n\n❌ Setup cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"\n\n❌ Unexpected error: {e}", exc_info=True)
        sys.exit(1)
