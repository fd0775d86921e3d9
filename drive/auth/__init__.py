"""
Authentication Package

OAuth 2.0 authentication for the Google Drive API.
"""

from drive.auth.oauth_manager import OAuthManager, run_initial_auth

__all__ = [
    "OAuthManager",
    "run_initial_auth",
]
