"""
Drive Constants

Centralized configuration for the Google Drive media module.
Following the same pattern as media/constants.py for consistency.
"""

from enum import Enum

# =============================================================================
# GOOGLE DRIVE API CONFIGURATION
# =============================================================================

# OAuth 2.0 scope: only files created by this app
# https://developers.google.com/drive/api/guides/api-specific-auth
DRIVE_SCOPES = [
    "https://www.googleapis.com/auth/drive.file",
]

# Drive API service details
DRIVE_API_SERVICE_NAME = "drive"
DRIVE_API_VERSION = "v3"

# OAuth endpoints for the installed-app consent flow
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Local port for the OAuth consent redirect
OAUTH_LOCAL_PORT = 8080

# Canonical public content URL, derived from the file id rather than
# trusting whatever URL the API returns
DRIVE_CONTENT_URL = "https://drive.google.com/uc?export=view&id={id}"

# Fields requested for every file resource
DRIVE_FILE_FIELDS = "id,name,webViewLink,webContentLink,size,mimeType,properties,createdTime"

# Resumable chunks must be multiples of 256 KB
RESUMABLE_CHUNK_MULTIPLE = 256 * 1024

# HTTP statuses worth retrying a chunk for
RETRYABLE_STATUS_CODES = [429, 500, 502, 503, 504]

# 403 reasons that mean quota/rate rather than permission
QUOTA_ERROR_REASONS = [
    "storageQuotaExceeded",
    "quotaExceeded",
    "userRateLimitExceeded",
    "rateLimitExceeded",
    "dailyLimitExceeded",
]

# =============================================================================
# CACHE KEYS
# =============================================================================

OWNER_CACHE_KEY = "owner:{owner_entity_id}"
MEDIA_CACHE_KEY = "media:{media_id}"

# =============================================================================
# GATEWAY STATE
# =============================================================================


class GatewayState(Enum):
    """Remote session lifecycle"""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


# =============================================================================
# ERROR TAXONOMY
# =============================================================================


class DriveErrorCode(Enum):
    """Closed set of gateway failure codes"""

    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    DOWNLOAD_FAILED = "DOWNLOAD_FAILED"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    INVALID_FILE = "INVALID_FILE"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# One stable user-facing message per code
DRIVE_ERROR_MESSAGES = {
    DriveErrorCode.INITIALIZATION_FAILED: "Failed to initialize Google Drive API",
    DriveErrorCode.AUTHENTICATION_FAILED: "Authentication failed. Please sign in again.",
    DriveErrorCode.UPLOAD_FAILED: "Failed to upload video to Google Drive",
    DriveErrorCode.DOWNLOAD_FAILED: "Failed to download video from Google Drive",
    DriveErrorCode.FILE_NOT_FOUND: "Video file not found",
    DriveErrorCode.PERMISSION_DENIED: "Permission denied. Please check file permissions.",
    DriveErrorCode.QUOTA_EXCEEDED: "Storage quota exceeded. Please free up space.",
    DriveErrorCode.INVALID_FILE: "Invalid video file. Please check file type and size.",
    DriveErrorCode.NETWORK_ERROR: "Network error. Please check your connection.",
    DriveErrorCode.UNKNOWN_ERROR: "An unknown error occurred.",
}
