"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Secrets (API keys, client IDs) should be in .env, NOT here
- Import these settings in modules: from config.settings import MAX_FILE_SIZE_BYTES
- Per-deployment limit overrides go in config/media.yaml (see media/config.py)
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# MEDIA LIMITS
# =============================================================================

# File acceptance
MAX_FILE_SIZE_BYTES = 2 * 1024 * 1024 * 1024  # 2 GB
SUPPORTED_MIME_TYPES = [
    "video/mp4",
    "video/webm",
    "video/ogg",
    "video/avi",
    "video/mov",
    "video/wmv",
    "video/flv",
]

# Upload transport
CHUNK_SIZE_BYTES = 5 * 1024 * 1024  # 5 MB chunks for resumable uploads
MAX_RETRIES = 3
RETRY_DELAY_MS = 1000  # First backoff step, doubles per retry

# Compression
COMPRESSION_TARGET_BYTES = 25 * 1024 * 1024  # 25 MB
COMPRESSION_QUALITY = 0.8  # 0.0 < q <= 1.0

# Metadata cache
CACHE_TTL_MS = 5 * 60 * 1000  # 5 minutes
CACHE_MAX_ENTRIES = 100
CACHE_SWEEP_INTERVAL_SECONDS = 60

# =============================================================================
# TRANSFORMATION CONFIGURATION
# =============================================================================

# Upper bound for any single ffmpeg/ffprobe invocation (seconds)
TRANSFORM_TIMEOUT_SECONDS = int(os.getenv("TRANSFORM_TIMEOUT_SECONDS", "60"))

# Thumbnail raster
THUMBNAIL_WIDTH = 320
THUMBNAIL_HEIGHT = 240
THUMBNAIL_QUALITY = 0.8
THUMBNAIL_SEEK_SECONDS = 1.0  # Seek min(1s, 25% of duration)
THUMBNAIL_SEEK_RATIO = 0.25

# Scratch directory for compressed output
MEDIA_WORK_DIR = Path(os.getenv("MEDIA_WORK_DIR", "./temp_media"))

# Optional YAML overrides for the limits above
MEDIA_CONFIG_PATH = Path(os.getenv("MEDIA_CONFIG_PATH", "config/media.yaml"))

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "/var/log/diamond-media")
LOG_SERVICE_FILE = "media.log"

# =============================================================================
# SECRETS (loaded from .env)
# =============================================================================
# IMPORTANT: These should NEVER be committed to version control!
# Create a .env file in the project root with these values

# Google Drive API access. Both must be present or the Drive integration
# runs in degraded mode (empty results, no exceptions).
GOOGLE_DRIVE_API_KEY = os.getenv("GOOGLE_DRIVE_API_KEY", "")
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")

# Desktop OAuth clients also carry a secret; optional for public clients
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")

# Where the authorized-user token is cached after the consent flow
GOOGLE_DRIVE_TOKEN_PATH = os.getenv(
    "GOOGLE_DRIVE_TOKEN_PATH",
    "credentials/drive_token.json",
)
