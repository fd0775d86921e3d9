#!/usr/bin/env python3
"""
Upload Media - Ingest Script

Validates, compresses and uploads video files for one catalog entity.

Usage:
    python scripts/upload_media.py D-42 clip.mp4                  # Dry run - validate only
    python scripts/upload_media.py D-42 clip.mp4 --upload --primary
    python scripts/upload_media.py D-42 videos/*.mp4 --upload --gallery --mock

Safety:
    - Dry run by default (requires --upload to actually upload)
    - Continues on errors (one failed upload won't stop the rest)
    - Compressed scratch files are always removed
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging_setup import setup_logging
from config.settings import MEDIA_CONFIG_PATH
from drive import RoleFlags, UploadController, create_gateway
from media import MediaFile, format_size, load_media_limits, validate_media_file
from media.factory import create_pipeline, create_transcoder

logger = logging.getLogger(__name__)


def validate_files(paths: list[Path], limits) -> list[Path]:
    """
    Validate each file against the configured limits.

    Returns:
        Paths that passed validation
    """
    valid = []
    for path in paths:
        try:
            media_file = MediaFile.from_path(path)
        except OSError:
            logger.warning(f"  ✗ {path} (not found)")
            continue

        verdict = validate_media_file(media_file, limits)
        if verdict.is_valid:
            logger.info(f"  ✓ {media_file.name} ({format_size(media_file.size_bytes)})")
            valid.append(path)
        else:
            logger.warning(f"  ✗ {media_file.name}: {', '.join(verdict.errors)}")
    return valid


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Upload promotional videos to Google Drive",
        epilog="""
Examples:
  %(prog)s D-42 clip.mp4                      # Dry run - validate only
  %(prog)s D-42 clip.mp4 --upload --primary   # Upload as the primary video
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("owner", help="Owner entity ID (e.g. diamond listing ID)")
    parser.add_argument("files", nargs="+", type=Path, help="Video files to upload")

    parser.add_argument(
        "--upload",
        action="store_true",
        help="Actually upload videos (default is dry run)",
    )
    parser.add_argument("--primary", action="store_true", help="Mark as primary video")
    parser.add_argument("--gallery", action="store_true", help="Show in gallery")
    parser.add_argument("--homepage", action="store_true", help="Show on homepage")
    parser.add_argument(
        "--unique-names",
        action="store_true",
        help="Name remote files <owner>_<epoch ms>.<ext> instead of <owner>_<file name>",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use in-memory Drive and transcoder (no credentials needed)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=MEDIA_CONFIG_PATH,
        help=f"Media limits YAML (default: {MEDIA_CONFIG_PATH})",
    )

    args = parser.parse_args()
    setup_logging()

    limits = load_media_limits(args.config)

    logger.info("=" * 70)
    logger.info("Upload Media")
    logger.info("=" * 70)
    logger.info(f"Mode: {'UPLOAD' if args.upload else 'DRY RUN'}")
    logger.info(f"Owner: {args.owner}")
    logger.info("=" * 70)

    logger.info("\n📋 Validating files...")
    valid_files = validate_files(args.files, limits)

    if not valid_files:
        logger.error("\n❌ No valid videos to upload")
        return 1

    if not args.upload:
        logger.info("=" * 70)
        logger.info("DRY RUN MODE - No uploads performed")
        logger.info("Run with --upload to actually upload these videos")
        logger.info("=" * 70)
        return 0

    mode = "mock" if args.mock else "auto"
    gateway = create_gateway(mode=mode, limits=limits, sweep_interval_seconds=None)
    pipeline = create_pipeline(limits=limits, transcoder=create_transcoder(mode))

    if gateway.is_degraded:
        logger.error("❌ Google Drive not configured - set GOOGLE_DRIVE_API_KEY and GOOGLE_CLIENT_ID")
        return 1

    controller = UploadController(gateway, pipeline)
    roles = RoleFlags(
        is_primary=args.primary,
        show_in_gallery=args.gallery,
        show_on_homepage=args.homepage,
    )

    succeeded = 0
    for path in valid_files:
        result = controller.ingest(path, args.owner, roles, unique_name=args.unique_names)
        if result.success:
            succeeded += 1
            logger.info(f"  ✅ {path.name}: {result.media.web_content_link}")
        else:
            logger.error(f"  ❌ {path.name}: {result.error_message}")

    gateway.close()

    logger.info("=" * 70)
    logger.info(f"Uploaded {succeeded}/{len(valid_files)} video(s)")
    logger.info("=" * 70)
    return 0 if succeeded == len(valid_files) else 1


if __name__ == "__main__":
    sys.exit(main())
