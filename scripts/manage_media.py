#!/usr/bin/env python3
"""
Manage Media - Maintenance Script

List, inspect and delete media stored in Google Drive, and show storage
usage.

Usage:
    python scripts/manage_media.py list D-42
    python scripts/manage_media.py show <media-id>
    python scripts/manage_media.py delete <media-id>            # Dry run
    python scripts/manage_media.py delete <media-id> --confirm
    python scripts/manage_media.py usage
    python scripts/manage_media.py sign-out
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging_setup import setup_logging
from drive import DriveError, MediaGateway, create_gateway
from media import format_size

logger = logging.getLogger(__name__)


def cmd_list(gateway: MediaGateway, args) -> int:
    media = gateway.get_media_by_owner(args.owner)
    if not media:
        logger.info(f"No media found for {args.owner}")
        return 0

    logger.info(f"{len(media)} media object(s) for {args.owner}:")
    for item in media:
        roles = item.properties.roles if item.properties else None
        flags = []
        if roles and roles.is_primary:
            flags.append("primary")
        if roles and roles.show_in_gallery:
            flags.append("gallery")
        if roles and roles.show_on_homepage:
            flags.append("homepage")
        created = item.created_at.strftime("%Y-%m-%d %H:%M") if item.created_at else "?"
        logger.info(
            f"  {item.id}  {created}  {format_size(item.size_bytes):>10}  "
            f"{item.name}  [{', '.join(flags) or '-'}]",
        )
    return 0


def cmd_show(gateway: MediaGateway, args) -> int:
    item = gateway.get_media(args.media_id)
    if item is None:
        logger.error(f"❌ Media not found: {args.media_id}")
        return 1

    for key, value in item.to_dict().items():
        logger.info(f"  {key}: {value}")
    return 0


def cmd_delete(gateway: MediaGateway, args) -> int:
    if not args.confirm:
        logger.info(f"[DRY RUN] Would delete {args.media_id}")
        logger.info("Run with --confirm to actually delete")
        return 0

    try:
        deleted = gateway.delete_media(args.media_id)
    except DriveError as e:
        logger.error(f"❌ Delete failed: {e.message}")
        return 1

    if deleted:
        logger.info(f"✅ Deleted {args.media_id}")
        return 0
    logger.warning(f"Nothing deleted for {args.media_id}")
    return 1


def cmd_usage(gateway: MediaGateway, args) -> int:
    usage = gateway.get_storage_usage()
    if usage is None:
        logger.error("❌ Storage usage unavailable")
        return 1

    total = format_size(usage.total_bytes) if usage.total_bytes else "unlimited"
    logger.info(f"Used: {format_size(usage.used_bytes)} of {total}")
    if usage.percentage is not None:
        logger.info(f"      {usage.percentage:.1f}%")
    return 0


def cmd_sign_out(gateway: MediaGateway, args) -> int:
    gateway.initialize()
    if gateway.sign_out():
        logger.info("✅ Signed out, token revoked")
        return 0
    logger.error("❌ Sign-out failed")
    return 1


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "delete": cmd_delete,
    "usage": cmd_usage,
    "sign-out": cmd_sign_out,
}


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Manage media stored in Google Drive")
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use in-memory Drive (no credentials needed)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List media for an owner")
    list_parser.add_argument("owner", help="Owner entity ID")

    show_parser = subparsers.add_parser("show", help="Show one media object")
    show_parser.add_argument("media_id")

    delete_parser = subparsers.add_parser("delete", help="Delete one media object")
    delete_parser.add_argument("media_id")
    delete_parser.add_argument(
        "--confirm",
        action="store_true",
        help="Actually delete (default is dry run)",
    )

    subparsers.add_parser("usage", help="Show Drive storage usage")
    subparsers.add_parser("sign-out", help="Revoke the stored OAuth token")

    args = parser.parse_args()
    setup_logging(log_to_file=False)

    gateway = create_gateway(
        mode="mock" if args.mock else "auto",
        sweep_interval_seconds=None,
    )
    if gateway.is_degraded:
        logger.error("❌ Google Drive not configured - set GOOGLE_DRIVE_API_KEY and GOOGLE_CLIENT_ID")
        return 1

    try:
        return COMMANDS[args.command](gateway, args)
    except DriveError as e:
        logger.error(f"❌ {e.message} ({e.code.value})")
        return 1
    finally:
        gateway.close()


if __name__ == "__main__":
    sys.exit(main())
