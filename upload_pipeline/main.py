"""
Team Video Upload Pipeline - Command line
Upload, update, delete and list the videos of a team's channel.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from shared.storage.storage_manager import StorageManager
from upload_pipeline.core.auth import EnvironmentSessionProvider, StaticSessionProvider, TokenProvider
from upload_pipeline.core.config import AppConfig, ConfigLoader
from upload_pipeline.core.errors import ClassifiedError
from upload_pipeline.core.progress import ProgressStream, UploadProgress
from upload_pipeline.core.upload_manager import UploadManager
from upload_pipeline.core.youtube import MediaMetadata, MetadataPatch, PrivacyStatus

DEFAULT_CONFIG = Path("config.yaml")


def setup_logging(logs_dir: Path, verbose: bool = False):
    """Configure logging with file and console handlers."""
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "upload_pipeline.log"

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode='a', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )
    return logging.getLogger(__name__)


def load_configuration(config_path: Optional[Path]) -> AppConfig:
    """Load the YAML configuration; built-in defaults when no file is present."""
    if config_path is None:
        if not DEFAULT_CONFIG.exists():
            return AppConfig()
        config_path = DEFAULT_CONFIG
    return ConfigLoader(config_path).load()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Team Video Upload Pipeline")
    parser.add_argument("--config", type=Path, default=None, help="Path to the YAML configuration file.")
    parser.add_argument("--channel", type=str, default=None, help="Channel identity (team) to act on.")
    parser.add_argument("--proxy-url", type=str, default=None, help="Base URL of the token proxy.")
    parser.add_argument("--session-token", type=str, default=None,
                        help="Caller session credential (default: $UPLOAD_PIPELINE_SESSION_TOKEN).")
    parser.add_argument("--verbose", action="store_true", help="Log raw API payloads.")

    sub = parser.add_subparsers(dest="command", required=True)

    upload = sub.add_parser("upload", help="Upload a video file.")
    upload.add_argument("file", type=str, help="Video file path or file:// URI.")
    upload.add_argument("--title", type=str, required=True)
    upload.add_argument("--description", type=str, default="")
    upload.add_argument("--privacy", type=str, choices=[p.value for p in PrivacyStatus], default=None)
    upload.add_argument("--tags", type=str, default=None, help="Comma separated tags.")
    upload.add_argument("--category", type=str, default=None, help="Platform category id.")
    upload.add_argument("--language", type=str, default=None)
    upload.add_argument("--made-for-kids", action="store_true", default=None)
    upload.add_argument("--mime-type", type=str, default=None)

    update = sub.add_parser("update", help="Update the metadata of a video.")
    update.add_argument("video_id", type=str)
    update.add_argument("--title", type=str, default=None)
    update.add_argument("--description", type=str, default=None)
    update.add_argument("--privacy", type=str, choices=[p.value for p in PrivacyStatus], default=None)
    update.add_argument("--tags", type=str, default=None, help="Comma separated tags.")
    update.add_argument("--category", type=str, default=None)
    update.add_argument("--made-for-kids", dest="made_for_kids", action="store_true", default=None)
    update.add_argument("--not-made-for-kids", dest="made_for_kids", action="store_false")

    delete = sub.add_parser("delete", help="Delete a video.")
    delete.add_argument("video_id", type=str)

    info = sub.add_parser("info", help="Show the metadata of a video.")
    info.add_argument("video_id", type=str)

    listing = sub.add_parser("list", help="List the videos of the channel.")
    listing.add_argument("--platform-channel-id", type=str, default=None,
                         help="Platform channel id (default: the channel behind the token).")
    listing.add_argument("--max-results", type=int, default=50)
    listing.add_argument("--page-token", type=str, default=None)

    sub.add_parser("report", help="Summarize the local upload ledger.")
    return parser


def parse_tags(raw: Optional[str]) -> Optional[List[str]]:
    if raw is None:
        return None
    return [t.strip() for t in raw.split(",") if t.strip()]


def metadata_from_args(args: argparse.Namespace, config: AppConfig) -> MediaMetadata:
    return MediaMetadata(
        title=args.title,
        privacy=PrivacyStatus.parse(args.privacy or config.defaults.privacy),
        description=args.description or "",
        tags=parse_tags(args.tags),
        category_id=args.category,
        made_for_kids=args.made_for_kids,
        default_language=args.language,
        default_audio_language=args.language
    )


def patch_from_args(args: argparse.Namespace) -> MetadataPatch:
    return MetadataPatch(
        title=args.title,
        description=args.description,
        privacy=PrivacyStatus.parse(args.privacy) if args.privacy else None,
        tags=parse_tags(args.tags),
        category_id=args.category,
        made_for_kids=args.made_for_kids
    )


def print_report(storage: StorageManager):
    summary = storage.summarize_ledger()
    print("=" * 60)
    print("      TEAM VIDEO UPLOADS - STATUS REPORT")
    print("=" * 60)
    if not summary["total"]:
        print("📤 No videos published yet.")
    else:
        for action, count in sorted(summary["by_action"].items()):
            print(f"📤 {action:<10} {count}")
        print(f"⚠️  Uploads with unverified privacy: {summary['unreconciled_uploads']}")
    print("=" * 60)
    print(f"Ledger: {storage.ledger_path}")
    print("=" * 60)


def run(args: argparse.Namespace, config: AppConfig, storage: StorageManager, logger: logging.Logger) -> int:
    sessions = StaticSessionProvider(args.session_token) if args.session_token else EnvironmentSessionProvider()
    manager = UploadManager(config, TokenProvider(config, sessions), storage=storage)
    channel = config.channel or ""

    if args.command == "upload":
        progress = ProgressStream()

        def show(event: UploadProgress):
            logger.info(f"[{event.percent:>3}%] {event.phase.name.replace('_', ' ').lower()}")

        progress.subscribe(show)
        outcome = manager.upload(
            channel, args.file, metadata_from_args(args, config), progress=progress, mime_type=args.mime_type
        )
        if not outcome.reconciliation.succeeded:
            logger.warning(
                f"Privacy could not be verified; the platform reports "
                f"'{outcome.resource.privacy_status}'. Check it on the platform."
            )
        print(f"\n✅ Video published: {outcome.resource.url}")
        return 0

    if args.command == "update":
        changes = patch_from_args(args)
        if changes.is_empty():
            logger.error("Nothing to update: pass at least one field.")
            return 2
        resource = manager.update(channel, args.video_id, changes)
        print(f"\n✅ Video updated: {resource.url}")
        return 0

    if args.command == "delete":
        deleted = manager.delete(channel, args.video_id)
        print(f"\n✅ Video {'deleted' if deleted else 'was already deleted'}: {args.video_id}")
        return 0

    if args.command == "info":
        resource = manager.read(channel, args.video_id)
        for key, value in resource.to_dict().items():
            print(f"{key:<15} {value}")
        return 0

    if args.command == "list":
        page = manager.list_videos(channel, args.platform_channel_id, args.max_results, args.page_token)
        for video in page.videos:
            print(f"{video.video_id}  [{video.privacy_status:<8}] {video.title}")
        if page.next_page_token:
            print(f"\nNext page: --page-token {page.next_page_token}")
        return 0

    print_report(storage)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution entry for the Upload Pipeline."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_configuration(args.config).with_overrides(args.proxy_url, args.channel)
    except FileNotFoundError as e:
        print(f"Configuration file not found: {e}", file=sys.stderr)
        return 1
    except ClassifiedError as e:
        print(f"Configuration validation failed: {e.message}", file=sys.stderr)
        return 1

    storage = StorageManager(config.storage_root)
    logger = setup_logging(storage.logs_path, args.verbose)

    logger.info("=" * 60)
    logger.info(f"Team Video Upload Pipeline - {args.command.upper()}")
    logger.info("=" * 60)

    try:
        return run(args, config, storage, logger)
    except ClassifiedError as e:
        logger.error(f"{e.kind}: {e.message}")
        if e.retriable:
            logger.info("This error is temporary; you can retry the same command.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
