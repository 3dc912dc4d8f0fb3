#!/usr/bin/env python3
"""
Data management CLI for the personal knowledge base.

Provides status reporting, setup, and the consolidate/export/backup
operations on the personal data root.

Usage:
    python data_management.py                       # Show status
    python data_management.py --set-path ~/my-kb    # Configure data root
    python data_management.py --init                # Create directory skeleton
    python data_management.py --check 4ukqsKajWnk 575
    python data_management.py --consolidate
    python data_management.py --export markdown
    python data_management.py --backup
"""
import argparse
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from backup import BackupError, create_backup
from config import (
    ConfigCorruptError,
    NotConfiguredError,
    SETUP_HINT,
    get_personal_data_path,
    is_configured,
    load_config,
    load_processing_config,
    set_personal_data_path,
)
from consolidate import generate_consolidated_kb
from notebooklm_exporter import EXPORT_FORMATS, export_for_notebooklm
from paths import (
    ensure_data_dirs,
    get_consolidated_kb_path,
    get_knowledge_base_dir,
    get_video_library_path,
    get_video_reports_dir,
)
from reports import is_video_processed, list_reports
from stats import load_stats, unprocessed_count


def get_data_status(config: dict = None) -> dict:
    """
    Return counts and status of the personal data root.

    Returns dict with:
        - configured: Whether the data root is set and exists
        - data_path: Data root (None when not configured)
        - report_count: Number of markdown reports
        - stats: Contents of stats.json, or None
        - processing_config: Contents of processing-config.json, or None
        - consolidation_status: "Not run" or "Last run: YYYY-MM-DD HH:MM"
    """
    if config is None:
        config = load_config()

    status = {
        "configured": is_configured(config),
        "data_path": None,
        "report_count": 0,
        "stats": None,
        "processing_config": None,
        "consolidation_status": "Not run",
    }
    if not status["configured"]:
        return status

    status["data_path"] = str(get_personal_data_path(config))
    status["report_count"] = sum(1 for _ in list_reports(config))
    status["stats"] = load_stats(config)
    status["processing_config"] = load_processing_config(config)

    kb_path = get_consolidated_kb_path(config)
    if kb_path.exists():
        mtime = datetime.fromtimestamp(kb_path.stat().st_mtime)
        status["consolidation_status"] = f"Last run: {mtime.strftime('%Y-%m-%d %H:%M')}"

    return status


def format_status_text(status: dict) -> str:
    """Format status dict for terminal output."""
    if not status["configured"]:
        return f"Personal data location not configured.\n{SETUP_HINT}"

    lines = [f"Location: {status['data_path']}", ""]

    processing = status.get("processing_config")
    if processing:
        lines.append("Processing Configuration:")
        lines.append(f"  Model:            {processing.get('model')}")
        lines.append(f"  Max Concurrent:   {processing.get('maxConcurrent')}")
        lines.append(f"  Filter Political: {processing.get('filterPolitical')}")
        lines.append("")

    stats = status.get("stats")
    if stats:
        lines.append("Current Stats:")
        lines.append(f"  Total Videos: {stats.get('totalVideos', 0):,}")
        lines.append(f"  Processed:    {stats.get('processedVideos', 0):,}")
        lines.append(f"  Unprocessed:  {unprocessed_count(stats):,}")
        lines.append(f"  Total Cost:   ${stats.get('totalCost', 0):.2f}")
        lines.append("")

    lines.append(f"Reports: {status['report_count']:,}")
    lines.append(f"Consolidation: {status['consolidation_status']}")
    return "\n".join(lines)


def print_paths(config: dict = None) -> None:
    print(f"  Video Library:  {get_video_library_path(config)}")
    print(f"  Reports Dir:    {get_video_reports_dir(config)}")
    print(f"  Knowledge Base: {get_knowledge_base_dir(config)}")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Manage the personal knowledge base",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python data_management.py --set-path ~/kb     Configure the data root
  python data_management.py --check ID 575      Check if a video has a report
  python data_management.py --export urls       Export video URLs for NotebookLM
        """
    )

    parser.add_argument('--status', action='store_true',
                        help='Show data status (default)')
    parser.add_argument('--set-path', type=Path, metavar='PATH',
                        help='Set the personal data root')
    parser.add_argument('--init', action='store_true',
                        help='Create the directory skeleton under the data root')
    parser.add_argument('--check', nargs=2, metavar=('VIDEO_ID', 'INDEX'),
                        help='Check whether a video has been processed')
    parser.add_argument('--consolidate', action='store_true',
                        help='Regenerate the consolidated knowledge base')
    parser.add_argument('--export', choices=EXPORT_FORMATS,
                        help='Export for NotebookLM')
    parser.add_argument('--backup', action='store_true',
                        help='Run backup.sh in the data root')

    args = parser.parse_args(argv)

    try:
        if args.set_path:
            data_path = args.set_path.expanduser().resolve()
            if not data_path.is_dir():
                print(f"Error: {data_path} is not a directory")
                sys.exit(1)
            set_personal_data_path(data_path)
            print(f"Personal data location set to {data_path}")
            return

        config = load_config()
        if not is_configured(config):
            print("Error: Personal data location not configured!")
            print(f"\n{SETUP_HINT}")
            sys.exit(1)

        if args.init:
            for d in ensure_data_dirs(config):
                print(f"  {d}")
            print("Directory skeleton ready.")

        elif args.check:
            video_id, index = args.check
            processed = is_video_processed(video_id, index, config)
            print(f"Video {video_id} processed: {'yes' if processed else 'no'}")

        elif args.consolidate:
            generate_consolidated_kb(config)

        elif args.export:
            export_for_notebooklm(args.export, config)

        elif args.backup:
            path = create_backup(config)
            print(f"Expected archive: {path}")

        else:
            print(format_status_text(get_data_status(config)))
            print()
            print_paths(config)

    except (ConfigCorruptError, NotConfiguredError, BackupError, ValidationError,
            FileNotFoundError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
