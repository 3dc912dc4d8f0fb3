#!/usr/bin/env python3
"""
NotebookLM exporter.

Writes either a flat list of YouTube URLs scraped from the video library
HTML, or a copy of the consolidated knowledge base, into
<root>/exports/notebooklm/ under a timestamped file name.
"""
import re
import shutil
import time
from pathlib import Path

from consolidate import generate_consolidated_kb
from paths import (
    get_consolidated_kb_path,
    get_notebooklm_exports_dir,
    get_video_library_path,
)

# =============================================================================
# CONSTANTS
# =============================================================================

EXPORT_FORMATS = ("urls", "markdown")
YOUTUBE_HREF_PATTERN = re.compile(r'href="([^"]+youtube[^"]+)"')


class UnsupportedFormatError(ValueError):
    """Raised when an export format other than EXPORT_FORMATS is requested."""
    pass


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def extract_youtube_urls(html: str) -> list[str]:
    """Return every href value containing 'youtube', in document order."""
    return YOUTUBE_HREF_PATTERN.findall(html)


# =============================================================================
# EXPORTS
# =============================================================================

def export_urls(config: dict = None) -> Path:
    """Write one YouTube URL per line to all-videos-<ms>.txt."""
    exports_dir = get_notebooklm_exports_dir(config)
    exports_dir.mkdir(parents=True, exist_ok=True)

    library_path = get_video_library_path(config)
    with open(library_path, 'r', encoding='utf-8') as f:
        urls = extract_youtube_urls(f.read())

    output_path = exports_dir / f"all-videos-{_timestamp_ms()}.txt"
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("\n".join(urls))

    print(f"Exported {len(urls)} URLs to {output_path}")
    return output_path


def export_markdown(config: dict = None) -> Path:
    """
    Copy the consolidated knowledge base to consolidated-<ms>.md.

    The knowledge base is regenerated only if it doesn't exist; a stale
    file is exported as is.
    """
    exports_dir = get_notebooklm_exports_dir(config)
    exports_dir.mkdir(parents=True, exist_ok=True)

    kb_path = get_consolidated_kb_path(config)
    if not kb_path.exists():
        generate_consolidated_kb(config)

    output_path = exports_dir / f"consolidated-{_timestamp_ms()}.md"
    shutil.copyfile(kb_path, output_path)

    print(f"Exported knowledge base to {output_path}")
    return output_path


def export_for_notebooklm(format: str = "urls", config: dict = None) -> Path:
    """
    Export data for NotebookLM.

    Args:
        format: "urls" or "markdown"
        config: Configuration dict (loaded from config.json if None)

    Returns:
        Path of the written export file

    Raises:
        UnsupportedFormatError: If format is not one of EXPORT_FORMATS
        NotConfiguredError: If the personal data root isn't set up
    """
    if format == "urls":
        return export_urls(config)
    elif format == "markdown":
        return export_markdown(config)
    else:
        raise UnsupportedFormatError(f"Unknown format: {format}")


if __name__ == "__main__":
    import argparse
    import sys

    from config import NotConfiguredError

    parser = argparse.ArgumentParser(description="Export the knowledge base for NotebookLM")
    parser.add_argument("--format", default="urls", choices=EXPORT_FORMATS,
                        help="Export format (default: urls)")
    args = parser.parse_args()

    try:
        export_for_notebooklm(args.format)
    except (NotConfiguredError, FileNotFoundError) as e:
        print(f"Error: {e}")
        sys.exit(1)
