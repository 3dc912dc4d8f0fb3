"""
Per-video markdown reports.

A report file's existence is the only "processed" marker: there is no
separate index, so membership is a filename substring check.
"""
from pathlib import Path
from typing import Iterator

from paths import get_video_reports_dir

REPORT_PREFIX = "api"
REPORT_SUFFIX = ".md"


def report_filename(video_id: str, index: int) -> str:
    """api_<index>_<videoId>.md"""
    return f"{REPORT_PREFIX}_{index}_{video_id}{REPORT_SUFFIX}"


def list_reports(config: dict = None) -> Iterator[Path]:
    """
    Yield every markdown report in the reports directory.

    Order is whatever the filesystem returns. Yields nothing if the
    directory doesn't exist yet.
    """
    reports_dir = get_video_reports_dir(config)
    if not reports_dir.exists():
        return

    for f in reports_dir.iterdir():
        if f.name.endswith(REPORT_SUFFIX) and f.is_file():
            yield f


def is_video_processed(video_id: str, index: int, config: dict = None) -> bool:
    """
    True if any file in the reports directory contains the video id OR
    contains "_<index>_" in its name.

    Matching is by substring, so a video whose id appears inside another
    report's name also counts as processed.
    """
    reports_dir = get_video_reports_dir(config)
    if not reports_dir.exists():
        return False

    index_marker = f"_{index}_"
    return any(
        video_id in f.name or index_marker in f.name
        for f in reports_dir.iterdir()
    )


def save_report(video_id: str, index: int, content: str, config: dict = None) -> Path:
    """Write a report, overwriting any file of the same name. Returns its path."""
    reports_dir = get_video_reports_dir(config)
    reports_dir.mkdir(parents=True, exist_ok=True)

    filepath = reports_dir / report_filename(video_id, index)
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(content)

    return filepath.resolve()
