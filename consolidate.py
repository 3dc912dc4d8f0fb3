#!/usr/bin/env python3
"""
Knowledge-base consolidation.

Concatenates every per-video report into a single markdown document that
can be handed to NotebookLM or any other summarisation tool. The output is
derived data and is rebuilt from scratch on every run.
"""
import time
from pathlib import Path

from paths import get_consolidated_kb_path
from reports import list_reports

SEPARATOR = "\n\n---\n\n"


def generate_consolidated_kb(config: dict = None) -> Path:
    """
    Rebuild the consolidated knowledge base from all current reports.

    Reports are read fully into memory and joined with SEPARATOR, in the
    order list_reports() yields them.

    Returns:
        Path of the consolidated markdown file
    """
    start_time = time.time()
    reports = list(list_reports(config))
    kb_path = get_consolidated_kb_path(config)

    print(f"Consolidating {len(reports)} reports...")

    sections = []
    for report_path in reports:
        with open(report_path, 'r', encoding='utf-8') as f:
            sections.append(f.read())
    consolidated = SEPARATOR.join(sections)

    kb_path.parent.mkdir(parents=True, exist_ok=True)
    with open(kb_path, 'w', encoding='utf-8') as f:
        f.write(consolidated)

    size_mb = len(consolidated.encode('utf-8')) / 1024 / 1024
    print(f"Consolidated knowledge base: {kb_path}")
    print(f"  Size: {size_mb:.2f} MB")
    print(f"  Time: {time.time() - start_time:.1f}s")

    return kb_path


if __name__ == "__main__":
    import sys

    from config import NotConfiguredError

    try:
        generate_consolidated_kb()
    except NotConfiguredError as e:
        print(f"Error: {e}")
        sys.exit(1)
