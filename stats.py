"""
Processing counters kept in <root>/config/stats.json.
"""
import json
from datetime import datetime, timezone
from pathlib import Path

from config import read_json_file
from paths import get_config_dir
from schemas import ProcessingStats

STATS_FILENAME = "stats.json"


def get_stats_path(config: dict = None) -> Path:
    return get_config_dir(config) / STATS_FILENAME


def load_stats(config: dict = None) -> dict | None:
    """
    Load current stats, or None if they were never written.

    Raises:
        ConfigCorruptError: If stats.json isn't valid JSON
    """
    return read_json_file(get_stats_path(config))


def update_stats(updates: dict, config: dict = None) -> dict:
    """
    Merge `updates` over the stored stats and persist.

    Unset fields start at zero on first use. lastUpdated is always
    re-stamped. Last write wins; nothing guards against a concurrent writer.

    Raises:
        pydantic.ValidationError: if the merged record has negative counters
    """
    stats_path = get_stats_path(config)
    stats = load_stats(config) or {
        "totalVideos": 0,
        "processedVideos": 0,
        "totalCost": 0,
        "lastUpdated": None,
    }

    stats = {**stats, **updates, "lastUpdated": datetime.now(tz=timezone.utc).isoformat()}
    ProcessingStats.model_validate(stats)

    stats_path.parent.mkdir(parents=True, exist_ok=True)
    with open(stats_path, 'w', encoding='utf-8') as f:
        json.dump(stats, f, indent=2)

    return stats


def unprocessed_count(stats: dict) -> int:
    # processedVideos <= totalVideos is not enforced, so this can go negative
    return stats.get("totalVideos", 0) - stats.get("processedVideos", 0)
