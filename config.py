#!/usr/bin/env python3
"""
Configuration management for the personal knowledge base.

Tracks where the user's personal data root lives and loads the
per-root settings files kept under <root>/config/.
"""
import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from schemas import AppConfig, ProcessingConfig

CONFIG_FILE = Path(__file__).parent / "config.json"

DEFAULT_CONFIG = {
    "personalDataPath": None,
    "lastUpdated": None,
}

SETUP_HINT = "Run: python data_management.py --set-path /path/to/your/knowledge-base"


# =============================================================================
# EXCEPTIONS
# =============================================================================

class NotConfiguredError(Exception):
    """Raised when the personal data location is unset or missing on disk."""
    pass


class ConfigCorruptError(Exception):
    """Raised when config.json (or a per-root settings file) cannot be parsed."""
    pass


# =============================================================================
# APPLICATION CONFIG
# =============================================================================

def load_config() -> dict:
    """
    Load configuration from config.json.

    Returns the defaults if the file doesn't exist. A file that exists but
    isn't valid JSON (or has the wrong shape) raises ConfigCorruptError.
    """
    if not CONFIG_FILE.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(CONFIG_FILE, 'r', encoding='utf-8') as f:
            config = json.load(f)
        AppConfig.model_validate(config)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigCorruptError(f"{CONFIG_FILE} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise ConfigCorruptError(f"{CONFIG_FILE} has unexpected contents: {e}") from e

    # Merge with defaults to handle new config options
    return {**DEFAULT_CONFIG, **config}


def save_config(config: dict) -> None:
    """Save configuration to config.json (plain overwrite)."""
    with open(CONFIG_FILE, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def get_configured_path(config: dict = None) -> str | None:
    """Get the personal data path recorded in config.json."""
    if config is None:
        config = load_config()
    return config.get("personalDataPath")


def is_configured(config: dict = None) -> bool:
    """True iff a path is set AND the directory exists right now."""
    path = get_configured_path(config)
    return bool(path) and Path(path).is_dir()


def get_personal_data_path(config: dict = None) -> Path:
    """Return the personal data root, or raise NotConfiguredError."""
    if not is_configured(config):
        raise NotConfiguredError(f"Personal data location not configured. {SETUP_HINT}")
    return Path(get_configured_path(config))


def set_personal_data_path(data_path: str | Path) -> dict:
    """
    Store a new personal data root and persist config.json.

    A corrupt config.json is replaced rather than blocking the fix.
    """
    try:
        config = load_config()
    except ConfigCorruptError:
        config = DEFAULT_CONFIG.copy()
    config["personalDataPath"] = str(data_path)
    config["lastUpdated"] = datetime.now(tz=timezone.utc).isoformat()
    save_config(config)
    return config


# =============================================================================
# PER-ROOT SETTINGS
# =============================================================================

def read_json_file(path: Path) -> dict | None:
    """
    Read a small JSON settings file.

    Returns None if the file is absent; unparsable contents raise
    ConfigCorruptError.
    """
    if not path.exists():
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigCorruptError(f"{path} is not valid JSON: {e}") from e


def _load_root_json(filename: str, config: dict = None) -> dict | None:
    return read_json_file(get_personal_data_path(config) / "config" / filename)


def load_processing_config(config: dict = None) -> dict | None:
    """
    Load <root>/config/processing-config.json.

    Returns None if the file is absent. Raises pydantic.ValidationError if
    the model / maxConcurrent / filterPolitical fields are malformed.
    """
    data = _load_root_json("processing-config.json", config)
    if data is None:
        return None
    ProcessingConfig.model_validate(data)
    return data


def load_preferences(config: dict = None) -> dict | None:
    """Load <root>/config/preferences.json (free-form)."""
    return _load_root_json("preferences.json", config)


def validate_config(config: dict = None) -> tuple[bool, str]:
    """
    Validate configuration is complete and usable.
    Returns (is_valid, error_message).
    """
    if config is None:
        try:
            config = load_config()
        except ConfigCorruptError as e:
            return False, str(e)

    path = get_configured_path(config)
    if not path:
        return False, f"No personal data path configured. {SETUP_HINT}"

    if not Path(path).is_dir():
        return False, f"Personal data path does not exist: {path}"

    return True, ""


if __name__ == "__main__":
    # Show current config when run directly
    try:
        config = load_config()
    except ConfigCorruptError as e:
        print(f"Configuration error: {e}")
        raise SystemExit(1)

    print("Current configuration:")
    print(json.dumps(config, indent=2))

    is_valid, error = validate_config(config)
    if is_valid:
        print("\nConfiguration is valid.")
        print(f"Personal data root: {get_personal_data_path(config)}")
    else:
        print(f"\nConfiguration error: {error}")
