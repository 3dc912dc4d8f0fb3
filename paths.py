"""
Filesystem layout of the personal data root.

Every accessor derives its path from config.get_personal_data_path(), so
an unconfigured root raises NotConfiguredError instead of returning a
path relative to nowhere.
"""
from pathlib import Path

from config import get_personal_data_path

VIDEO_LIBRARY_DIR = "video-library"
VIDEO_LIBRARY_FILE = "ai_video_library.html"
VIDEO_REPORTS_DIR = "video-reports"
KNOWLEDGE_BASE_DIR = "knowledge-base"
CONSOLIDATED_KB_FILE = "consolidated_ai_knowledge.md"
EXPORTS_DIR = "exports"
NOTEBOOKLM_EXPORTS_DIR = "notebooklm"
PROCESSING_LOGS_DIR = "processing-logs"
CONFIG_DIR = "config"
BACKUPS_DIR = "backups"
BACKUP_SCRIPT = "backup.sh"


def get_video_library_path(config: dict = None) -> Path:
    return get_personal_data_path(config) / VIDEO_LIBRARY_DIR / VIDEO_LIBRARY_FILE


def get_video_reports_dir(config: dict = None) -> Path:
    return get_personal_data_path(config) / VIDEO_REPORTS_DIR


def get_knowledge_base_dir(config: dict = None) -> Path:
    return get_personal_data_path(config) / KNOWLEDGE_BASE_DIR


def get_consolidated_kb_path(config: dict = None) -> Path:
    return get_knowledge_base_dir(config) / CONSOLIDATED_KB_FILE


def get_exports_dir(config: dict = None) -> Path:
    return get_personal_data_path(config) / EXPORTS_DIR


def get_notebooklm_exports_dir(config: dict = None) -> Path:
    return get_exports_dir(config) / NOTEBOOKLM_EXPORTS_DIR


def get_processing_logs_dir(config: dict = None) -> Path:
    return get_personal_data_path(config) / PROCESSING_LOGS_DIR


def get_config_dir(config: dict = None) -> Path:
    return get_personal_data_path(config) / CONFIG_DIR


def get_backups_dir(config: dict = None) -> Path:
    return get_personal_data_path(config) / BACKUPS_DIR


def get_backup_script_path(config: dict = None) -> Path:
    return get_personal_data_path(config) / BACKUP_SCRIPT


def ensure_data_dirs(config: dict = None) -> list[Path]:
    """
    Create the directory skeleton under the personal data root.

    Returns the list of directories (existing or newly created).
    """
    dirs = [
        get_video_library_path(config).parent,
        get_video_reports_dir(config),
        get_knowledge_base_dir(config),
        get_notebooklm_exports_dir(config),
        get_processing_logs_dir(config),
        get_config_dir(config),
        get_backups_dir(config),
    ]
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)
    return dirs
