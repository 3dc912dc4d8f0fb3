#!/usr/bin/env python3
"""
Backup trigger for the personal data root.

Archiving itself is delegated to a user-supplied backup.sh at the root of
the personal data directory.
"""
import subprocess
from datetime import datetime, timezone
from pathlib import Path

from config import get_personal_data_path
from paths import get_backup_script_path, get_backups_dir


class BackupError(Exception):
    """Raised when backup.sh can't be started or exits non-zero."""
    pass


def backup_filename(now: datetime = None) -> str:
    """backup-2026-10-19T12-30-00-123Z.tar.gz"""
    if now is None:
        now = datetime.now(tz=timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S") + f"-{now.microsecond // 1000:03d}Z"
    return f"backup-{stamp}.tar.gz"


def create_backup(config: dict = None) -> Path:
    """
    Run backup.sh (if present) and return the expected archive path.

    The returned path is where the archive is expected to land; it isn't
    checked for existence afterwards.

    Raises:
        BackupError: If backup.sh can't be started or exits non-zero
    """
    root = get_personal_data_path(config)
    backup_dir = get_backups_dir(config)
    backup_dir.mkdir(parents=True, exist_ok=True)

    backup_path = backup_dir / backup_filename()

    script = get_backup_script_path(config)
    if script.exists():
        print(f"Running {script}...")
        try:
            # Run through sh so the script needn't have its exec bit set
            subprocess.run(["sh", str(script)], cwd=root, check=True)
        except subprocess.CalledProcessError as e:
            raise BackupError(f"{script.name} exited with status {e.returncode}") from e
        except OSError as e:
            raise BackupError(f"Could not run {script.name}: {e}") from e
    else:
        print(f"No {script.name} found in {root}, skipping archive step")

    return backup_path


if __name__ == "__main__":
    import sys

    from config import NotConfiguredError

    try:
        path = create_backup()
    except (NotConfiguredError, BackupError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"Expected archive: {path}")
