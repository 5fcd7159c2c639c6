"""
Snapshot and restore the embedded store file.

Backups are plain byte copies named ``<label>-backup-<ISO8601>.db`` where the
timestamp has ``:`` and ``.`` replaced by ``-`` so it is a valid filename on
every platform. The live store is not locked during the copy: the migration
is the only writer while it runs.
"""

import os
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from core.config import Settings, settings as default_settings
from core.exceptions import BackupError, BackupNotFoundError, RestoreError
from schemas.report import BackupHandle
import logging

logger = logging.getLogger(__name__)

INITIAL_LABEL = "initial"

_BACKUP_NAME = re.compile(r"^(?P<label>.+)-backup-(?P<stamp>\d{4}-\d{2}-\d{2}T[\d-]+Z?)\.db$")


def backup_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="microseconds").replace(":", "-").replace(".", "-") + "Z"


def parse_backup_timestamp(stamp: str) -> datetime:
    date_part, time_part = stamp.rstrip("Z").split("T")
    hours, minutes, seconds, micros = (time_part.split("-") + ["0"])[:4]
    return datetime.fromisoformat(f"{date_part}T{hours}:{minutes}:{seconds}.{micros.ljust(6, '0')}")


class BackupManager:
    """
    Create and restore timestamped copies of the store.

    Only file-based (SQLite) stores can be snapshotted; for a server
    database create_backup logs a warning and returns None.
    """

    def __init__(self, config: Settings = None, backup_dir: Path = None):
        self.settings = config or default_settings
        self.backup_dir = Path(backup_dir) if backup_dir else self.settings.backup_dir
        self.store_path = self.settings.database_file

    def create_backup(self, label: str) -> Optional[BackupHandle]:
        """
        Copy the store file into the backup directory.

        Returns:
            BackupHandle, or None when there is no store file to copy
        """
        if self.store_path is None:
            logger.warning(f"Store is not file-based; skipping '{label}' backup")
            return None

        if not self.store_path.exists():
            logger.warning(f"Database file not found at {self.store_path}; skipping '{label}' backup")
            return None

        now = datetime.utcnow()
        destination = self.backup_dir / f"{label}-backup-{backup_timestamp(now)}.db"

        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.store_path, destination)
        except OSError as e:
            raise BackupError(
                f"Failed to create '{label}' backup",
                context={"source": str(self.store_path), "destination": str(destination)},
                original_exception=e
            )

        handle = BackupHandle(
            label=label,
            path=str(destination),
            timestamp=now,
            size_bytes=destination.stat().st_size,
        )
        logger.info(f"Backup created: {destination.name} ({handle.size_bytes} bytes)")
        return handle

    def restore_from_backup(self, handle: BackupHandle) -> None:
        """
        Replace the store file with the backup's bytes.

        Raises:
            BackupNotFoundError: If the backup file no longer exists
            RestoreError: If the copy fails
        """
        source = Path(handle.path)
        if not source.exists():
            raise BackupNotFoundError(
                f"Backup file not found: {source}",
                context={"label": handle.label, "path": str(source)}
            )

        if self.store_path is None:
            raise RestoreError(
                "Cannot restore a backup over a server database",
                context={"database_url": self.settings.DATABASE_URL.split("@")[-1]}
            )

        staging = self.store_path.with_name(self.store_path.name + ".restoring")
        try:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, staging)
            os.replace(staging, self.store_path)
        except OSError as e:
            staging.unlink(missing_ok=True)
            raise RestoreError(
                f"Failed to restore backup {source.name}",
                context={"path": str(source), "store": str(self.store_path)},
                original_exception=e
            )

        logger.info(f"Database restored from {source.name}")

    def list_backups(self, label: str = None) -> List[BackupHandle]:
        """Backups on disk, oldest first"""
        if not self.backup_dir.is_dir():
            return []

        handles = []
        for path in self.backup_dir.iterdir():
            match = _BACKUP_NAME.match(path.name)
            if not match or not path.is_file():
                continue
            if label is not None and match.group("label") != label:
                continue
            handles.append(BackupHandle(
                label=match.group("label"),
                path=str(path),
                timestamp=parse_backup_timestamp(match.group("stamp")),
                size_bytes=path.stat().st_size,
            ))

        return sorted(handles, key=lambda h: h.timestamp)

    def find_rollback_backup(self) -> Optional[BackupHandle]:
        """Earliest 'initial' backup, else the earliest backup of any step"""
        initial = self.list_backups(INITIAL_LABEL)
        if initial:
            return initial[0]

        everything = self.list_backups()
        return everything[0] if everything else None
