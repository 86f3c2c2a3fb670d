from datetime import datetime
from pathlib import Path
from typing import Optional

from ..common import get_logger
from ..constants import (
    BACKUP_DIR_NAME,
    BACKUP_TIMESTAMP_FORMAT,
    codex_agents_file,
    codex_backup_root,
    codex_config_file,
    codex_dir,
    codex_prompts_dir,
)
from ..fs_operations import copy_dir, copy_file, ensure_dir, exists
from ..i18n import t

logger = get_logger(__name__)


def backup_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)


def create_backup_directory(timestamp: str) -> Path:
    """Create (if needed) and return ~/.codex/backup/backup_<timestamp>."""
    backup_dir = codex_backup_root() / f"backup_{timestamp}"
    ensure_dir(backup_dir)
    return backup_dir


def _outside_backups(path: Path) -> bool:
    relative = path.relative_to(codex_dir())
    return BACKUP_DIR_NAME not in relative.parts


def backup_codex_files() -> Optional[Path]:
    """Copy the whole Codex directory, minus earlier backups.

    Returns None without touching the disk when ~/.codex does not exist.
    Copy failures raise FileSystemError so the caller aborts its mutation.
    """
    source = codex_dir()
    if not exists(source):
        logger.debug("No Codex directory at {}, skipping backup", source)
        return None

    backup_dir = create_backup_directory(backup_timestamp())
    copy_dir(source, backup_dir, filter=_outside_backups)
    logger.debug("Backed up {} to {}", source, backup_dir)
    return backup_dir


def backup_codex_complete() -> Optional[Path]:
    return backup_codex_files()


def _backup_single(source: Path) -> Optional[Path]:
    if not exists(source):
        return None
    target = create_backup_directory(backup_timestamp()) / source.name
    if source.is_dir():
        copy_dir(source, target)
    else:
        copy_file(source, target)
    logger.debug("Backed up {} to {}", source, target)
    return target


def backup_codex_config() -> Optional[Path]:
    return _backup_single(codex_config_file())


def backup_codex_agents() -> Optional[Path]:
    return _backup_single(codex_agents_file())


def backup_codex_prompts() -> Optional[Path]:
    return _backup_single(codex_prompts_dir())


def get_backup_message(path: Optional[Path]) -> str:
    if not path:
        return ""
    return t("codex.backupSuccess", path=str(path))
