import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Union

from .common import get_logger
from .errors import FileSystemError

logger = get_logger(__name__)

PathLike = Union[str, Path]


def exists(path: PathLike) -> bool:
    return Path(path).exists()


def ensure_dir(path: PathLike) -> None:
    """Create a directory (and parents) if it does not exist."""
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError(f"Failed to create directory: {path} ({exc})", path) from exc


def read_file(path: PathLike) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(f"Failed to read file: {path} ({exc})", path) from exc


def write_file(path: PathLike, content: str) -> None:
    """Write a whole file through a temp file and os.replace."""
    target = Path(path)
    ensure_dir(target.parent)
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as file_obj:
            file_obj.write(content)
        if target.exists():
            shutil.copymode(target, tmp)
        os.replace(tmp, target)
    except OSError as exc:
        raise FileSystemError(f"Failed to write file: {target} ({exc})", target) from exc
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)
    logger.debug("Wrote {} ({} bytes)", target, len(content))


def copy_file(src: PathLike, dest: PathLike) -> None:
    try:
        Path(dest).parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
    except OSError as exc:
        raise FileSystemError(f"Failed to copy file from {src} to {dest} ({exc})", src) from exc


def copy_dir(
    src: PathLike,
    dest: PathLike,
    filter: Optional[Callable[[Path], bool]] = None,
) -> None:
    """Copy a directory tree; entries for which filter returns False are skipped."""
    source = Path(src)
    if not source.is_dir():
        raise FileSystemError(f"Source directory does not exist: {source}", source)

    def ignore(directory: str, names: List[str]) -> List[str]:
        if filter is None:
            return []
        return [name for name in names if not filter(Path(directory) / name)]

    try:
        shutil.copytree(source, dest, ignore=ignore, dirs_exist_ok=True, symlinks=True)
    except (OSError, shutil.Error) as exc:
        raise FileSystemError(f"Failed to copy directory from {source} to {dest} ({exc})", source) from exc


def remove_path(path: PathLike) -> bool:
    """Remove a file or directory tree. Returns False when nothing was there."""
    target = Path(path)
    if not target.exists() and not target.is_symlink():
        return False
    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
    except OSError as exc:
        raise FileSystemError(f"Failed to remove: {target} ({exc})", target) from exc
    return True
