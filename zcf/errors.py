from pathlib import Path
from typing import Optional, Union


class ZcfError(Exception):
    """Base error for ZCF operations."""


class FileSystemError(ZcfError):
    """Raised when a file system operation fails."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class CodexConfigError(ZcfError):
    """Raised when config.toml cannot be read or decoded."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None
