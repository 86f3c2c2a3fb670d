from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .model import CodexProvider


@dataclass
class OperationSuccess:
    """A provider operation that changed config.toml."""

    backup_path: Optional[Path] = None
    added_provider: Optional[CodexProvider] = None
    updated_provider: Optional[CodexProvider] = None
    deleted_providers: List[str] = field(default_factory=list)
    remaining_providers: List[CodexProvider] = field(default_factory=list)
    new_default_provider: Optional[str] = None
    success: bool = field(default=True, init=False)


@dataclass
class OperationFailure:
    """A provider operation that was refused; nothing was written."""

    error: str
    success: bool = field(default=False, init=False)


OperationResult = Union[OperationSuccess, OperationFailure]
