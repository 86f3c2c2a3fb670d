import json
from pathlib import Path
from typing import Any, Optional, Union

from .common import get_logger
from .fs_operations import exists, read_file, write_file

logger = get_logger(__name__)


def read_json_config(path: Union[str, Path], default: Optional[Any] = None) -> Any:
    """Read a JSON file, falling back to default when missing or unparsable."""
    if not exists(path):
        return default
    try:
        return json.loads(read_file(path))
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse JSON {}: {}", path, exc)
        return default


def write_json_config(path: Union[str, Path], data: Any, pretty: bool = True) -> None:
    content = json.dumps(data, ensure_ascii=False, indent=2 if pretty else None)
    write_file(path, content + "\n")
