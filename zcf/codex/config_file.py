from typing import Dict, Optional

from ..common import get_logger
from ..constants import codex_auth_file, codex_config_file
from ..errors import CodexConfigError
from ..fs_operations import exists, read_file, write_file
from ..json_config import read_json_config, write_json_config
from .model import CodexConfig
from .parser import TOMLDecodeError, parse_codex_config
from .renderer import render_codex_config

logger = get_logger(__name__)


def read_codex_config() -> Optional[CodexConfig]:
    """Read and parse ~/.codex/config.toml. Returns None when it does not exist."""
    path = codex_config_file()
    if not exists(path):
        return None
    try:
        return parse_codex_config(read_file(path))
    except TOMLDecodeError as exc:
        raise CodexConfigError(f"Invalid TOML in {path}: {exc}", path) from exc


def write_codex_config(config: CodexConfig) -> None:
    path = codex_config_file()
    write_file(path, render_codex_config(config))
    logger.debug("Saved Codex config with {} provider(s)", len(config.providers))


def read_auth_file() -> Dict[str, Optional[str]]:
    data = read_json_config(codex_auth_file(), default={})
    return data if isinstance(data, dict) else {}


def write_auth_file(entries: Dict[str, Optional[str]]) -> None:
    """Merge entries into auth.json; a None value removes the key."""
    auth = read_auth_file()
    for key, value in entries.items():
        if value is None:
            auth.pop(key, None)
        else:
            auth[key] = value
    write_json_config(codex_auth_file(), auth)
