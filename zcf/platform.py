import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from .common import get_logger

logger = get_logger(__name__)


def get_platform() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    return "linux"


def is_windows() -> bool:
    return get_platform() == "windows"


def is_termux() -> bool:
    prefix = os.environ.get("PREFIX", "")
    return "com.termux" in prefix or bool(os.environ.get("TERMUX_VERSION"))


def get_mcp_command() -> List[str]:
    """Command prefix used to launch npx-based MCP servers on this platform."""
    if is_windows():
        return ["cmd", "/c", "npx"]
    return ["npx"]


def command_exists(command: str) -> bool:
    if shutil.which(command):
        return True
    if is_termux():
        prefix = os.environ.get("PREFIX", "/data/data/com.termux/files/usr")
        return (Path(prefix) / "bin" / command).exists()
    return False


def run_command(args: List[str], timeout: int = 300) -> Optional[subprocess.CompletedProcess]:
    """Run an external command. Returns None when it cannot be started or times out."""
    executable = shutil.which(args[0]) or args[0]
    try:
        return subprocess.run(
            [executable, *args[1:]],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("Command {} failed to run: {}", " ".join(args), exc)
        return None
