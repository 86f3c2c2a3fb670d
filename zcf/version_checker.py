import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx
from packaging.version import InvalidVersion, Version

from .common import get_logger
from .constants import CCR_PACKAGE, CLAUDE_CODE_PACKAGE, COMETIX_PACKAGE, NPM_REGISTRY_URL
from .platform import command_exists, run_command

logger = get_logger(__name__)

_VERSION_RE = re.compile(r"(\d+\.\d+\.\d+(?:-[\w.]+)?)")


@dataclass
class VersionStatus:
    installed: bool
    current_version: Optional[str]
    latest_version: Optional[str]
    needs_update: bool


def get_installed_version(command: str) -> Optional[str]:
    """Ask a CLI for its version, trying `-v` before `--version`."""
    if not command_exists(command):
        return None
    for flag in ("-v", "--version"):
        result = run_command([command, flag], timeout=30)
        if result is None or result.returncode != 0:
            continue
        match = _VERSION_RE.search(result.stdout or "")
        if match:
            return match.group(1)
    return None


def get_latest_version(package_name: str, client: Optional[httpx.Client] = None) -> Optional[str]:
    """Latest published version from the npm registry, or None when it cannot be fetched."""
    url = f"{NPM_REGISTRY_URL}/{quote(package_name, safe='@')}/latest"
    owns_client = client is None
    client = client or httpx.Client(timeout=10.0)
    try:
        response = client.get(url)
        response.raise_for_status()
        version = response.json().get("version")
        return version if isinstance(version, str) else None
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Cannot fetch latest version of {}: {}", package_name, exc)
        return None
    finally:
        if owns_client:
            client.close()


def compare_versions(current: str, latest: str) -> int:
    """-1, 0 or 1 like a comparator; unparsable versions compare as outdated."""
    try:
        current_version = Version(current)
        latest_version = Version(latest)
    except InvalidVersion:
        return -1
    if current_version < latest_version:
        return -1
    return 0 if current_version == latest_version else 1


def should_update(current: str, latest: str) -> bool:
    return compare_versions(current, latest) < 0


def check_version(command: str, package_name: str) -> VersionStatus:
    current = get_installed_version(command)
    latest = get_latest_version(package_name)
    return VersionStatus(
        installed=current is not None,
        current_version=current,
        latest_version=latest,
        needs_update=bool(current and latest and should_update(current, latest)),
    )


def check_ccr_version() -> VersionStatus:
    return check_version("ccr", CCR_PACKAGE)


def check_claude_code_version() -> VersionStatus:
    return check_version("claude", CLAUDE_CODE_PACKAGE)


def check_cometix_line_version() -> VersionStatus:
    return check_version("ccline", COMETIX_PACKAGE)
