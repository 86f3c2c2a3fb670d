import re
from typing import Optional

from ..common import get_logger
from ..constants import CODEX_PACKAGE
from ..errors import ZcfError
from ..i18n import t
from ..platform import run_command
from ..version_checker import get_latest_version, should_update

logger = get_logger(__name__)

_CODEX_VERSION_RE = re.compile(re.escape(CODEX_PACKAGE) + r"@(\S+)")


def _list_global_packages() -> Optional[str]:
    result = run_command(["npm", "list", "-g", "--depth=0"], timeout=60)
    if result is None or result.returncode != 0:
        return None
    return result.stdout


def is_codex_installed() -> bool:
    output = _list_global_packages()
    return bool(output) and f"{CODEX_PACKAGE}@" in output


def get_codex_version() -> Optional[str]:
    output = _list_global_packages()
    if not output:
        return None
    match = _CODEX_VERSION_RE.search(output)
    return match.group(1) if match else None


def check_codex_update() -> bool:
    current = get_codex_version()
    if not current:
        return False
    latest = get_latest_version(CODEX_PACKAGE)
    if not latest:
        return False
    return should_update(current, latest)


def execute_codex_installation(ui, is_update: bool) -> None:
    ui.display_message(t("codex.updatingCli" if is_update else "codex.installingCli"), style="cyan")
    result = run_command(["npm", "install", "-g", CODEX_PACKAGE])
    if result is None or result.returncode != 0:
        action = "update" if is_update else "install"
        code = result.returncode if result is not None else "n/a"
        raise ZcfError(f"Failed to {action} codex CLI: exit code {code}")
    logger.info("npm install -g {} finished", CODEX_PACKAGE)
    ui.display_success(t("codex.updateSuccess" if is_update else "codex.installSuccess"))


def install_codex_cli(ui) -> None:
    """Install the Codex CLI, or update it when a newer release exists."""
    if is_codex_installed():
        if check_codex_update():
            execute_codex_installation(ui, is_update=True)
        else:
            ui.display_message(t("codex.alreadyInstalled"), style="yellow")
        return
    execute_codex_installation(ui, is_update=False)


def run_codex_update(ui, skip_prompt: bool = False) -> bool:
    if not check_codex_update():
        ui.display_message(t("codex.alreadyInstalled"), style="yellow")
        return True
    if not skip_prompt and not ui.confirm(t("updater.confirmUpdate", tool="Codex"), default=True):
        ui.display_message(t("updater.updateSkipped"), style="dim")
        return True
    try:
        execute_codex_installation(ui, is_update=True)
    except ZcfError as exc:
        ui.display_error(str(exc))
        return False
    return True
