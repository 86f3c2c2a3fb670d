from dataclasses import dataclass
from typing import Callable, Dict, List

from .common import get_logger
from .constants import CCR_PACKAGE, CLAUDE_CODE_PACKAGE, COMETIX_PACKAGE
from .i18n import t
from .platform import run_command
from .version_checker import (
    VersionStatus,
    check_ccr_version,
    check_claude_code_version,
    check_cometix_line_version,
)

logger = get_logger(__name__)

UPDATED = "updated"
UP_TO_DATE = "up-to-date"
SKIPPED = "skipped"
NOT_INSTALLED = "not-installed"
UNKNOWN = "unknown"
FAILED = "failed"


@dataclass
class UpdatableTool:
    label: str
    package: str
    check: Callable[[], VersionStatus]


def managed_tools() -> List[UpdatableTool]:
    return [
        UpdatableTool("CCR", CCR_PACKAGE, check_ccr_version),
        UpdatableTool("Claude Code", CLAUDE_CODE_PACKAGE, check_claude_code_version),
        UpdatableTool("CCometixLine", COMETIX_PACKAGE, check_cometix_line_version),
    ]


def update_tool(ui, tool: UpdatableTool, force: bool = False, skip_prompt: bool = False) -> str:
    """Check one npm-installed tool and update it when the user agrees."""
    ui.display_message(t("updater.checkingVersion", tool=tool.label), style="dim")
    status = tool.check()

    if not status.installed:
        ui.display_warning(t("updater.notInstalled", tool=tool.label))
        return NOT_INSTALLED
    if not status.needs_update and not force:
        if status.latest_version is None:
            ui.display_warning(t("updater.cannotCheckVersion", tool=tool.label))
            return UNKNOWN
        ui.display_success(t("updater.upToDate", tool=tool.label, version=status.current_version))
        return UP_TO_DATE
    if not status.latest_version:
        ui.display_warning(t("updater.cannotCheckVersion", tool=tool.label))
        return UNKNOWN

    ui.display_message(t("updater.currentVersion", version=status.current_version), style="cyan")
    ui.display_message(t("updater.latestVersion", version=status.latest_version), style="cyan")
    if not skip_prompt and not ui.confirm(t("updater.confirmUpdate", tool=tool.label), default=True):
        ui.display_message(t("updater.updateSkipped"), style="dim")
        return SKIPPED

    ui.display_message(t("updater.updating", tool=tool.label), style="cyan")
    result = run_command(["npm", "update", "-g", tool.package])
    if result is None or result.returncode != 0:
        logger.error("npm update -g {} failed: {}", tool.package, result.stderr if result else "not started")
        ui.display_error(t("updater.updateFailed", tool=tool.label))
        return FAILED
    ui.display_success(t("updater.updateSuccess", tool=tool.label))
    return UPDATED


def check_and_update_tools(ui, skip_prompt: bool = False) -> Dict[str, str]:
    """Update CCR, Claude Code and CCometixLine one after another.

    A failure in one tool is reported and recorded; the others still run.
    """
    ui.display_title(t("updater.checkingTools"))
    summary: Dict[str, str] = {}
    for tool in managed_tools():
        try:
            summary[tool.label] = update_tool(ui, tool, skip_prompt=skip_prompt)
        except Exception as exc:
            logger.exception("Updating {} failed", tool.label)
            ui.display_error(f"{t('updater.updateFailed', tool=tool.label)}: {exc}")
            summary[tool.label] = FAILED

    ui.display_table(t("updater.summary"), ["Tool", "Status"], list(summary.items()))
    return summary
