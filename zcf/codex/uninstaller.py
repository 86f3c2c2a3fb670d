from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List

from ..common import get_logger
from ..constants import codex_auth_file, codex_backup_root, codex_config_file
from ..errors import ZcfError
from ..fs_operations import exists, remove_path
from ..i18n import t
from .config_file import read_codex_config, write_codex_config

logger = get_logger(__name__)

UNINSTALL_ITEMS = ("api-config", "mcp-config", "config", "auth", "backups")


@dataclass
class UninstallResult:
    success: bool = False
    removed: List[str] = field(default_factory=list)
    removed_configs: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class CodexUninstaller:
    """Removes ZCF-written Codex configuration, one item at a time."""

    def _remove_file(self, path, label: str, missing_key: str) -> UninstallResult:
        result = UninstallResult()
        try:
            if remove_path(path):
                result.removed.append(label)
            else:
                result.warnings.append(t(missing_key))
            result.success = True
        except ZcfError as exc:
            result.errors.append(f"Failed to remove {label}: {exc}")
        return result

    def remove_config(self) -> UninstallResult:
        return self._remove_file(codex_config_file(), "config.toml", "codex.configNotFound")

    def remove_auth(self) -> UninstallResult:
        return self._remove_file(codex_auth_file(), "auth.json", "codex.authNotFound")

    def remove_backups(self) -> UninstallResult:
        return self._remove_file(codex_backup_root(), "backup/", "codex.backupsNotFound")

    def _rewrite_config(self, label: str, strip: Callable) -> UninstallResult:
        result = UninstallResult()
        if not exists(codex_config_file()):
            result.warnings.append(t("codex.configNotFound"))
            result.success = True
            return result
        try:
            config = read_codex_config()
            updated = strip(config)
            if updated != config:
                write_codex_config(updated)
                result.removed_configs.append(label)
            result.success = True
        except ZcfError as exc:
            result.errors.append(f"Failed to remove {label}: {exc}")
        return result

    def remove_api_config(self) -> UninstallResult:
        return self._rewrite_config(
            t("codex.uninstallItemApiConfig"),
            lambda config: replace(config, providers=[], model_provider=None, model_provider_commented=None),
        )

    def remove_mcp_config(self) -> UninstallResult:
        return self._rewrite_config(
            t("codex.uninstallItemMcpConfig"),
            lambda config: replace(config, mcp_services=[]),
        )

    def custom_uninstall(self, items: List[str]) -> List[UninstallResult]:
        """Run the selected removals; a removed config.toml makes its sub-items moot."""
        actions: Dict[str, Callable[[], UninstallResult]] = {
            "api-config": self.remove_api_config,
            "mcp-config": self.remove_mcp_config,
            "config": self.remove_config,
            "auth": self.remove_auth,
            "backups": self.remove_backups,
        }
        selected = [item for item in items if item in actions]
        if "config" in selected:
            selected = [item for item in selected if item not in ("api-config", "mcp-config")]

        results = []
        for item in selected:
            logger.debug("Uninstalling {}", item)
            results.append(actions[item]())
        return results


def run_codex_uninstall(ui) -> List[UninstallResult]:
    labels = {
        "config": t("codex.uninstallItemConfig"),
        "auth": t("codex.uninstallItemAuth"),
        "api-config": t("codex.uninstallItemApiConfig"),
        "mcp-config": t("codex.uninstallItemMcpConfig"),
        "backups": t("codex.uninstallItemBackups"),
    }
    items = ui.checkbox(t("codex.uninstallPrompt"), [{"name": labels[item], "value": item} for item in UNINSTALL_ITEMS])
    if not items:
        ui.display_message(t("common.cancelled"), style="yellow")
        return []

    results = CodexUninstaller().custom_uninstall(items)
    for result in results:
        for item in result.removed:
            ui.display_success(t("codex.removedItem", item=item))
        for config in result.removed_configs:
            ui.display_success(t("codex.removedConfig", config=config))
        for warning in result.warnings:
            ui.display_warning(warning)
        for error in result.errors:
            ui.display_error(error)
    return results
