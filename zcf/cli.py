from typing import Callable, Dict, Optional

from .bootstrap import apply_runtime_config, build_arg_parser, maybe_save_config, merge_runtime_config
from .codex import (
    backup_codex_complete,
    configure_codex_api,
    configure_codex_mcp,
    configure_incremental_management,
    get_backup_message,
    install_codex_cli,
    run_codex_uninstall,
)
from .common import get_logger
from .config import ConfigManager
from .constants import codex_dir
from .errors import ZcfError
from .i18n import t
from .tool_update_scheduler import ToolUpdateScheduler
from .ui import ZcfUI

logger = get_logger(__name__)


def run_codex_backup(ui: ZcfUI) -> None:
    backup_path = backup_codex_complete()
    if backup_path is None:
        ui.display_warning(t("codex.noBackupNeeded", path=str(codex_dir())))
        return
    ui.display_success(get_backup_message(backup_path))


def codex_actions(ui: ZcfUI) -> Dict[str, Callable[[], None]]:
    return {
        "api": lambda: configure_codex_api(ui),
        "mcp": lambda: configure_codex_mcp(ui),
        "providers": lambda: configure_incremental_management(ui),
        "backup": lambda: run_codex_backup(ui),
        "update": lambda: install_codex_cli(ui),
        "uninstall": lambda: run_codex_uninstall(ui),
    }


def show_menu(ui: ZcfUI, code_tool_type: str) -> None:
    """Top-level interactive menu; loops until the user exits."""
    actions = codex_actions(ui)
    choices = [
        {"name": t("menu.codexApi"), "value": "api"},
        {"name": t("menu.codexMcp"), "value": "mcp"},
        {"name": t("menu.codexProviders"), "value": "providers"},
        {"name": t("menu.codexBackup"), "value": "backup"},
        {"name": t("menu.codexUpdate"), "value": "update"},
        {"name": t("menu.codexUninstall"), "value": "uninstall"},
        {"name": t("menu.checkUpdates"), "value": "check-updates"},
        {"name": t("menu.exit"), "value": "exit"},
    ]
    ui.display_title(t("menu.title"))
    while True:
        choice = ui.select(t("menu.selectAction"), choices)
        if not choice or choice == "exit":
            ui.display_message(t("common.goodbye"), style="cyan")
            return
        try:
            if choice == "check-updates":
                ToolUpdateScheduler(ui).update_by_code_type(code_tool_type)
            else:
                actions[choice]()
        except ZcfError as exc:
            logger.debug("Menu action {} failed: {}", choice, exc)
            ui.display_error(str(exc))


def main(argv: Optional[list] = None) -> None:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)
    config_manager = ConfigManager()
    ui = ZcfUI()

    try:
        config, config_dict = merge_runtime_config(args, config_manager)
        apply_runtime_config(config)
        maybe_save_config(args, config_dict, config_manager)

        if args.command == "codex":
            codex_actions(ui)[args.action]()
        elif args.command == "check-updates":
            ToolUpdateScheduler(ui).update_by_code_type(
                args.code_type or config.code_tool_type,
                skip_prompt=args.yes,
            )
        else:
            show_menu(ui, config.code_tool_type)
    except (KeyboardInterrupt, EOFError):
        ui.display_message(f"\n{t('common.cancelled')}", style="yellow")
        raise SystemExit(130) from None
    except ZcfError as exc:
        ui.display_error(str(exc))
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
