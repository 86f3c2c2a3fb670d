import argparse
import os
from typing import Tuple

from .common import configure_logging
from .config import ConfigManager, ZcfConfig
from .constants import SUPPORTED_LANGS
from .i18n import init_i18n

CODEX_ACTIONS = ("api", "mcp", "providers", "backup", "update", "uninstall")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(prog="zcf", description="ZCF - Zero-Config Code Flow")
    parser.add_argument("--lang", choices=SUPPORTED_LANGS, help="Interface language")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Save the current settings as default configuration",
    )

    subparsers = parser.add_subparsers(dest="command")
    codex = subparsers.add_parser("codex", help="Manage the Codex CLI configuration")
    codex.add_argument("action", choices=CODEX_ACTIONS, help="Codex action to run")

    check = subparsers.add_parser("check-updates", help="Check npm-installed tools for updates")
    check.add_argument(
        "--code-type",
        choices=("claude-code", "codex"),
        default=None,
        help="Which tool family to update (defaults to the saved code tool type)",
    )
    check.add_argument("--yes", action="store_true", help="Update without asking")
    return parser


def merge_runtime_config(args: argparse.Namespace, config_manager: ConfigManager) -> Tuple[ZcfConfig, dict]:
    """Merge CLI args into persisted preferences and return both config object and dict."""
    config = config_manager.load_config()
    config_dict = config.to_dict()

    if getattr(args, "lang", None):
        config_dict["preferred_lang"] = args.lang
    if os.environ.get("ZCF_LOG_LEVEL"):
        config_dict["log_level"] = os.environ["ZCF_LOG_LEVEL"]
    if getattr(args, "debug", False):
        config_dict["log_level"] = "DEBUG"

    return ZcfConfig.from_dict(config_dict), config_dict


def maybe_save_config(args: argparse.Namespace, config_dict: dict, config_manager: ConfigManager) -> None:
    """Persist merged preferences when --save-config is set."""
    if args.save_config:
        config_manager.save_config(**config_dict)
        print("Configuration saved successfully!")


def apply_runtime_config(config: ZcfConfig) -> None:
    """Initialise language and logging from the merged preferences."""
    init_i18n(config.preferred_lang)
    configure_logging(config.log_level, force=True)
