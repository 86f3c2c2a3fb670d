from .api import configure_codex_api
from .backup import (
    backup_codex_agents,
    backup_codex_complete,
    backup_codex_config,
    backup_codex_files,
    backup_codex_prompts,
    create_backup_directory,
    get_backup_message,
)
from .config_file import read_codex_config, write_auth_file, write_codex_config
from .config_switch import configure_incremental_management
from .detector import detect_config_management_mode
from .installer import install_codex_cli, run_codex_update
from .mcp import configure_codex_mcp, merge_mcp_services
from .model import CodexConfig, CodexMcpService, CodexProvider
from .parser import parse_codex_config
from .provider_manager import (
    ProviderUpdate,
    add_provider_to_existing,
    delete_providers,
    edit_existing_provider,
    switch_default_provider,
)
from .renderer import render_codex_config
from .results import OperationFailure, OperationSuccess
from .uninstaller import CodexUninstaller, run_codex_uninstall

__all__ = [
    "CodexConfig",
    "CodexMcpService",
    "CodexProvider",
    "CodexUninstaller",
    "OperationFailure",
    "OperationSuccess",
    "ProviderUpdate",
    "add_provider_to_existing",
    "backup_codex_agents",
    "backup_codex_complete",
    "backup_codex_config",
    "backup_codex_files",
    "backup_codex_prompts",
    "configure_codex_api",
    "configure_codex_mcp",
    "configure_incremental_management",
    "create_backup_directory",
    "delete_providers",
    "detect_config_management_mode",
    "edit_existing_provider",
    "get_backup_message",
    "install_codex_cli",
    "merge_mcp_services",
    "parse_codex_config",
    "read_codex_config",
    "render_codex_config",
    "run_codex_uninstall",
    "run_codex_update",
    "switch_default_provider",
    "write_auth_file",
    "write_codex_config",
]
