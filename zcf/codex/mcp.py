from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from ..common import get_logger
from ..config import update_zcf_config
from ..i18n import t
from ..mcp_services import get_mcp_service_config, get_mcp_services, select_mcp_services
from ..platform import get_mcp_command, is_windows
from .backup import backup_codex_config, get_backup_message
from .config_file import read_codex_config, write_codex_config
from .model import CodexConfig, CodexMcpService

logger = get_logger(__name__)


@dataclass
class McpSelection:
    """One selected catalog service plus the values the user supplied for it."""

    service_id: str
    api_key: Optional[str] = None


def apply_platform_command(service: CodexMcpService) -> CodexMcpService:
    """Rewrite a bare `npx` launch for platforms that need a wrapper."""
    if service.command != "npx" or not is_windows():
        return service
    command = get_mcp_command()
    return replace(service, command=command[0], args=[*command[1:], *(service.args or [])])


def _build_from_catalog(selection: McpSelection) -> Optional[CodexMcpService]:
    catalog = get_mcp_service_config(selection.service_id)
    if catalog is None:
        logger.warning("Unknown MCP service {}", selection.service_id)
        return None
    env = dict(catalog.env)
    if catalog.api_key_env_var and selection.api_key:
        env[catalog.api_key_env_var] = selection.api_key
    return apply_platform_command(
        CodexMcpService(
            id=catalog.id,
            command=catalog.command,
            args=list(catalog.args),
            env=env or None,
            startup_timeout_ms=catalog.startup_timeout_ms,
        )
    )


def _update_existing(existing: CodexMcpService, selection: McpSelection) -> CodexMcpService:
    catalog = get_mcp_service_config(selection.service_id)
    if catalog is None:
        return existing
    changes = {}
    if catalog.api_key_env_var and selection.api_key:
        env: Dict[str, str] = dict(existing.env or {})
        env[catalog.api_key_env_var] = selection.api_key
        changes["env"] = env
        changes["extra"] = {key: value for key, value in existing.extra.items() if key != "env"}
    if (
        catalog.startup_timeout_ms is not None
        and existing.startup_timeout_ms is None
        and "startup_timeout_ms" not in existing.extra
    ):
        changes["startup_timeout_ms"] = catalog.startup_timeout_ms
    return replace(existing, **changes) if changes else existing


def merge_mcp_services(
    existing: List[CodexMcpService],
    selections: List[McpSelection],
) -> List[CodexMcpService]:
    """Add newly selected services and refresh selected ones; nothing is removed.

    A service that is already configured keeps its own args, command and
    extra env. An explicitly entered API key overrides what is on disk, and a
    catalog timeout only fills in a missing one.
    """
    merged = list(existing)
    index = {service.id: position for position, service in enumerate(merged)}
    for selection in selections:
        if selection.service_id in index:
            position = index[selection.service_id]
            merged[position] = _update_existing(merged[position], selection)
            continue
        built = _build_from_catalog(selection)
        if built is not None:
            index[built.id] = len(merged)
            merged.append(built)
    return merged


def _collect_selections(ui, selected_ids: List[str], config: Optional[CodexConfig]) -> List[McpSelection]:
    services = {service.id: service for service in get_mcp_services()}
    selections = []
    for service_id in selected_ids:
        service = services.get(service_id)
        if service is None:
            continue
        api_key = None
        if service.requires_api_key:
            existing = config.get_mcp_service(service_id) if config else None
            has_key = bool(existing and existing.env and existing.env.get(service.config.api_key_env_var))
            message = service.api_key_prompt or t("mcp.apiKeyPrompt", service=service.name)
            api_key = ui.secret(message, validate=lambda value: has_key or bool(value.strip()))
            api_key = (api_key or "").strip() or None
            if api_key is None and not has_key:
                continue
        selections.append(McpSelection(service_id, api_key))
    return selections


def configure_codex_mcp(ui) -> None:
    """Interactively add or refresh MCP servers in config.toml."""
    config = read_codex_config()
    selected_ids = select_mcp_services(ui)
    if selected_ids is None:
        return

    backup_path = backup_codex_config()
    if backup_path:
        ui.display_message(get_backup_message(backup_path), style="dim")

    base = config or CodexConfig()
    if not selected_ids:
        ui.display_message(t("codex.noMcpConfigured"), style="yellow")
        write_codex_config(replace(base, managed=True))
        update_zcf_config(code_tool_type="codex")
        return

    selections = _collect_selections(ui, selected_ids, config)
    services = merge_mcp_services(base.mcp_services, selections)
    write_codex_config(replace(base, mcp_services=services, managed=True))
    update_zcf_config(code_tool_type="codex")
    ui.display_success(t("codex.mcpConfigured"))
