from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .i18n import t


@dataclass
class McpServiceConfig:
    """Launch definition of a catalog MCP server, without any UI text."""

    id: str
    command: str
    args: List[str]
    env: Dict[str, str] = field(default_factory=dict)
    requires_api_key: bool = False
    api_key_env_var: Optional[str] = None
    startup_timeout_ms: Optional[int] = None


@dataclass
class McpService:
    id: str
    name: str
    description: str
    config: McpServiceConfig
    api_key_prompt: Optional[str] = None

    @property
    def requires_api_key(self) -> bool:
        return self.config.requires_api_key


MCP_SERVICE_CONFIGS: List[McpServiceConfig] = [
    McpServiceConfig(id="context7", command="npx", args=["-y", "@upstash/context7-mcp"]),
    McpServiceConfig(
        id="open-websearch",
        command="npx",
        args=["-y", "open-websearch@latest"],
        env={
            "MODE": "stdio",
            "DEFAULT_SEARCH_ENGINE": "duckduckgo",
            "ALLOWED_SEARCH_ENGINES": "duckduckgo,bing,brave",
        },
    ),
    McpServiceConfig(id="spec-workflow", command="npx", args=["-y", "@pimzino/spec-workflow-mcp@latest"]),
    McpServiceConfig(id="mcp-deepwiki", command="npx", args=["-y", "mcp-deepwiki@latest"]),
    McpServiceConfig(id="Playwright", command="npx", args=["-y", "@playwright/mcp@latest"]),
    McpServiceConfig(
        id="exa",
        command="npx",
        args=["-y", "exa-mcp-server"],
        requires_api_key=True,
        api_key_env_var="EXA_API_KEY",
    ),
]


def get_mcp_service_config(service_id: str) -> Optional[McpServiceConfig]:
    for config in MCP_SERVICE_CONFIGS:
        if config.id == service_id:
            return config
    return None


def get_mcp_services() -> List[McpService]:
    """The catalog with names and descriptions in the current language."""
    services = []
    for config in MCP_SERVICE_CONFIGS:
        prompt_key = f"mcp.services.{config.id}.apiKeyPrompt"
        prompt = t(prompt_key) if config.requires_api_key else None
        services.append(
            McpService(
                id=config.id,
                name=t(f"mcp.services.{config.id}.name"),
                description=t(f"mcp.services.{config.id}.description"),
                config=config,
                api_key_prompt=prompt if prompt != prompt_key else None,
            )
        )
    return services


def select_mcp_services(ui) -> Optional[List[str]]:
    """Ask which catalog services to configure. None means the prompt was cancelled."""
    choices = [
        {"name": f"{service.name} - {service.description}", "value": service.id}
        for service in get_mcp_services()
    ]
    selected = ui.checkbox(t("mcp.selectMcpServices"), choices)
    if selected is None:
        ui.display_message(t("common.cancelled"), style="yellow")
        return None
    return list(selected)
