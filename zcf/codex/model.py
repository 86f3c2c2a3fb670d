from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..constants import DEFAULT_ENV_KEY


@dataclass
class CodexProvider:
    """A `[model_providers.<id>]` table.

    Keys ZCF does not manage (http_headers, query_params, ...) are kept in
    `extra` and written back after the known ones.
    """

    id: str
    name: str
    base_url: str
    wire_api: str = "responses"
    env_key: str = DEFAULT_ENV_KEY
    requires_openai_auth: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CodexMcpService:
    """A `[mcp_servers.<id>]` table."""

    id: str
    command: str
    args: Optional[List[Any]] = None
    env: Optional[Dict[str, str]] = None
    startup_timeout_ms: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CodexConfig:
    """Structured view of ~/.codex/config.toml.

    Only the provider and MCP sections are modelled. Everything else lives in
    `other_config` as raw lines: the leading run before the first table header
    belongs to the root scope, the rest are preserved tables.
    """

    model: Optional[str] = None
    model_provider: Optional[str] = None
    model_provider_commented: Optional[bool] = None
    providers: List[CodexProvider] = field(default_factory=list)
    mcp_services: List[CodexMcpService] = field(default_factory=list)
    managed: bool = False
    other_config: List[str] = field(default_factory=list)

    def get_provider(self, provider_id: str) -> Optional[CodexProvider]:
        for provider in self.providers:
            if provider.id == provider_id:
                return provider
        return None

    def get_mcp_service(self, service_id: str) -> Optional[CodexMcpService]:
        for service in self.mcp_services:
            if service.id == service_id:
                return service
        return None
