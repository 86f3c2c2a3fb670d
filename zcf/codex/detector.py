from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import ZcfError
from .config_file import read_codex_config
from .model import CodexConfig, CodexProvider


@dataclass
class ConfigManagementMode:
    """Whether provider setup starts from scratch or manages existing providers."""

    mode: str
    has_providers: bool = False
    provider_count: int = 0
    current_provider: Optional[str] = None
    providers: List[CodexProvider] = field(default_factory=list)
    is_unmanaged: bool = False
    error: Optional[str] = None


def detect_config_management_mode() -> ConfigManagementMode:
    try:
        config = read_codex_config()
    except ZcfError as exc:
        return ConfigManagementMode(mode="initial", error=str(exc))

    if not should_show_management_mode(config):
        return ConfigManagementMode(mode="initial")

    return ConfigManagementMode(
        mode="management",
        has_providers=True,
        provider_count=len(config.providers),
        current_provider=config.model_provider,
        providers=list(config.providers),
        is_unmanaged=not config.managed,
    )


def should_show_management_mode(config: Optional[CodexConfig]) -> bool:
    return bool(config and config.providers)


def get_available_management_actions(config: CodexConfig) -> List[str]:
    if config.providers:
        return ["add", "edit", "delete", "switch"]
    return []
