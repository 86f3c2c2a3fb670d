import re
from datetime import date, datetime, time
from typing import Any, Dict, List, Sequence

from ..constants import ZCF_MARKER
from .model import CodexConfig, CodexMcpService, CodexProvider
from .toml_sections import split_root_lines

_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_BASIC_ESCAPES = {"\\": "\\\\", '"': '\\"', "\b": "\\b", "\t": "\\t", "\n": "\\n", "\f": "\\f", "\r": "\\r"}


def quote(value: str) -> str:
    """Render a TOML basic string."""
    out = []
    for char in value:
        if char in _BASIC_ESCAPES:
            out.append(_BASIC_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\u{ord(char):04X}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def format_key(key: str) -> str:
    return key if _BARE_KEY_RE.match(key) else quote(key)


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return format_inline_table(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    return quote(str(value))


def format_inline_table(values: Dict[str, Any]) -> str:
    if not values:
        return "{}"
    pairs = ", ".join(f"{format_key(key)} = {format_value(value)}" for key, value in values.items())
    return "{ " + pairs + " }"


def _table_header(*parts: str) -> str:
    return "[" + ".".join(format_key(part) for part in parts) + "]"


def _render_provider(provider: CodexProvider) -> List[str]:
    lines = [_table_header("model_providers", provider.id)]
    # a key kept raw in extra replaces its defaulted field
    for key, value in (
        ("name", provider.name),
        ("base_url", provider.base_url),
        ("wire_api", provider.wire_api),
        ("env_key", provider.env_key),
    ):
        if key not in provider.extra:
            lines.append(f"{key} = {quote(value)}")
    if provider.requires_openai_auth is not None:
        lines.append(f"requires_openai_auth = {format_value(provider.requires_openai_auth)}")
    for key, value in provider.extra.items():
        lines.append(f"{format_key(key)} = {format_value(value)}")
    return lines


def _render_mcp_service(service: CodexMcpService) -> List[str]:
    lines = [_table_header("mcp_servers", service.id)]
    if "command" not in service.extra:
        lines.append(f"command = {quote(service.command)}")
    if service.args is not None:
        lines.append(f"args = {format_value(list(service.args))}")
    if service.env is not None:
        lines.append(f"env = {format_inline_table(service.env)}")
    if service.startup_timeout_ms is not None:
        lines.append(f"startup_timeout_ms = {service.startup_timeout_ms}")
    for key, value in service.extra.items():
        lines.append(f"{format_key(key)} = {format_value(value)}")
    return lines


def _strip_blank_edges(lines: Sequence[str]) -> List[str]:
    result = list(lines)
    while result and not result[0].strip():
        result.pop(0)
    while result and not result[-1].strip():
        result.pop()
    return result


def render_codex_config(config: CodexConfig) -> str:
    """Render a CodexConfig back to TOML text.

    Global directives and root-scope lines come before every table header,
    otherwise TOML would scope them into the preceding table.
    """
    root_lines, table_lines = split_root_lines(list(config.other_config))
    root_lines = _strip_blank_edges(root_lines)
    table_lines = _strip_blank_edges(table_lines)

    head: List[str] = []
    if config.managed:
        head.append(ZCF_MARKER)
    if config.model_provider is not None:
        directive = f"model_provider = {quote(config.model_provider)}"
        head.append(f"# {directive}" if config.model_provider_commented else directive)
    if config.model is not None:
        head.append(f"model = {quote(config.model)}")
    if root_lines:
        if head:
            head.append("")
        head.extend(root_lines)

    blocks: List[List[str]] = []
    if head:
        blocks.append(head)
    blocks.extend(_render_provider(provider) for provider in config.providers)
    blocks.extend(_render_mcp_service(service) for service in config.mcp_services)
    if table_lines:
        blocks.append(table_lines)

    if not blocks:
        return ""
    return "\n\n".join("\n".join(block) for block in blocks) + "\n"
