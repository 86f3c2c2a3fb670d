import re
import sys
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..common import get_logger
from ..constants import DEFAULT_ENV_KEY, LEGACY_ZCF_MARKER, WIRE_APIS, ZCF_MARKER, ZCF_MCP_MARKER
from .model import CodexConfig, CodexMcpService, CodexProvider
from .renderer import format_key, format_value
from .toml_sections import Item, Section, split_sections

logger = get_logger(__name__)

TOMLDecodeError = tomllib.TOMLDecodeError

MARKERS = (ZCF_MARKER, ZCF_MCP_MARKER, LEGACY_ZCF_MARKER)

_COMMENTED_PROVIDER_RE = re.compile(
    r"""^\s*#\s*model_provider\s*=\s*(?:"([^"]*)"|'([^']*)')\s*(?:#.*)?$"""
)

PROVIDER_KEYS = ("name", "base_url", "wire_api", "env_key", "requires_openai_auth")
MCP_KEYS = ("command", "args", "env", "startup_timeout_ms")


def is_marker_line(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("#") and any(marker.lstrip("# ") in stripped for marker in MARKERS)


def match_commented_provider(line: str) -> Optional[str]:
    match = _COMMENTED_PROVIDER_RE.match(line)
    if not match:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


def _decode(section: Section) -> Dict[str, Any]:
    """Decode one section on its own; syntax errors propagate as TOMLDecodeError."""
    return tomllib.loads(section.text())


def _table_at(data: Dict[str, Any], key: Tuple[str, ...]) -> Any:
    node: Any = data
    for part in key:
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node


def _decode_item(item: Item) -> Dict[str, Any]:
    return tomllib.loads("\n".join(item.lines))


class _TableCollector:
    """Accumulates `[<root>.<id>]` tables and their sub-tables in discovery order."""

    def __init__(self, root: str):
        self.root = root
        self.entries: Dict[str, Dict[str, Any]] = {}
        self._primary = set()

    def add_inline(self, data: Any) -> Set[str]:
        """Collect inline entries of a bare root table; returns the keys that are not tables."""
        strays: Set[str] = set()
        if not isinstance(data, dict):
            return strays
        for entry_id, value in data.items():
            if isinstance(value, dict):
                self._set_primary(entry_id, value)
            else:
                logger.warning("Keeping non-table entry {}.{} as plain config", self.root, entry_id)
                strays.add(entry_id)
        return strays

    def add(self, key: Tuple[str, ...], value: Any) -> None:
        if not isinstance(value, dict):
            logger.warning("Ignoring non-table entry {}", ".".join(key))
            return
        entry_id = key[1]
        if len(key) == 2:
            self._set_primary(entry_id, value)
            return
        node = self.entries.setdefault(entry_id, {})
        for part in key[2:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[key[-1]] = dict(value)

    def _set_primary(self, entry_id: str, value: Dict[str, Any]) -> None:
        if entry_id in self._primary:
            logger.debug("Duplicate table {}.{}, last definition wins", self.root, entry_id)
            self.entries[entry_id] = dict(value)
            return
        self._primary.add(entry_id)
        existing = self.entries.setdefault(entry_id, {})
        existing.update(value)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class _Fields:
    """Typed reads from a decoded table. Values of an unexpected type are kept raw in `extra`."""

    def __init__(self, owner: str, data: Dict[str, Any], known: Tuple[str, ...]):
        self.owner = owner
        self.data = data
        self.extra = {key: value for key, value in data.items() if key not in known}

    def get(self, key: str, accept: Callable[[Any], bool], default: Any = None) -> Any:
        if key not in self.data:
            return default
        value = self.data[key]
        if accept(value):
            return value
        logger.warning("{} has unexpected {} = {!r}, keeping it as written", self.owner, key, value)
        self.extra[key] = value
        return default


def _to_provider(provider_id: str, data: Dict[str, Any]) -> CodexProvider:
    fields = _Fields(f"model_providers.{provider_id}", data, PROVIDER_KEYS)
    wire_api = fields.get("wire_api", _is_text, "responses")
    if wire_api not in WIRE_APIS:
        logger.warning("Provider {} uses unknown wire_api {!r}", provider_id, wire_api)

    return CodexProvider(
        id=provider_id,
        name=fields.get("name", lambda value: isinstance(value, str), provider_id),
        base_url=fields.get("base_url", lambda value: isinstance(value, str), ""),
        wire_api=wire_api,
        env_key=fields.get("env_key", _is_text, DEFAULT_ENV_KEY),
        requires_openai_auth=fields.get("requires_openai_auth", lambda value: isinstance(value, bool)),
        extra=fields.extra,
    )


def _to_mcp_service(service_id: str, data: Dict[str, Any]) -> CodexMcpService:
    fields = _Fields(f"mcp_servers.{service_id}", data, MCP_KEYS)
    args = fields.get("args", lambda value: isinstance(value, list))
    env = fields.get("env", lambda value: isinstance(value, dict))
    return CodexMcpService(
        id=service_id,
        command=fields.get("command", lambda value: isinstance(value, str), service_id),
        args=list(args) if args is not None else None,
        env=dict(env) if env is not None else None,
        startup_timeout_ms=fields.get("startup_timeout_ms", _is_int),
        extra=fields.extra,
    )


class _Directive:
    def __init__(self, provider: str, commented: bool, item: Optional[Item] = None, owner: Optional[Section] = None):
        self.provider = provider
        self.commented = commented
        self.item = item
        self.owner = owner


def _find_displaced(section: Section) -> List[_Directive]:
    """model_provider lines set apart inside a [projects.*] table."""
    found = []
    previous: Optional[Item] = None
    for item in section.items:
        detached = previous is not None and (
            previous.kind == "blank" or (previous.kind == "comment" and is_marker_line(previous.lines[0]))
        )
        if detached:
            if item.kind == "value" and item.key == ("model_provider",):
                value = _decode_item(item).get("model_provider")
                if isinstance(value, str):
                    found.append(_Directive(value, False, item, section))
            elif item.kind == "comment":
                commented = match_commented_provider(item.lines[0])
                if commented is not None:
                    found.append(_Directive(commented, True, item, section))
        previous = item
    return found


def _normalize_blank_lines(lines: List[str]) -> List[str]:
    result: List[str] = []
    for line in lines:
        if not line.strip():
            if not result or not result[-1].strip():
                continue
            result.append("")
        else:
            result.append(line)
    while result and not result[-1].strip():
        result.pop()
    return result


def parse_codex_config(text: str) -> CodexConfig:
    """Parse config.toml text into a CodexConfig.

    Only valid TOML 1.0 is accepted; TOMLDecodeError is raised otherwise.
    Provider and MCP tables become structured entries, everything else is
    kept as raw lines in `other_config`.
    """
    config = CodexConfig()
    if not text or not text.strip():
        return config

    config.managed = any(marker in text for marker in MARKERS)
    sections = split_sections(text)

    root = sections[0]
    root_data = _decode(root)
    root_live: Optional[_Directive] = None
    root_commented: Optional[_Directive] = None
    if isinstance(root_data.get("model_provider"), str):
        root_live = _Directive(root_data["model_provider"], False)
    if isinstance(root_data.get("model"), str):
        config.model = root_data["model"]

    providers = _TableCollector("model_providers")
    mcp_servers = _TableCollector("mcp_servers")
    collectors = {"model_providers": providers, "mcp_servers": mcp_servers}
    # dotted keys such as `model_providers.x.name = ...` written before any header
    dotted_roots = [head for head in collectors if isinstance(root_data.get(head), dict)]

    root_lines: List[str] = []
    for item in root.items:
        if item.kind == "comment":
            if is_marker_line(item.lines[0]):
                continue
            commented = match_commented_provider(item.lines[0])
            if commented is not None:
                if root_commented is None:
                    root_commented = _Directive(commented, True)
                continue
        if item.kind == "value":
            if item.key == ("model_provider",) and root_live is not None:
                continue
            if item.key == ("model",) and config.model is not None:
                continue
            if item.key[0] in dotted_roots:
                continue
        root_lines.extend(item.lines)

    for head in dotted_roots:
        strays = collectors[head].add_inline(root_data[head])
        for key, value in root_data[head].items():
            if key in strays:
                root_lines.append(f"{head}.{format_key(key)} = {format_value(value)}")

    preserved: List[Section] = []
    displaced: List[_Directive] = []

    for section in sections[1:]:
        data = _decode(section)
        head = section.key[0]
        if section.is_array or head not in ("model_providers", "mcp_servers"):
            preserved.append(section)
            if head == "projects" and not section.is_array:
                displaced.extend(_find_displaced(section))
            continue

        collector = providers if head == "model_providers" else mcp_servers
        if len(section.key) == 1:
            strays = collector.add_inline(_table_at(data, section.key))
            if strays:
                kept = [item for item in section.items if item.key and item.key[0] in strays]
                preserved.append(Section(key=section.key, header=section.header, items=kept))
        else:
            collector.add(section.key, _table_at(data, section.key))

    chosen = root_live
    if chosen is None:
        chosen = next((d for d in displaced if not d.commented), None)
    if chosen is None:
        chosen = root_commented
    if chosen is None:
        chosen = next((d for d in displaced if d.commented), None)

    if chosen is not None:
        config.model_provider = chosen.provider
        config.model_provider_commented = True if chosen.commented else None
        if chosen.owner is not None:
            logger.debug("Lifting model_provider {!r} out of {}", chosen.provider, chosen.owner.header)
            chosen.owner.items.remove(chosen.item)

    config.providers = [_to_provider(key, value) for key, value in providers.entries.items()]
    config.mcp_services = [_to_mcp_service(key, value) for key, value in mcp_servers.entries.items()]

    other_lines = _normalize_blank_lines(root_lines)
    for section in preserved:
        if other_lines:
            other_lines.append("")
        other_lines.append(section.header)
        for item in section.items:
            if item.kind == "comment" and is_marker_line(item.lines[0]):
                continue
            other_lines.extend(item.lines)
    config.other_config = _normalize_blank_lines(other_lines)
    return config
