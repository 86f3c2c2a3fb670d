from pathlib import Path

ZCF_MARKER = "# --- model provider added by ZCF ---"
ZCF_MCP_MARKER = "# --- MCP servers added by ZCF ---"
LEGACY_ZCF_MARKER = "Managed by ZCF"

BACKUP_DIR_NAME = "backup"
BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_ENV_KEY = "OPENAI_API_KEY"
WIRE_APIS = ("responses", "chat")

SUPPORTED_LANGS = ("zh-CN", "en")
CODE_TOOL_TYPES = ("claude-code", "codex")
DEFAULT_CODE_TOOL_TYPE = "claude-code"

NPM_REGISTRY_URL = "https://registry.npmjs.org"
CODEX_PACKAGE = "@openai/codex"
CLAUDE_CODE_PACKAGE = "@anthropic-ai/claude-code"
CCR_PACKAGE = "@musistudio/claude-code-router"
COMETIX_PACKAGE = "@cometix/ccline"


def codex_dir() -> Path:
    return Path.home() / ".codex"


def codex_config_file() -> Path:
    return codex_dir() / "config.toml"


def codex_auth_file() -> Path:
    return codex_dir() / "auth.json"


def codex_agents_file() -> Path:
    return codex_dir() / "AGENTS.md"


def codex_prompts_dir() -> Path:
    return codex_dir() / "prompts"


def codex_backup_root() -> Path:
    return codex_dir() / BACKUP_DIR_NAME


def zcf_config_file() -> Path:
    return Path.home() / ".ufomiao" / "zcf" / "config.toml"
