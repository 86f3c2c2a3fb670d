import re
from dataclasses import replace
from typing import Dict, List, Optional

from ..common import get_logger
from ..config import update_zcf_config
from ..constants import DEFAULT_BASE_URL, DEFAULT_ENV_KEY
from ..i18n import t
from .backup import backup_codex_config, get_backup_message
from .config_file import read_auth_file, read_codex_config, write_auth_file, write_codex_config
from .model import CodexConfig, CodexProvider

logger = get_logger(__name__)

_INVALID_NAME_CHARS = re.compile(r"[^\w.-]")


def sanitize_provider_name(name: str) -> str:
    """Provider id derived from a display name: word characters, '.' and '-'."""
    return _INVALID_NAME_CHARS.sub("", name.strip())


def env_key_for(provider_id: str) -> str:
    return f"{provider_id.upper().replace('-', '_')}_API_KEY"


def protocol_choices() -> List[Dict[str, str]]:
    return [
        {"name": t("codex.protocolResponses"), "value": "responses"},
        {"name": t("codex.protocolChat"), "value": "chat"},
    ]


def _validate_name(value: str) -> bool:
    sanitized = sanitize_provider_name(value)
    return bool(sanitized) and sanitized == value.strip()


def _configure_official(ui, existing: Optional[CodexConfig]) -> None:
    backup_path = backup_codex_config()
    if backup_path:
        ui.display_message(get_backup_message(backup_path), style="dim")

    base = existing or CodexConfig()
    write_codex_config(
        replace(base, model_provider=None, model_provider_commented=None, providers=[], managed=True)
    )
    if DEFAULT_ENV_KEY in read_auth_file():
        write_auth_file({DEFAULT_ENV_KEY: None})

    update_zcf_config(code_tool_type="codex")
    ui.display_success(t("codex.officialConfigured"))


def _prompt_providers(ui, existing: Optional[CodexConfig]) -> Dict[str, tuple]:
    existing_map = {provider.id: provider for provider in (existing.providers if existing else [])}
    first_existing = next(iter(existing_map.values())) if len(existing_map) == 1 else None
    session: Dict[str, tuple] = {}

    while True:
        name = ui.text(
            t("codex.providerNamePrompt"),
            default=first_existing.name if first_existing else "",
            validate=_validate_name,
            invalid_message=t("codex.providerNameInvalid"),
        ).strip()
        provider_id = sanitize_provider_name(name)
        previous = existing_map.get(provider_id)

        base_url = ui.text(
            t("codex.providerBaseUrlPrompt"),
            default=previous.base_url if previous else DEFAULT_BASE_URL,
            validate=lambda value: bool(value.strip()),
            invalid_message=t("codex.providerBaseUrlRequired"),
        ).strip()
        wire_api = ui.select(
            t("codex.providerProtocolPrompt"),
            protocol_choices(),
            default=previous.wire_api if previous else "responses",
        )
        api_key = ui.secret(
            t("codex.providerApiKeyPrompt"),
            validate=lambda value: bool(value.strip()),
            invalid_message=t("codex.providerApiKeyRequired"),
        ).strip()

        in_session = provider_id in session
        duplicate = previous or (session[provider_id][0] if in_session else None)
        if duplicate is not None:
            source = t("codex.existingConfig") if previous is not None else t("codex.currentSession")
            if not ui.confirm(t("codex.providerDuplicatePrompt", name=duplicate.name, source=source)):
                ui.display_message(t("codex.providerDuplicateSkipped"), style="yellow")
                continue
            session.pop(provider_id, None)

        provider = CodexProvider(
            id=provider_id,
            name=name,
            base_url=base_url,
            wire_api=wire_api or "responses",
            env_key=env_key_for(provider_id),
        )
        session[provider_id] = (provider, api_key)

        if not ui.confirm(t("codex.addProviderPrompt")):
            return session


def configure_codex_api(ui) -> None:
    """Choose between the official login and a set of custom providers."""
    existing = read_codex_config()
    mode = ui.select(
        t("codex.apiModePrompt"),
        [
            {"name": t("codex.apiModeOfficial"), "value": "official"},
            {"name": t("codex.apiModeCustom"), "value": "custom"},
        ],
        default="custom",
    )
    if not mode:
        ui.display_message(t("common.cancelled"), style="yellow")
        return
    if mode == "official":
        _configure_official(ui, existing)
        return

    backup_path = backup_codex_config()
    if backup_path:
        ui.display_message(get_backup_message(backup_path), style="dim")

    session = _prompt_providers(ui, existing)
    if not session:
        ui.display_message(t("codex.noProvidersConfigured"), style="yellow")
        return

    providers = [provider for provider, _ in session.values()]
    provider_ids = {provider.id for provider in providers}
    default_choice = existing.model_provider if existing and existing.model_provider in provider_ids else providers[0].id
    default_provider = ui.select(
        t("codex.selectDefaultProviderPrompt"),
        [{"name": provider.name or provider.id, "value": provider.id} for provider in providers],
        default=default_choice,
    )

    base = existing or CodexConfig()
    write_codex_config(
        replace(
            base,
            model_provider=default_provider,
            model_provider_commented=None,
            providers=providers,
            managed=True,
        )
    )
    write_auth_file({provider.env_key: api_key for provider, api_key in session.values()})
    update_zcf_config(code_tool_type="codex")
    logger.info("Configured {} provider(s), default {}", len(providers), default_provider)
    ui.display_success(t("codex.apiConfigured"))
