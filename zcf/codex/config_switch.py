from typing import List

from ..constants import DEFAULT_BASE_URL
from ..i18n import t
from .api import env_key_for, protocol_choices, sanitize_provider_name
from .detector import detect_config_management_mode
from .model import CodexProvider
from .provider_manager import (
    ProviderUpdate,
    add_provider_to_existing,
    delete_providers,
    edit_existing_provider,
    switch_default_provider,
)


def _provider_choices(providers: List[CodexProvider]) -> list:
    return [{"name": f"{provider.name} ({provider.base_url})", "value": provider.id} for provider in providers]


def _valid_name(value: str) -> bool:
    sanitized = sanitize_provider_name(value)
    return bool(sanitized) and sanitized == value.strip()


def _report(ui, result, success_message: str, failure_key: str) -> bool:
    if not result.success:
        ui.display_error(t(failure_key, error=result.error))
        return False
    ui.display_success(success_message)
    if result.backup_path:
        ui.display_message(t("common.backupCreated", path=str(result.backup_path)), style="dim")
    return True


def handle_add_provider(ui) -> None:
    name = ui.text(
        t("codex.providerNamePrompt"),
        validate=_valid_name,
        invalid_message=t("codex.providerNameInvalid"),
    ).strip()
    base_url = ui.text(
        t("codex.providerBaseUrlPrompt"),
        default=DEFAULT_BASE_URL,
        validate=lambda value: bool(value.strip()),
        invalid_message=t("codex.providerBaseUrlRequired"),
    ).strip()
    wire_api = ui.select(t("codex.providerProtocolPrompt"), protocol_choices(), default="responses")
    api_key = ui.secret(
        t("codex.providerApiKeyPrompt"),
        validate=lambda value: bool(value.strip()),
        invalid_message=t("codex.providerApiKeyRequired"),
    ).strip()

    provider_id = sanitize_provider_name(name)
    provider = CodexProvider(
        id=provider_id,
        name=name,
        base_url=base_url,
        wire_api=wire_api,
        env_key=env_key_for(provider_id),
        requires_openai_auth=True,
    )
    result = add_provider_to_existing(provider, api_key)
    _report(ui, result, t("codex.providerAdded", name=name), "codex.providerAddFailed")


def handle_edit_provider(ui, providers: List[CodexProvider]) -> None:
    provider_id = ui.select(t("codex.selectProviderToEdit"), _provider_choices(providers))
    provider = next((item for item in providers if item.id == provider_id), None)
    if provider is None:
        ui.display_error(t("codex.providerNotFound"))
        return

    update = ProviderUpdate(
        name=ui.text(
            t("codex.providerNamePrompt"),
            default=provider.name,
            validate=lambda value: bool(value.strip()),
            invalid_message=t("codex.providerNameRequired"),
        ).strip(),
        base_url=ui.text(
            t("codex.providerBaseUrlPrompt"),
            default=provider.base_url,
            validate=lambda value: bool(value.strip()),
            invalid_message=t("codex.providerBaseUrlRequired"),
        ).strip(),
        wire_api=ui.select(t("codex.providerProtocolPrompt"), protocol_choices(), default=provider.wire_api),
        # empty keeps the stored key
        api_key=ui.secret(t("codex.providerApiKeyPrompt")).strip() or None,
    )
    result = edit_existing_provider(provider_id, update)
    _report(ui, result, t("codex.providerUpdated", name=update.name), "codex.providerUpdateFailed")


def handle_delete_providers(ui, providers: List[CodexProvider]) -> None:
    selected = ui.checkbox(t("codex.selectProvidersToDelete"), _provider_choices(providers))
    if not selected:
        ui.display_message(t("common.cancelled"), style="yellow")
        return

    names = ", ".join(next((p.name for p in providers if p.id == pid), pid) for pid in selected)
    if not ui.confirm(t("codex.confirmDeleteProviders", providers=names)):
        ui.display_message(t("common.cancelled"), style="yellow")
        return

    result = delete_providers(list(selected))
    if not _report(ui, result, t("codex.providersDeleted", count=len(selected)), "codex.providersDeleteFailed"):
        return
    if result.new_default_provider:
        ui.display_message(t("codex.newDefaultProvider", provider=result.new_default_provider), style="cyan")
    elif not result.remaining_providers:
        ui.display_message(t("codex.defaultProviderCleared"), style="yellow")


def handle_switch_provider(ui, providers: List[CodexProvider], current: str) -> None:
    provider_id = ui.select(t("codex.selectProviderToSwitch"), _provider_choices(providers), default=current)
    result = switch_default_provider(provider_id)
    _report(ui, result, t("codex.providerSwitched", provider=provider_id), "codex.providerSwitchFailed")


def configure_incremental_management(ui) -> None:
    """Add, edit, delete or switch providers in an existing config.toml."""
    mode = detect_config_management_mode()
    if mode.error:
        ui.display_error(t("codex.configError", error=mode.error))
        return
    if mode.mode != "management" or not mode.has_providers:
        ui.display_warning(t("codex.noExistingProviders"))
        return

    ui.display_title(
        t("codex.incrementalManagementTitle"),
        t("codex.currentProviderCount", count=mode.provider_count),
    )
    if mode.current_provider:
        ui.display_message(t("codex.currentDefaultProvider", provider=mode.current_provider), style="dim")
    if mode.is_unmanaged:
        ui.display_warning(t("codex.unmanagedWarning"))

    action = ui.select(
        t("codex.selectAction"),
        [
            {"name": t("codex.addProvider"), "value": "add"},
            {"name": t("codex.editProvider"), "value": "edit"},
            {"name": t("codex.deleteProvider"), "value": "delete"},
            {"name": t("codex.switchProvider"), "value": "switch"},
            {"name": t("common.back"), "value": "back"},
        ],
    )
    if not action or action == "back":
        ui.display_message(t("common.cancelled"), style="yellow")
        return

    if action == "add":
        handle_add_provider(ui)
    elif action == "edit":
        handle_edit_provider(ui, mode.providers)
    elif action == "delete":
        handle_delete_providers(ui, mode.providers)
    elif action == "switch":
        handle_switch_provider(ui, mode.providers, mode.current_provider)
