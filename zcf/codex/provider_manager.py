from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..common import get_logger
from ..constants import WIRE_APIS
from .backup import backup_codex_complete
from .config_file import read_codex_config, write_auth_file, write_codex_config
from .model import CodexProvider
from .results import OperationFailure, OperationResult, OperationSuccess

logger = get_logger(__name__)

NO_CONFIG = "No existing configuration found"
NO_PROVIDERS_SPECIFIED = "No providers specified for deletion"


def provider_exists(provider_id: str) -> str:
    return f'Provider with ID "{provider_id}" already exists'


def provider_not_found(provider_id: str) -> str:
    return f'Provider with ID "{provider_id}" not found'


def providers_not_found(provider_ids: List[str]) -> str:
    return f"Some providers not found: {', '.join(provider_ids)}"


@dataclass
class ProviderUpdate:
    """Fields to change on an existing provider; None leaves a field as is."""

    name: Optional[str] = None
    base_url: Optional[str] = None
    wire_api: Optional[str] = None
    api_key: Optional[str] = None


def add_provider_to_existing(provider: CodexProvider, api_key: str) -> OperationResult:
    config = read_codex_config()
    if config is None:
        return OperationFailure(NO_CONFIG)
    if config.get_provider(provider.id) is not None:
        return OperationFailure(provider_exists(provider.id))

    backup_path = backup_codex_complete()
    updated = replace(config, providers=[*config.providers, provider])
    write_codex_config(updated)
    if api_key:
        write_auth_file({provider.env_key: api_key})

    logger.info("Added provider {}", provider.id)
    return OperationSuccess(
        backup_path=backup_path,
        added_provider=provider,
        remaining_providers=updated.providers,
    )


def edit_existing_provider(provider_id: str, update: ProviderUpdate) -> OperationResult:
    config = read_codex_config()
    if config is None:
        return OperationFailure(NO_CONFIG)
    current = config.get_provider(provider_id)
    if current is None:
        return OperationFailure(provider_not_found(provider_id))

    backup_path = backup_codex_complete()
    changes = {
        field_name: value
        for field_name, value in (
            ("name", update.name),
            ("base_url", update.base_url),
            ("wire_api", update.wire_api),
        )
        if value
    }
    edited = replace(
        current,
        extra={key: value for key, value in current.extra.items() if key not in changes},
        **changes,
    )
    providers = [edited if provider.id == provider_id else provider for provider in config.providers]
    write_codex_config(replace(config, providers=providers))
    if update.api_key:
        write_auth_file({edited.env_key: update.api_key})

    logger.info("Updated provider {} ({})", provider_id, ", ".join(changes) or "api key only")
    return OperationSuccess(
        backup_path=backup_path,
        updated_provider=edited,
        remaining_providers=providers,
    )


def delete_providers(provider_ids: List[str]) -> OperationResult:
    """Remove providers. Deleting the active one promotes the first survivor;
    deleting all of them clears the active provider."""
    config = read_codex_config()
    if config is None:
        return OperationFailure(NO_CONFIG)
    if not provider_ids:
        return OperationFailure(NO_PROVIDERS_SPECIFIED)

    missing = [provider_id for provider_id in provider_ids if config.get_provider(provider_id) is None]
    if missing:
        return OperationFailure(providers_not_found(missing))

    backup_path = backup_codex_complete()
    remaining = [provider for provider in config.providers if provider.id not in provider_ids]

    model_provider = config.model_provider
    commented = config.model_provider_commented
    default_changed = model_provider in provider_ids
    if default_changed:
        model_provider = remaining[0].id if remaining else None
        if model_provider is None:
            commented = None

    write_codex_config(
        replace(
            config,
            providers=remaining,
            model_provider=model_provider,
            model_provider_commented=commented,
        )
    )

    logger.info("Deleted providers {}", ", ".join(provider_ids))
    return OperationSuccess(
        backup_path=backup_path,
        deleted_providers=list(provider_ids),
        remaining_providers=remaining,
        new_default_provider=model_provider if default_changed else None,
    )


def switch_default_provider(provider_id: str) -> OperationResult:
    config = read_codex_config()
    if config is None:
        return OperationFailure(NO_CONFIG)
    if config.get_provider(provider_id) is None:
        return OperationFailure(provider_not_found(provider_id))

    backup_path = backup_codex_complete()
    write_codex_config(replace(config, model_provider=provider_id, model_provider_commented=None))

    logger.info("Switched default provider to {}", provider_id)
    return OperationSuccess(
        backup_path=backup_path,
        remaining_providers=config.providers,
        new_default_provider=provider_id,
    )


def validate_provider_data(provider: Dict[str, Any]) -> List[str]:
    """Return field-level problems with a provider definition; empty means valid."""
    errors = []

    def blank(key: str) -> bool:
        value = provider.get(key)
        return not isinstance(value, str) or not value.strip()

    if blank("id"):
        errors.append("Provider ID is required")
    if blank("name"):
        errors.append("Provider name is required")
    if blank("base_url"):
        errors.append("Base URL is required")
    if provider.get("wire_api") and provider["wire_api"] not in WIRE_APIS:
        errors.append('Wire API must be either "responses" or "chat"')
    return errors
