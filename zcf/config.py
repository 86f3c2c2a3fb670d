from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import toml

from .constants import DEFAULT_CODE_TOOL_TYPE, zcf_config_file
from .errors import ZcfError


@dataclass
class ZcfConfig:
    """ZCF's own preferences, stored in ~/.ufomiao/zcf/config.toml."""

    preferred_lang: str = "en"
    code_tool_type: str = DEFAULT_CODE_TOOL_TYPE
    log_level: str = "WARNING"
    last_updated: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ZcfConfig":
        """Create ZcfConfig instance from dictionary."""
        return cls(**{key: value for key, value in data.items() if key in cls.__annotations__})

    def to_dict(self) -> dict:
        """Convert ZcfConfig to dictionary."""
        return {key: value for key, value in asdict(self).items()}


class ConfigManager:
    """Manages ZCF preference storage and retrieval (TOML version)."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or zcf_config_file()
        self.default_config = ZcfConfig()

    def save_config(self, **kwargs) -> ZcfConfig:
        """Update the given fields and write the preferences file."""
        try:
            config_dict = self.load_config().to_dict()

            for key, value in kwargs.items():
                if value is not None and key in config_dict:
                    config_dict[key] = value
            config_dict["last_updated"] = datetime.now().isoformat(timespec="seconds")

            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as file_obj:
                toml.dump(config_dict, file_obj)
            return ZcfConfig.from_dict(config_dict)
        except (OSError, ZcfError) as exc:
            raise ZcfError(f"Failed to save config: {str(exc)}") from exc

    def load_config(self) -> ZcfConfig:
        """Load preferences, falling back to defaults when the file is missing."""
        try:
            if self.config_file.exists():
                with open(self.config_file, "r", encoding="utf-8") as file_obj:
                    config_dict = toml.load(file_obj)
                combined_config = {**self.default_config.to_dict(), **config_dict}
                return ZcfConfig.from_dict(combined_config)
            return ZcfConfig()
        except (OSError, toml.TomlDecodeError) as exc:
            raise ZcfError(f"Failed to load config: {str(exc)}") from exc


def update_zcf_config(**kwargs) -> ZcfConfig:
    return ConfigManager().save_config(**kwargs)
