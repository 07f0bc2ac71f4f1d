"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (ELBERT__SEARCH__RESULT_LIMIT=20)
  2. elbert.yaml            (searched in cwd, then ~/.config/elbert/)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("elbert")
_DEFAULT_PLUGIN_DIR = os.path.join(_DEFAULT_DATA_DIR, "Plugins")


def _find_config_file() -> str | None:
    """Return the path of the first elbert.yaml found, or None."""
    candidates = [
        Path("elbert.yaml"),
        Path.home() / ".config" / "elbert" / "elbert.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class SearchSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    suggestion_count: int = Field(default=12, ge=0)
    suggestion_score: int = Field(default=120, ge=0)
    browse_limit: int = Field(default=24, ge=1)
    result_limit: int = Field(default=40, ge=1)
    command_boost: int = Field(default=100, ge=0)


class DiscoverySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    application_dirs: list[str] = ["/Applications", "~/Applications"]


class PluginSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    directory: str = _DEFAULT_PLUGIN_DIR
    create_sample: bool = True


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: ELBERT__LOGGING__LEVEL=DEBUG
        env_prefix="ELBERT__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    data_dir: str = _DEFAULT_DATA_DIR
    search: SearchSettings = SearchSettings()
    discovery: DiscoverySettings = DiscoverySettings()
    plugins: PluginSettings = PluginSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
