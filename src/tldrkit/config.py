"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments  (the CLI passes its flags here)
  2. Environment variables  (TLDRKIT__MIRROR__SOURCE_URL=https://...)
  3. tldrkit.yaml           (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from tldrkit.models.platform import Platform

PAGE_SOURCE_URL = "https://tldr.sh/assets/tldr.zip"
DEFAULT_PLATFORM = Platform.OSX

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("tldrkit")
_DEFAULT_MIRROR_PATH = str(Path(_DEFAULT_DATA_DIR) / "data")


def _find_config_file() -> str | None:
    """Return the path of the first tldrkit.yaml found, or None."""
    candidates = [
        Path("tldrkit.yaml"),
        Path(platformdirs.user_config_dir("tldrkit")) / "tldrkit.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class MirrorSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str = _DEFAULT_MIRROR_PATH
    source_url: str = PAGE_SOURCE_URL
    max_age_days: int = 14
    update_timeout_seconds: float = 30.0

    @property
    def max_age(self) -> timedelta:
        return timedelta(days=self.max_age_days)


class LookupSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    platform: Platform = DEFAULT_PLATFORM
    language: str | None = None
    fuzzy: bool = False


class OutputSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    command_format: Literal["original", "remove", "single", "uppercase"] = "original"
    color: bool = True


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: TLDRKIT__LOOKUP__PLATFORM=linux
        env_prefix="TLDRKIT__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    mirror: MirrorSettings = MirrorSettings()
    lookup: LookupSettings = LookupSettings()
    output: OutputSettings = OutputSettings()
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
