"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (METEOPROG__DEBUG__ENABLED=true)
  2. meteoprog.yaml         (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

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

from meteoprog_informers import __version__

_APP_NAME = "meteoprog-informers"
_DEFAULT_DATA_DIR = platformdirs.user_data_dir(_APP_NAME)
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "store.db")


def _find_config_file() -> str | None:
    """Return the path of the first meteoprog.yaml found, or None."""
    candidates = [
        Path("meteoprog.yaml"),
        Path(platformdirs.user_config_dir(_APP_NAME)) / "meteoprog.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ApiSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = "https://billing.meteoprog.com/api/informers"
    timeout_seconds: float = 15.0
    plugin_version: str = __version__


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ttl_seconds: int = 180
    db_path: str = _DEFAULT_DB_PATH


class LoaderSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = "https://cdn.meteoprog.net/informerv4/1/loader.js"
    version: str = __version__


class SiteSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Public URL of the embedding site; its host is sent as X-Site-Domain
    home_url: str = "http://localhost"


class DebugSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    # Forces real API requests with this key, even when debug is enabled
    api_key: str | None = None


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: METEOPROG__API__TIMEOUT_SECONDS=5
        env_prefix="METEOPROG__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
        extra="forbid",
    )

    api: ApiSettings = ApiSettings()
    cache: CacheSettings = CacheSettings()
    loader: LoaderSettings = LoaderSettings()
    site: SiteSettings = SiteSettings()
    debug: DebugSettings = DebugSettings()
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
