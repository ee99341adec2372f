"""Layered configuration loading.

Sources, lowest precedence first:
1. Built-in defaults (config/models.py)
2. Global file ``~/.config/mongoplane/config.yaml``
3. Project file ``<project_root>/.mongoplane/config.yaml``
4. Environment variables ``MONGOPLANE__<SECTION>__<KEY>``
5. Keyword overrides passed to ``load_config``

The two YAML files are deep-merged into one layer before pydantic-settings
resolves that layer against the environment and the overrides.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from mongoplane.config.models import (
    DatabaseConfig,
    LoggingConfig,
    MigrationsConfig,
    MongoplaneConfig,
)
from mongoplane.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/mongoplane/config.yaml").expanduser()
PROJECT_CONFIG_DIR = ".mongoplane"
CONFIG_FILE_NAME = "config.yaml"


class MongoplaneSettings(BaseSettings):
    """Environment-aware view of ``MongoplaneConfig``."""

    model_config = SettingsConfigDict(
        env_prefix="MONGOPLANE__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    database: DatabaseConfig = DatabaseConfig()
    migrations: MigrationsConfig = MigrationsConfig()


class _FileLayer(PydanticBaseSettingsSource):
    """The merged YAML files as one settings source."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._data.items() if k in self.settings_cls.model_fields}


def _settings_with_files(data: dict[str, Any]) -> type[MongoplaneSettings]:
    """Subclass of MongoplaneSettings reading ``data`` below the environment."""

    class _Settings(MongoplaneSettings):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _FileLayer(settings_cls, data))

    return _Settings


def config_files(project_root: Path) -> list[Path]:
    """Candidate config files, lowest precedence first. Missing files are skipped later."""
    return [GLOBAL_CONFIG_PATH, project_root / PROJECT_CONFIG_DIR / CONFIG_FILE_NAME]


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def load_config(project_root: Path | None = None, **overrides: Any) -> MongoplaneConfig:
    """Resolve the configuration for ``project_root`` (default: cwd).

    Raises:
        ConfigError: CONFIG_PARSE_ERROR for unreadable YAML,
            CONFIG_INVALID_VALUE for the first field failing validation.
    """
    file_layer: dict[str, Any] = {}
    for path in config_files(project_root or Path.cwd()):
        file_layer = _deep_merge(file_layer, _load_yaml(path))

    try:
        settings = _settings_with_files(file_layer)(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        dotted = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(dotted, first.get("input"), first["msg"]) from e
    return MongoplaneConfig.model_validate(settings.model_dump())
