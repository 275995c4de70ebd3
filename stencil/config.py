"""
Загрузка конфигурации шаблонизатора из stencil.yaml.

Пример:

    namespaces:
      my: [my_package.helpers]
      legacy: null              # известен, но игнорируется
      "foreign.*": null         # шаблон игнорируемых пространств имён
    aliases:
      cdata: {namespace: f, name: format.cdata}
    cache:
      enabled: true
      directory: .stencil-cache
      strict_identifiers: false
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigLoadError
from .helpers.resolver import HelperResolver

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "stencil.yaml"

_yaml = YAML(typ="safe")


class AliasTarget(BaseModel):
    model_config = ConfigDict(extra="forbid")

    namespace: str
    name: str


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    directory: str = ".stencil-cache"
    strict_identifiers: bool = False


class StencilConfig(BaseModel):
    """Корневая модель конфигурации."""

    model_config = ConfigDict(extra="forbid")

    namespaces: Dict[str, Optional[List[str]]] = Field(default_factory=dict)
    aliases: Dict[str, AliasTarget] = Field(default_factory=dict)
    cache: CacheSettings = Field(default_factory=CacheSettings)


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{path}: YAML must be a mapping")
    return raw


def _format_validation_error(path: Path, error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{path}: {location}: {first.get('msg', 'invalid value')}"


def load_config(path: Path) -> StencilConfig:
    """
    Загружает конфигурацию. Отсутствующий файл даёт настройки по умолчанию.

    Raises:
        ConfigLoadError: Файл не является YAML-словарём или не проходит валидацию
    """
    raw = _read_yaml_map(path)
    try:
        config = StencilConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(_format_validation_error(path, e)) from e
    logger.debug(f"Loaded config from {path}: {len(config.namespaces)} namespace(s)")
    return config


def apply_config(config: StencilConfig, resolver: HelperResolver) -> None:
    """Регистрирует пространства имён и алиасы хелперов из конфигурации."""
    resolver.add_namespaces(config.namespaces)
    for alias, target in config.aliases.items():
        resolver.add_alias(alias, target.namespace, target.name)


__all__ = [
    "CONFIG_FILE_NAME",
    "AliasTarget",
    "CacheSettings",
    "StencilConfig",
    "load_config",
    "apply_config",
]
