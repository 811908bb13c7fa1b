"""
Загрузка YAML-конфигурации и данных для рендеринга.

Конфиг движка (по умолчанию lq.yaml) может содержать:

    error_mode: warn          # strict | warn | lax
    data:                     # файлы данных, вливаемые в каждый контекст
      - site.yaml
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .registry import ErrorMode, TemplateRegistry

logger = logging.getLogger(__name__)

DEFAULT_CFG_FILE = "lq.yaml"

_yaml = YAML(typ="safe")


class ConfigLoadError(ValueError):
    """Некорректный конфиг или файл данных; сообщение содержит путь к файлу."""
    pass


@dataclass
class EngineConfig:
    error_mode: ErrorMode = ErrorMode.WARN
    data: List[Path] = field(default_factory=list)

    def build_registry(self) -> TemplateRegistry:
        return TemplateRegistry(error_mode=self.error_mode)


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _read_yaml_map(path: Path) -> Dict[str, Any]:
    """Читает YAML-файл, который обязан содержать отображение; пустой файл даёт {}."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{path}: YAML must be a mapping")
    return raw


def _normalize(obj: Any) -> Any:
    """Переводит даты YAML в ISO-строки, чтобы у каждого значения был аналог среди значений шаблона."""
    if isinstance(obj, dict):
        return {str(key): _normalize(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_normalize(item) for item in obj]
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    return obj


def _parse_error_mode(path: Path, raw: Any) -> ErrorMode:
    try:
        return ErrorMode(str(raw).lower())
    except ValueError:
        allowed = ", ".join(mode.value for mode in ErrorMode)
        raise ConfigLoadError(f"{path}: error_mode: expected one of {allowed}, got {raw!r}")


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_data(path: Path) -> Dict[str, Any]:
    """
    Загружает данные для рендеринга из YAML- (или JSON-) отображения.

    Raises:
        ConfigLoadError: Некорректный YAML или документ не является отображением
        OSError: Файл не удаётся прочитать
    """
    data = _normalize(_read_yaml_map(path))
    logger.debug(f"Loaded {len(data)} top-level variables from {path}")
    return data


def load_engine_config(path: Path) -> EngineConfig:
    """
    Загружает конфиг движка.

    • Отсутствующий файл даёт значения по умолчанию.
    • Относительные пути data разрешаются от каталога конфига.
    """
    if not path.is_file():
        logger.debug(f"No config at {path}, using defaults")
        return EngineConfig()

    raw = _read_yaml_map(path)
    unknown = set(raw) - {"error_mode", "data"}
    if unknown:
        raise ConfigLoadError(f"{path}: unknown keys: {', '.join(sorted(unknown))}")

    cfg = EngineConfig()
    if "error_mode" in raw:
        cfg.error_mode = _parse_error_mode(path, raw["error_mode"])

    data = raw.get("data") or []
    if isinstance(data, str):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ConfigLoadError(f"{path}: data: expected a list of file paths")
    cfg.data = [path.parent / item for item in data]

    return cfg


def parse_scalar(text: str) -> Any:
    """Интерпретирует значение из командной строки по правилам скаляров YAML (3 -> int, true -> bool)."""
    try:
        return _normalize(_yaml.load(text))
    except YAMLError:
        return text


__all__ = [
    "DEFAULT_CFG_FILE",
    "ConfigLoadError",
    "EngineConfig",
    "load_data",
    "load_engine_config",
    "parse_scalar",
]
