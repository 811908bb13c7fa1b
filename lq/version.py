"""
Версия установленного дистрибутива для `lq --version`.
"""

from __future__ import annotations

from importlib import metadata

# имя на индексе пакетов, затем имя import-пакета (установка из исходников)
_DISTRIBUTIONS = ("lq-templates", "lq")
_UNKNOWN = "0.0.0"


def tool_version() -> str:
    """Версия первого найденного дистрибутива либо 0.0.0 вне установки."""
    for name in _DISTRIBUTIONS:
        try:
            return metadata.version(name)
        except metadata.PackageNotFoundError:
            pass
    return _UNKNOWN


__all__ = ["tool_version"]
