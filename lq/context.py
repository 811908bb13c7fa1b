"""
Окружение переменных, которое передаётся через весь вызов рендеринга.

Пространство имён плоское: стека областей видимости нет, поэтому привязка,
сделанная в теле цикла, остаётся видимой после его завершения.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from .filters import FilterFunc, STANDARD_FILTERS
from .value import Value, to_value

logger = logging.getLogger(__name__)


class Context:
    """
    Изменяемое отображение имя -> Value и реестр фильтров для конвейеров
    подстановки.

    Не рассчитан на параллельное изменение: каждому одновременному вызову
    рендеринга нужен собственный экземпляр.
    """

    def __init__(
        self,
        values: Optional[Mapping[str, Any]] = None,
        filters: Optional[Mapping[str, FilterFunc]] = None,
    ):
        self._values: Dict[str, Value] = {}
        self._filters: Dict[str, FilterFunc] = dict(STANDARD_FILTERS)
        if filters:
            self._filters.update(filters)
        if values:
            self.update(values)

    def get(self, name: str) -> Optional[Value]:
        """Возвращает привязанное значение или None, если имя не задано."""
        return self._values.get(name)

    def set(self, name: str, value: Any) -> None:
        """Привязывает имя, перезаписывая прежнее значение."""
        self._values[name] = to_value(value)

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def add_filter(self, name: str, func: FilterFunc) -> None:
        if name in self._filters:
            logger.debug(f"Filter '{name}' overwrites existing filter")
        self._filters[name] = func

    def get_filter(self, name: str) -> Optional[FilterFunc]:
        return self._filters.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"Context({self._values!r})"


__all__ = ["Context"]
