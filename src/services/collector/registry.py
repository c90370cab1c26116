# src/services/collector/registry.py
"""
Реестр обработчиков: тип события -> обработчик.
Строится один раз при старте и дальше не меняется.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Generic, Iterable, Mapping, Optional, Protocol, TypeVar

from src.common.exceptions import DuplicateHandlerError


class TypedHandler(Protocol):
    @property
    def message_type(self) -> Any: ...

    async def handle(self, event: Any) -> None: ...


H = TypeVar("H", bound=TypedHandler)


class HandlerRegistry(Generic[H]):
    """
    Неизменяемое отображение типа события на его обработчик.

    Raises:
        DuplicateHandlerError: два обработчика объявили один тип
    """

    def __init__(self, handlers: Iterable[H]):
        mapping: dict[Any, H] = {}
        for handler in handlers:
            key = handler.message_type
            if key in mapping:
                raise DuplicateHandlerError(key)
            mapping[key] = handler
        self._handlers: Mapping[Any, H] = MappingProxyType(mapping)

    def get(self, event_type: Any) -> Optional[H]:
        return self._handlers.get(event_type)

    @property
    def types(self) -> frozenset:
        return frozenset(self._handlers.keys())

    def __contains__(self, event_type: object) -> bool:
        return event_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
