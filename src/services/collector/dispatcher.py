# src/services/collector/dispatcher.py
from __future__ import annotations

from typing import Any, Generic

from src.common.constants import TypeMsg
from src.common.exceptions import UnrecognizedEventTypeError
from src.common.logger import log_info
from src.services.collector.registry import H, HandlerRegistry


class EventDispatcher(Generic[H]):
    """Передаёт событие обработчику, зарегистрированному для его type."""

    def __init__(self, registry: HandlerRegistry[H]):
        self.registry = registry

    async def dispatch(self, event: Any) -> None:
        """
        Ровно один вызов handle() для известного типа.

        Raises:
            UnrecognizedEventTypeError: для type нет обработчика, ни один обработчик не вызван
        """
        event_type = getattr(event, "type", None)
        handler = self.registry.get(event_type)
        if handler is None:
            raise UnrecognizedEventTypeError(event_type)

        await log_info(f"Обработка события {event_type} обработчиком {type(handler).__name__}", type_msg=TypeMsg.DEBUG)
        await handler.handle(event)
