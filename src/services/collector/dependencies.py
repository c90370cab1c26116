# src/services/collector/dependencies.py
from functools import lru_cache

from src.infra.event_bus import get_event_bus
from src.services.collector.dispatcher import EventDispatcher
from src.services.collector.handlers import (
    HubEventHandler,
    SensorEventHandler,
    default_hub_handlers,
    default_sensor_handlers,
)
from src.services.collector.registry import HandlerRegistry


@lru_cache
def get_sensor_dispatcher() -> EventDispatcher[SensorEventHandler]:
    return EventDispatcher(HandlerRegistry(default_sensor_handlers(get_event_bus())))


@lru_cache
def get_hub_dispatcher() -> EventDispatcher[HubEventHandler]:
    return EventDispatcher(HandlerRegistry(default_hub_handlers(get_event_bus())))
