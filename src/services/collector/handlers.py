# src/services/collector/handlers.py
"""
Обработчики событий телеметрии.

Каждый обработчик объявляет ровно один тип события (message_type)
и публикует принятое событие в брокер.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List

from pydantic import BaseModel

from src.common.constants import TypeMsg
from src.common.logger import log_info, log_warning
from src.config import settings
from src.infra.event_bus import DomainEvent, EventBus
from src.shared.models.telemetry import HubEventType, SensorEventType


class SensorEventHandler(ABC):
    """Обработчик одного типа событий датчиков."""

    @property
    @abstractmethod
    def message_type(self) -> SensorEventType:
        """Тип события, который обрабатывает обработчик."""

    @abstractmethod
    async def handle(self, event: BaseModel) -> None:
        """Обрабатывает событие своего типа."""


class HubEventHandler(ABC):
    """Обработчик одного типа событий хабов."""

    @property
    @abstractmethod
    def message_type(self) -> HubEventType:
        """Тип события, который обрабатывает обработчик."""

    @abstractmethod
    async def handle(self, event: BaseModel) -> None:
        """Обрабатывает событие своего типа."""


class _BrokerPublisher:
    """Публикация события в RabbitMQ с routing key = топик."""

    topic: str

    def __init__(self, event_bus: EventBus, topic: str) -> None:
        self.event_bus = event_bus
        self.topic = topic

    def to_payload(self, event: BaseModel) -> dict[str, Any]:
        return event.model_dump(mode="json", by_alias=True)

    async def publish(self, event: BaseModel, event_type: str) -> bool:
        published = await self.event_bus.publish(DomainEvent(event_type=self.topic, payload=self.to_payload(event)))
        if not published:
            await log_warning(f"Событие {event_type} принято, но не отправлено в топик {self.topic}")
            return False

        await log_info(
            f"Событие {event_type} отправлено в топик {self.topic}",
            type_msg=TypeMsg.DEBUG,
        )
        return True


# =============================================================================
# ДАТЧИКИ
# =============================================================================

class BaseSensorHandler(_BrokerPublisher, SensorEventHandler):
    def __init__(self, event_bus: EventBus, topic: str | None = None) -> None:
        super().__init__(event_bus, topic or settings.telemetry.SENSOR_EVENTS_TOPIC)

    async def handle(self, event: BaseModel) -> None:
        await self.publish(event, str(self.message_type))


class LightSensorEventHandler(BaseSensorHandler):
    message_type = SensorEventType.LIGHT_SENSOR_EVENT


class MotionSensorEventHandler(BaseSensorHandler):
    message_type = SensorEventType.MOTION_SENSOR_EVENT


class TemperatureSensorEventHandler(BaseSensorHandler):
    message_type = SensorEventType.TEMPERATURE_SENSOR_EVENT


class ClimateSensorEventHandler(BaseSensorHandler):
    message_type = SensorEventType.CLIMATE_SENSOR_EVENT


class SwitchSensorEventHandler(BaseSensorHandler):
    message_type = SensorEventType.SWITCH_SENSOR_EVENT


# =============================================================================
# ХАБЫ
# =============================================================================

class BaseHubHandler(_BrokerPublisher, HubEventHandler):
    def __init__(self, event_bus: EventBus, topic: str | None = None) -> None:
        super().__init__(event_bus, topic or settings.telemetry.HUB_EVENTS_TOPIC)

    async def handle(self, event: BaseModel) -> None:
        await self.publish(event, str(self.message_type))


class DeviceAddedEventHandler(BaseHubHandler):
    message_type = HubEventType.DEVICE_ADDED


class DeviceRemovedEventHandler(BaseHubHandler):
    message_type = HubEventType.DEVICE_REMOVED


class ScenarioAddedEventHandler(BaseHubHandler):
    message_type = HubEventType.SCENARIO_ADDED


class ScenarioRemovedEventHandler(BaseHubHandler):
    message_type = HubEventType.SCENARIO_REMOVED


def default_sensor_handlers(event_bus: EventBus) -> List[SensorEventHandler]:
    """Статический набор обработчиков событий датчиков."""
    return [
        LightSensorEventHandler(event_bus),
        MotionSensorEventHandler(event_bus),
        TemperatureSensorEventHandler(event_bus),
        ClimateSensorEventHandler(event_bus),
        SwitchSensorEventHandler(event_bus),
    ]


def default_hub_handlers(event_bus: EventBus) -> List[HubEventHandler]:
    """Статический набор обработчиков событий хабов."""
    return [
        DeviceAddedEventHandler(event_bus),
        DeviceRemovedEventHandler(event_bus),
        ScenarioAddedEventHandler(event_bus),
        ScenarioRemovedEventHandler(event_bus),
    ]
