# src/shared/models/telemetry.py
"""
События телеметрии умного дома.

Два семейства событий:
- события датчиков (SensorEvent): показания конкретного устройства;
- события хабов (HubEvent): изменения конфигурации хаба, устройства и сценарии.

Поле type является дискриминатором. Неизвестное значение type не проходит
валидацию и до диспетчера не доходит.
Значения type совпадают с SensorEventType / HubEventType.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from src.shared.models.address_dto import CamelModel


# =============================================================================
# ПЕРЕЧИСЛЕНИЯ
# =============================================================================

class SensorEventType(str, Enum):
    """Типы событий датчиков."""
    LIGHT_SENSOR_EVENT = "LIGHT_SENSOR_EVENT"
    MOTION_SENSOR_EVENT = "MOTION_SENSOR_EVENT"
    TEMPERATURE_SENSOR_EVENT = "TEMPERATURE_SENSOR_EVENT"
    CLIMATE_SENSOR_EVENT = "CLIMATE_SENSOR_EVENT"
    SWITCH_SENSOR_EVENT = "SWITCH_SENSOR_EVENT"

    def __str__(self) -> str:
        return self.value


class HubEventType(str, Enum):
    """Типы событий хабов."""
    DEVICE_ADDED = "DEVICE_ADDED"
    DEVICE_REMOVED = "DEVICE_REMOVED"
    SCENARIO_ADDED = "SCENARIO_ADDED"
    SCENARIO_REMOVED = "SCENARIO_REMOVED"

    def __str__(self) -> str:
        return self.value


class DeviceType(str, Enum):
    MOTION_SENSOR = "MOTION_SENSOR"
    TEMPERATURE_SENSOR = "TEMPERATURE_SENSOR"
    LIGHT_SENSOR = "LIGHT_SENSOR"
    CLIMATE_SENSOR = "CLIMATE_SENSOR"
    SWITCH_SENSOR = "SWITCH_SENSOR"


class ConditionType(str, Enum):
    MOTION = "MOTION"
    LUMINOSITY = "LUMINOSITY"
    SWITCH = "SWITCH"
    TEMPERATURE = "TEMPERATURE"
    CO2LEVEL = "CO2LEVEL"
    HUMIDITY = "HUMIDITY"


class ConditionOperation(str, Enum):
    EQUALS = "EQUALS"
    GREATER_THAN = "GREATER_THAN"
    LOWER_THAN = "LOWER_THAN"


class ActionType(str, Enum):
    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"
    INVERSE = "INVERSE"
    SET_VALUE = "SET_VALUE"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# СОБЫТИЯ ДАТЧИКОВ
# =============================================================================

class BaseSensorEvent(CamelModel):
    """Общие поля событий датчиков."""
    id: str = Field(min_length=1)
    hub_id: str = Field(min_length=1)
    timestamp: datetime = Field(default_factory=_utcnow)


class LightSensorEvent(BaseSensorEvent):
    type: Literal["LIGHT_SENSOR_EVENT"]
    link_quality: int
    luminosity: int


class MotionSensorEvent(BaseSensorEvent):
    type: Literal["MOTION_SENSOR_EVENT"]
    link_quality: int
    motion: bool
    voltage: int


class TemperatureSensorEvent(BaseSensorEvent):
    type: Literal["TEMPERATURE_SENSOR_EVENT"]
    temperature_c: int
    temperature_f: int


class ClimateSensorEvent(BaseSensorEvent):
    type: Literal["CLIMATE_SENSOR_EVENT"]
    temperature_c: int
    humidity: int
    co2_level: int


class SwitchSensorEvent(BaseSensorEvent):
    type: Literal["SWITCH_SENSOR_EVENT"]
    state: bool


SensorEvent = Annotated[
    Union[
        LightSensorEvent,
        MotionSensorEvent,
        TemperatureSensorEvent,
        ClimateSensorEvent,
        SwitchSensorEvent,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# СОБЫТИЯ ХАБОВ
# =============================================================================

class BaseHubEvent(CamelModel):
    """Общие поля событий хабов."""
    hub_id: str = Field(min_length=1)
    timestamp: datetime = Field(default_factory=_utcnow)


class DeviceAddedEvent(BaseHubEvent):
    type: Literal["DEVICE_ADDED"]
    id: str = Field(min_length=1)
    device_type: DeviceType


class DeviceRemovedEvent(BaseHubEvent):
    type: Literal["DEVICE_REMOVED"]
    id: str = Field(min_length=1)


class ScenarioCondition(CamelModel):
    sensor_id: str = Field(min_length=1)
    type: ConditionType
    operation: ConditionOperation
    value: Optional[Union[bool, int]] = None


class DeviceAction(CamelModel):
    sensor_id: str = Field(min_length=1)
    type: ActionType
    value: Optional[int] = None


class ScenarioAddedEvent(BaseHubEvent):
    type: Literal["SCENARIO_ADDED"]
    name: str = Field(min_length=3)
    conditions: list[ScenarioCondition] = Field(min_length=1)
    actions: list[DeviceAction] = Field(min_length=1)


class ScenarioRemovedEvent(BaseHubEvent):
    type: Literal["SCENARIO_REMOVED"]
    name: str = Field(min_length=3)


HubEvent = Annotated[
    Union[
        DeviceAddedEvent,
        DeviceRemovedEvent,
        ScenarioAddedEvent,
        ScenarioRemovedEvent,
    ],
    Field(discriminator="type"),
]
