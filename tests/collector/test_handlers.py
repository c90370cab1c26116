# tests/collector/test_handlers.py
"""
Тесты обработчиков телеметрии: публикация в брокер.
"""

from unittest.mock import AsyncMock, patch

import pytest

from src.config import settings
from src.infra.event_bus import DomainEvent
from src.services.collector.handlers import (
    ClimateSensorEventHandler,
    ScenarioAddedEventHandler,
)
from src.shared.models.telemetry import ClimateSensorEvent, ScenarioAddedEvent, SensorEventType


class TestSensorHandlers:
    """Тесты обработчиков событий датчиков."""

    @pytest.mark.asyncio
    async def test_publishes_to_sensor_topic(self, mock_event_bus) -> None:
        handler = ClimateSensorEventHandler(mock_event_bus)
        event = ClimateSensorEvent(
            id="climate-1", hub_id="hub-1", type="CLIMATE_SENSOR_EVENT",
            temperature_c=21, humidity=40, co2_level=600,
        )

        await handler.handle(event)

        published: DomainEvent = mock_event_bus.publish.call_args[0][0]
        assert handler.message_type is SensorEventType.CLIMATE_SENSOR_EVENT
        assert published.event_type == settings.telemetry.SENSOR_EVENTS_TOPIC
        assert published.payload["hubId"] == "hub-1"
        assert published.payload["co2Level"] == 600
        assert published.payload["type"] == "CLIMATE_SENSOR_EVENT"

    @pytest.mark.asyncio
    async def test_custom_topic(self, mock_event_bus) -> None:
        handler = ClimateSensorEventHandler(mock_event_bus, topic="telemetry.sensors.test")
        event = ClimateSensorEvent(
            id="c", hub_id="h", type="CLIMATE_SENSOR_EVENT", temperature_c=1, humidity=1, co2_level=1,
        )

        await handler.handle(event)

        assert mock_event_bus.publish.call_args[0][0].event_type == "telemetry.sensors.test"

    @pytest.mark.asyncio
    async def test_unpublished_event_is_reported(self, mock_event_bus) -> None:
        mock_event_bus.publish.return_value = False
        handler = ClimateSensorEventHandler(mock_event_bus)
        event = ClimateSensorEvent(
            id="c", hub_id="h", type="CLIMATE_SENSOR_EVENT", temperature_c=1, humidity=1, co2_level=1,
        )

        with patch("src.services.collector.handlers.log_warning", new_callable=AsyncMock) as warn, \
                patch("src.services.collector.handlers.log_info", new_callable=AsyncMock) as info:
            published = await handler.publish(event, "CLIMATE_SENSOR_EVENT")

        assert published is False
        warn.assert_awaited_once()
        assert "CLIMATE_SENSOR_EVENT" in warn.call_args[0][0]
        info.assert_not_called()

    @pytest.mark.asyncio
    async def test_handle_does_not_raise_when_broker_is_down(self, mock_event_bus) -> None:
        mock_event_bus.publish.return_value = False
        handler = ClimateSensorEventHandler(mock_event_bus)
        event = ClimateSensorEvent(
            id="c", hub_id="h", type="CLIMATE_SENSOR_EVENT", temperature_c=1, humidity=1, co2_level=1,
        )

        await handler.handle(event)

        mock_event_bus.publish.assert_awaited_once()


class TestHubHandlers:
    """Тесты обработчиков событий хабов."""

    @pytest.mark.asyncio
    async def test_scenario_added_payload(self, mock_event_bus) -> None:
        handler = ScenarioAddedEventHandler(mock_event_bus)
        event = ScenarioAddedEvent.model_validate({
            "hubId": "hub-1",
            "type": "SCENARIO_ADDED",
            "name": "Night light",
            "conditions": [{"sensorId": "motion-1", "type": "MOTION", "operation": "EQUALS", "value": True}],
            "actions": [{"sensorId": "light-1", "type": "ACTIVATE"}],
        })

        await handler.handle(event)

        published: DomainEvent = mock_event_bus.publish.call_args[0][0]
        assert published.event_type == settings.telemetry.HUB_EVENTS_TOPIC
        assert published.payload["conditions"][0]["sensorId"] == "motion-1"
        assert published.payload["actions"][0]["type"] == "ACTIVATE"
