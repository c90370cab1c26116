# src/services/collector/routes.py
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Response, status

from src.common.logger import log_info
from src.services.collector.dependencies import get_hub_dispatcher, get_sensor_dispatcher
from src.services.collector.dispatcher import EventDispatcher
from src.shared.models.telemetry import HubEvent, SensorEvent

router = APIRouter(prefix="/events", tags=["events"])


@router.post("/sensors", status_code=status.HTTP_200_OK)
async def collect_sensor_event(
    event: Annotated[SensorEvent, Body(discriminator="type")],
    dispatcher: EventDispatcher = Depends(get_sensor_dispatcher),
) -> Response:
    await log_info(f"Получен POST-запрос /events/sensors с телом: {event.model_dump_json(by_alias=True)}")
    await dispatcher.dispatch(event)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/hubs", status_code=status.HTTP_200_OK)
async def collect_hub_event(
    event: Annotated[HubEvent, Body(discriminator="type")],
    dispatcher: EventDispatcher = Depends(get_hub_dispatcher),
) -> Response:
    await log_info(f"Получен POST-запрос /events/hubs с телом: {event.model_dump_json(by_alias=True)}")
    await dispatcher.dispatch(event)
    return Response(status_code=status.HTTP_200_OK)
