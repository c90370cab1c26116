# src/infra/event_bus.py
"""
Публикация событий телеметрии в RabbitMQ.

Коллектор только публикует: один topic exchange, routing key равен
топику события (telemetry.sensors.v1, telemetry.hubs.v1).
Потребители (аналитика, сценарии хабов) объявляют свои очереди сами.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import aio_pika
from aio_pika import DeliveryMode, ExchangeType, Message
from aio_pika.abc import AbstractChannel, AbstractExchange, AbstractRobustConnection
from aio_pika.exceptions import AMQPError

from src.common.constants import TypeMsg
from src.common.logger import log_error, log_info


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class DomainEvent:
    """
    Конверт сообщения в брокере.

    event_type используется как routing key, payload содержит
    событие в camelCase (как оно пришло в HTTP).
    """
    event_type: str = ""
    payload: dict[str, Any] = field(default_factory=dict)
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: str = field(default_factory=_utc_iso)

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, default=str)


class EventBus:
    """
    Издатель RabbitMQ. Singleton: одно robust-соединение на процесс.
    Сообщения публикуются persistent, exchange durable.
    """

    _instance: EventBus | None = None

    def __new__(cls) -> EventBus:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._connection: AbstractRobustConnection | None = None
        self._channel: AbstractChannel | None = None
        self._exchange: AbstractExchange | None = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None and not self._connection.is_closed

    async def connect(self, url: str, exchange_name: str) -> None:
        if self.is_connected:
            return

        self._connection = await aio_pika.connect_robust(url)
        self._channel = await self._connection.channel(publisher_confirms=True)
        self._exchange = await self._channel.declare_exchange(
            exchange_name,
            ExchangeType.TOPIC,
            durable=True,
        )
        await log_info(f"RabbitMQ: exchange {exchange_name} готов к публикации", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        if self._connection is None:
            return
        await self._connection.close()
        self._connection = None
        self._channel = None
        self._exchange = None

    async def publish(self, event: DomainEvent) -> bool:
        """
        Публикует событие. Ошибка брокера не пробрасывается наружу:
        HTTP-ответ коллектора от неё не зависит.

        Returns:
            True, если брокер подтвердил приём
        """
        if not self.is_connected or self._exchange is None:
            await log_error(f"Событие {event.event_type} не опубликовано: нет соединения с RabbitMQ")
            return False

        message = Message(
            body=event.to_json().encode(),
            content_type="application/json",
            delivery_mode=DeliveryMode.PERSISTENT,
            message_id=event.event_id,
            headers={"event_type": str(event.payload.get("type", ""))},
        )
        try:
            await self._exchange.publish(message, routing_key=event.event_type)
        except (AMQPError, ConnectionError, TimeoutError) as e:
            await log_error(f"Ошибка публикации события {event.event_type}: {e}")
            return False

        await log_info(f"Событие {event.event_id} опубликовано в {event.event_type}", type_msg=TypeMsg.DEBUG)
        return True

    async def health_check(self) -> bool:
        return self.is_connected


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


async def init_event_bus() -> None:
    """Подключается к RabbitMQ из конфигурации."""
    from src.config import settings

    await get_event_bus().connect(
        url=settings.rabbitmq.url,
        exchange_name=settings.rabbitmq.RABBITMQ_EXCHANGE,
    )
    await log_info(
        f"RabbitMQ подключён: {settings.rabbitmq.RABBITMQ_HOST}:{settings.rabbitmq.RABBITMQ_PORT}",
        type_msg=TypeMsg.INFO,
    )


async def close_event_bus() -> None:
    await get_event_bus().disconnect()
    await log_info("RabbitMQ отключён", type_msg=TypeMsg.INFO)
