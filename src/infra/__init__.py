# src/infra/__init__.py
"""
Инфраструктурный слой.
Работа с внешними системами: PostgreSQL, RabbitMQ, соседние сервисы по HTTP.
"""

from src.infra.database import DatabaseManager, get_db
from src.infra.event_bus import EventBus, get_event_bus

__all__ = [
    "DatabaseManager",
    "get_db",
    "EventBus",
    "get_event_bus",
]
