# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("RABBITMQ_PASSWORD", "guest")


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "_comment_system": "test",
        "PROJECT_NAME": "commerce_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "LOG_TO_FILE": False,
        "LOG_FORMAT": "colored",
        "DB_HOST": "localhost",
        "DB_PORT": 5432,
        "DB_NAME": "commerce_test",
        "DB_USER": "postgres",
        "DB_MIN_POOL_SIZE": 2,
        "DB_MAX_POOL_SIZE": 5,
        "RABBITMQ_HOST": "localhost",
        "RABBITMQ_PORT": 5672,
        "RABBITMQ_USER": "guest",
        "RABBITMQ_EXCHANGE": "telemetry.test",
        "DELIVERY_BASE_COST": 5.0,
        "ADDRESS_1_MARKER": "ADDRESS_1",
        "ADDRESS_2_MARKER": "ADDRESS_2",
        "WAREHOUSE_ADDRESSES": ["ADDRESS_1", "ADDRESS_2"],
        "SENSOR_EVENTS_TOPIC": "telemetry.sensors.test",
        "HUB_EVENTS_TOPIC": "telemetry.hubs.test",
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2))
    return config_file


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_conn() -> AsyncMock:
    """Мок соединения asyncpg, выдаваемого транзакцией."""
    conn = AsyncMock()
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    conn.execute = AsyncMock(return_value="UPDATE 1")
    return conn


@pytest.fixture
def mock_db(mock_conn: AsyncMock) -> MagicMock:
    """
    Мок менеджера базы данных.
    db.committed / db.rolled_back отражают исход последней транзакции.
    """
    db = MagicMock()
    db.committed = False
    db.rolled_back = False

    @asynccontextmanager
    async def transaction():
        try:
            yield mock_conn
        except BaseException:
            db.rolled_back = True
            raise
        db.committed = True

    @asynccontextmanager
    async def acquire():
        yield mock_conn

    db.transaction = transaction
    db.acquire = acquire
    db.health_check = AsyncMock(return_value=True)
    return db


@pytest.fixture
def mock_event_bus() -> AsyncMock:
    """Мок шины событий."""
    event_bus = AsyncMock()
    event_bus.publish = AsyncMock(return_value=True)
    event_bus.is_connected = True
    return event_bus


@pytest.fixture
def mock_order_client() -> AsyncMock:
    """Мок HTTP-клиента order service."""
    client = AsyncMock()
    client.assembly = AsyncMock(return_value=None)
    client.completed = AsyncMock(return_value=None)
    client.delivery_failed = AsyncMock(return_value=None)
    return client


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

@pytest.fixture
def delivery_id() -> UUID:
    return uuid4()


@pytest.fixture
def sample_delivery_row(delivery_id: UUID) -> dict[str, Any]:
    """Строка delivery_schema.deliveries в виде dict."""
    return {
        "id": delivery_id,
        "order_id": uuid4(),
        "from_country": "ADDRESS_1",
        "from_city": "ADDRESS_1",
        "from_street": "ADDRESS_1",
        "from_house": "ADDRESS_1",
        "from_flat": "ADDRESS_1",
        "to_country": "Russia",
        "to_city": "Moscow",
        "to_street": "Tverskaya",
        "to_house": "1",
        "to_flat": "10",
        "delivery_state": "CREATED",
    }


@pytest.fixture
def sample_order_data(delivery_id: UUID) -> dict[str, Any]:
    """Пример заказа для расчёта стоимости доставки (camelCase, как в API)."""
    return {
        "orderId": str(uuid4()),
        "shoppingCartId": str(uuid4()),
        "products": {},
        "deliveryId": str(delivery_id),
        "deliveryWeight": 2.0,
        "deliveryVolume": 3.0,
        "fragile": False,
    }
