# src/config/loader.py
"""
Конфигурация сервисов.

config/config.json хранит плоский словарь ключей (DB_HOST, DELIVERY_BASE_COST, ...).
Каждая секция Settings забирает из него свои ключи по именам полей,
значения по умолчанию живут только в моделях секций.
Адреса соседей и секреты можно задать переменными окружения (ENV_OVERRIDES).
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SectionT = TypeVar("SectionT", bound=BaseModel)

# Ключи, для которых переменная окружения важнее config.json
ENV_OVERRIDES: frozenset[str] = frozenset({
    "DELIVERY_SERVICE_HOST",
    "WAREHOUSE_SERVICE_HOST",
    "ORDER_SERVICE_HOST",
    "COLLECTOR_HOST",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DB_USER",
    "DB_PASSWORD",
    "RABBITMQ_HOST",
    "RABBITMQ_PORT",
    "RABBITMQ_USER",
    "RABBITMQ_PASSWORD",
})

COMMENT_PREFIX = "_comment_"


def get_project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def get_config_path() -> Path:
    return get_project_root() / "config" / "config.json"


def load_config_json() -> dict[str, Any]:
    """Читает config.json как есть (вместе с _comment_ ключами)."""
    path = get_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


# =============================================================================
# СЕКЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    PROJECT_NAME: str = "commerce"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"


class DeploymentSettings(BaseModel):
    """Адреса микросервисов. Хосты совпадают с именами сервисов в docker-compose."""
    DELIVERY_SERVICE_HOST: str = "delivery_service"
    DELIVERY_SERVICE_PORT: int = 8091
    WAREHOUSE_SERVICE_HOST: str = "warehouse_service"
    WAREHOUSE_SERVICE_PORT: int = 8092
    ORDER_SERVICE_HOST: str = "order_service"
    ORDER_SERVICE_PORT: int = 8093
    COLLECTOR_HOST: str = "collector"
    COLLECTOR_PORT: int = 8094
    HTTP_CLIENT_TIMEOUT: float = 10.0


class LoggingSettings(BaseModel):
    LOG_LEVEL: str = "DEBUG"
    LOG_TO_FILE: bool = True
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_FORMAT: str = "colored"
    LOG_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5


class DatabaseSettings(BaseModel):
    """PostgreSQL. Пароль в config.json не хранится, только DB_PASSWORD из окружения."""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "commerce"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_MIN_POOL_SIZE: int = 5
    DB_MAX_POOL_SIZE: int = 20
    DB_COMMAND_TIMEOUT: int = 60
    DB_RETRY_ATTEMPTS: int = 3
    DB_RETRY_DELAY: float = 1.0

    @property
    def dsn(self) -> str:
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


class RabbitMQSettings(BaseModel):
    RABBITMQ_HOST: str = "localhost"
    RABBITMQ_PORT: int = 5672
    RABBITMQ_USER: str = "guest"
    RABBITMQ_PASSWORD: str = "guest"
    RABBITMQ_VHOST: str = "/"
    RABBITMQ_EXCHANGE: str = "telemetry.events"

    @property
    def url(self) -> str:
        return (
            f"amqp://{self.RABBITMQ_USER}:{self.RABBITMQ_PASSWORD}"
            f"@{self.RABBITMQ_HOST}:{self.RABBITMQ_PORT}{self.RABBITMQ_VHOST}"
        )


class DeliveryPricingSettings(BaseModel):
    """
    Коэффициенты стоимости доставки.

    ADDRESS_*_MARKER ищется подстрокой в городе склада,
    BASE_COST в config.json называется DELIVERY_BASE_COST.
    """
    BASE_COST: float = 5.0
    ADDRESS_1_MARKER: str = "ADDRESS_1"
    ADDRESS_1_COEFFICIENT: float = 2.0
    ADDRESS_2_MARKER: str = "ADDRESS_2"
    ADDRESS_2_COEFFICIENT: float = 3.0
    FRAGILE_COEFFICIENT: float = 1.2
    WEIGHT_COEFFICIENT: float = 0.3
    VOLUME_COEFFICIENT: float = 0.2
    DISTANT_STREET_COEFFICIENT: float = 1.2


class WarehouseSettings(BaseModel):
    ADDRESSES: list[str] = Field(default_factory=lambda: ["ADDRESS_1", "ADDRESS_2"])


class TelemetrySettings(BaseModel):
    """Топики (routing key) для событий датчиков и хабов."""
    SENSOR_EVENTS_TOPIC: str = "telemetry.sensors.v1"
    HUB_EVENTS_TOPIC: str = "telemetry.hubs.v1"


# Поля, чей ключ в config.json отличается от имени поля
_CONFIG_KEYS: dict[type[BaseModel], dict[str, str]] = {
    DeliveryPricingSettings: {"BASE_COST": "DELIVERY_BASE_COST"},
    WarehouseSettings: {"ADDRESSES": "WAREHOUSE_ADDRESSES"},
}


def build_section(model: type[SectionT], data: Mapping[str, Any]) -> SectionT:
    """
    Собирает секцию из плоского словаря.

    Отсутствующие ключи остаются на значениях по умолчанию модели.
    Строки из окружения (DB_PORT="5433") приводит к типу поля pydantic.
    """
    renames = _CONFIG_KEYS.get(model, {})
    values: dict[str, Any] = {}

    for field_name in model.model_fields:
        key = renames.get(field_name, field_name)
        if key in ENV_OVERRIDES and os.getenv(key):
            values[field_name] = os.environ[key]
        elif key in data:
            values[field_name] = data[key]

    return model(**values)


# =============================================================================
# SETTINGS
# =============================================================================

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    system: SystemSettings = Field(default_factory=SystemSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    rabbitmq: RabbitMQSettings = Field(default_factory=RabbitMQSettings)
    delivery_pricing: DeliveryPricingSettings = Field(default_factory=DeliveryPricingSettings)
    warehouse: WarehouseSettings = Field(default_factory=WarehouseSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @classmethod
    def from_config_json(cls) -> Settings:
        data = {k: v for k, v in load_config_json().items() if not k.startswith(COMMENT_PREFIX)}

        sections: dict[str, Any] = {}
        for name, field_info in cls.model_fields.items():
            sections[name] = build_section(field_info.annotation, data)
        return cls(**sections)


@lru_cache()
def get_settings() -> Settings:
    """Настройки процесса. .env из корня проекта подгружается до чтения окружения."""
    from dotenv import load_dotenv

    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


settings = get_settings()
