# src/shared/models/common.py
"""
Общие модели для всех сервисов.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorMessage(BaseModel):
    """Тело ответа с ошибкой коллектора (400)."""

    timestamp: datetime = Field(default_factory=datetime.now)
    status: int
    message: str
    details: str | None = None


class HealthStatus(BaseModel):
    """Статус здоровья сервиса."""

    service: str
    status: str = "healthy"  # healthy, degraded, unhealthy
    version: str | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    # dependencies: {"postgres": "healthy", "rabbitmq": "healthy"}
