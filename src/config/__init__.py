# src/config/__init__.py
"""
Модуль конфигурации.

Использование:
    from src.config import settings
    settings.delivery_pricing.BASE_COST
    settings.telemetry.SENSOR_EVENTS_TOPIC
"""

from src.config.loader import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
