# src/shared/__init__.py
"""
Общий код между микросервисами.

Модули:
- models: DTO доставки, склада, событий телеметрии и общие модели ответов
"""

__all__: list[str] = []
