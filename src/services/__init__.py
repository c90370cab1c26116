# src/services/__init__.py
"""
Микросервисы приложения.

Архитектура:
- Каждый сервис является независимым FastAPI-приложением
- Общая PostgreSQL с логическим разделением по схемам
- Коммуникация через HTTP (синхронно) и RabbitMQ (телеметрия)

Сервисы:
- delivery_service: жизненный цикл доставки + расчет стоимости
- warehouse_service: адрес склада, остатки товаров, бронирование корзины
- collector: приём событий датчиков и хабов
"""

__all__: list[str] = []
