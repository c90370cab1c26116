# src/common/exceptions.py
"""
Доменные исключения сервисов.
Роуты переводят их в HTTP-ответы (404/400).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID


class NoDeliveryFoundError(LookupError):
    """Доставка с указанным идентификатором не найдена."""

    def __init__(self, delivery_id: UUID | str) -> None:
        self.delivery_id = delivery_id
        super().__init__(f"Delivery with id {delivery_id} not found")


class UnrecognizedEventTypeError(ValueError):
    """Для типа события не зарегистрирован обработчик."""

    def __init__(self, event_type: Any) -> None:
        self.event_type = event_type
        super().__init__(f"Не могу найти обработчик для события: {_type_name(event_type)}")


class DuplicateHandlerError(ValueError):
    """Два обработчика объявили один и тот же тип события."""

    def __init__(self, event_type: Any) -> None:
        self.event_type = event_type
        super().__init__(f"Обработчик для события {_type_name(event_type)} уже зарегистрирован")


class ProductAlreadyInWarehouseError(ValueError):
    """Товар уже зарегистрирован на складе."""

    def __init__(self, product_id: UUID) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} is already registered in the warehouse")


class ProductNotFoundInWarehouseError(LookupError):
    """Товар отсутствует на складе."""

    def __init__(self, product_id: UUID) -> None:
        self.product_id = product_id
        super().__init__(f"No product {product_id} in the warehouse")


class InsufficientProductQuantityError(ValueError):
    """На складе недостаточно товара для корзины."""

    def __init__(self, product_id: UUID, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Product {product_id}: requested {requested}, available {available}"
        )


def _type_name(event_type: Any) -> str:
    return getattr(event_type, "value", str(event_type))
