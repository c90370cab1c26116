# src/shared/models/__init__.py
"""
Общие DTO и Pydantic-модели для межсервисного взаимодействия.
"""

from src.shared.models.address_dto import AddressDTO, CamelModel
from src.shared.models.delivery_dto import DeliveryDTO, OrderDTO
from src.shared.models.warehouse_dto import (
    AddProductToWarehouseRequest,
    BookedProductsDTO,
    DimensionDTO,
    NewProductInWarehouseRequest,
    ShoppingCartDTO,
)
from src.shared.models.common import ErrorMessage, HealthStatus

__all__ = [
    # Base
    "CamelModel",
    "AddressDTO",
    # Delivery
    "DeliveryDTO",
    "OrderDTO",
    # Warehouse
    "AddProductToWarehouseRequest",
    "BookedProductsDTO",
    "DimensionDTO",
    "NewProductInWarehouseRequest",
    "ShoppingCartDTO",
    # Common
    "ErrorMessage",
    "HealthStatus",
]
