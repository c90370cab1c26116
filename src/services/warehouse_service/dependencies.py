from src.config import settings
from src.infra.database import DatabaseManager
from src.services.warehouse_service.repository import WarehouseRepository
from src.services.warehouse_service.service import WarehouseService, choose_warehouse_address
from src.shared.models.address_dto import AddressDTO

# Адрес склада выбирается один раз на процесс
_warehouse_address: AddressDTO | None = None


def init_warehouse_address() -> AddressDTO:
    global _warehouse_address
    if _warehouse_address is None:
        _warehouse_address = choose_warehouse_address(settings.warehouse.ADDRESSES)
    return _warehouse_address


def get_database() -> DatabaseManager:
    return DatabaseManager()


def get_warehouse_repository() -> WarehouseRepository:
    return WarehouseRepository(get_database())


def get_warehouse_service() -> WarehouseService:
    return WarehouseService(get_warehouse_repository(), init_warehouse_address())
