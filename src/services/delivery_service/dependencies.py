from src.infra.api_clients import OrderClient, WarehouseClient
from src.infra.database import DatabaseManager
from src.services.delivery_service.repository import DeliveryRepository
from src.services.delivery_service.service import DeliveryService

# HTTP-клиенты живут всё время работы процесса (см. lifespan в app.py)
_order_client: OrderClient | None = None
_warehouse_client: WarehouseClient | None = None


def init_clients() -> None:
    global _order_client, _warehouse_client
    _order_client = OrderClient()
    _warehouse_client = WarehouseClient()


async def close_clients() -> None:
    global _order_client, _warehouse_client
    if _order_client is not None:
        await _order_client.close()
    if _warehouse_client is not None:
        await _warehouse_client.close()
    _order_client = None
    _warehouse_client = None


def get_database() -> DatabaseManager:
    return DatabaseManager()


def get_delivery_repository() -> DeliveryRepository:
    return DeliveryRepository(get_database())


def get_delivery_service() -> DeliveryService:
    if _order_client is None or _warehouse_client is None:
        raise RuntimeError("HTTP-клиенты не инициализированы. Вызовите init_clients()")
    return DeliveryService(
        repository=get_delivery_repository(),
        db=get_database(),
        order_client=_order_client,
        warehouse_client=_warehouse_client,
    )
