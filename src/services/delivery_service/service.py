from decimal import Decimal
from typing import Awaitable, Callable
from uuid import UUID

from src.common.constants import DeliveryState, TypeMsg
from src.common.exceptions import NoDeliveryFoundError
from src.common.logger import log_error, log_info, log_warning
from src.infra.api_clients import OrderClient, WarehouseClient
from src.infra.database import DatabaseManager
from src.services.delivery_service.pricing import compute_delivery_cost
from src.services.delivery_service.repository import ADDRESS_FIELDS, DeliveryRepository
from src.services.delivery_service.state_machine import DeliveryStateMachine
from src.shared.models.address_dto import AddressDTO
from src.shared.models.delivery_dto import DeliveryDTO, OrderDTO


class DeliveryService:
    def __init__(
        self,
        repository: DeliveryRepository,
        db: DatabaseManager,
        order_client: OrderClient,
        warehouse_client: WarehouseClient,
    ):
        self.repository = repository
        self.db = db
        self.order_client = order_client
        self.warehouse_client = warehouse_client

    async def add_delivery(self, new_delivery: DeliveryDTO) -> DeliveryDTO:
        async with self.db.transaction() as conn:
            row = await self.repository.create_delivery(new_delivery, DeliveryState.CREATED, conn=conn)
        delivery = self._map_db_to_dto(row)
        await log_info(f"Delivery planned: {delivery.model_dump_json()}")
        return delivery

    async def picked_delivery(self, delivery_id: UUID) -> DeliveryDTO:
        return await self._transition(delivery_id, DeliveryState.IN_PROGRESS, self.order_client.assembly)

    async def successful_delivery(self, delivery_id: UUID) -> DeliveryDTO:
        return await self._transition(delivery_id, DeliveryState.DELIVERED, self.order_client.completed)

    async def failed_delivery(self, delivery_id: UUID) -> DeliveryDTO:
        return await self._transition(delivery_id, DeliveryState.FAILED, self.order_client.delivery_failed)

    async def get_delivery(self, delivery_id: UUID) -> DeliveryDTO:
        row = await self.repository.get_delivery_by_id(delivery_id)
        if not row:
            raise NoDeliveryFoundError(delivery_id)
        return self._map_db_to_dto(row)

    async def get_delivery_cost(self, order: OrderDTO) -> Decimal:
        await log_info(
            f"Starting delivery cost calculation for orderId: {order.order_id}, deliveryId: {order.delivery_id}"
        )

        row = await self.repository.get_delivery_by_id(order.delivery_id)
        if not row:
            await log_error(
                f"Delivery not found for order. OrderId: {order.order_id}, DeliveryId: {order.delivery_id}"
            )
            raise NoDeliveryFoundError(order.delivery_id)

        delivery = self._map_db_to_dto(row)
        warehouse_address = await self.warehouse_client.get_warehouse_address()

        await log_info(
            f"Warehouse city: {warehouse_address.city}, street: {warehouse_address.street}, "
            f"delivery address: {delivery.to_address.model_dump_json()}",
            type_msg=TypeMsg.DEBUG,
        )

        cost = compute_delivery_cost(order, warehouse_address, delivery.to_address)

        await log_info(
            f"Delivery final cost calculated: {cost} for orderId: {order.order_id}, deliveryId: {order.delivery_id}"
        )
        return cost

    async def _transition(
        self,
        delivery_id: UUID,
        new_state: DeliveryState,
        notify: Callable[[UUID], Awaitable[object]],
    ) -> DeliveryDTO:
        # Уведомление order service внутри транзакции: при его ошибке статус откатывается
        async with self.db.transaction() as conn:
            row = await self.repository.get_delivery_by_id(delivery_id, conn=conn, for_update=True)
            if not row:
                raise NoDeliveryFoundError(delivery_id)

            current_state = row["delivery_state"]
            if not DeliveryStateMachine.is_nominal(current_state, new_state):
                await log_warning(
                    f"Delivery with id={delivery_id}: transition {current_state} -> {new_state} "
                    f"is outside the nominal lifecycle"
                )

            await self.repository.update_delivery_state(delivery_id, new_state, conn=conn)
            await notify(row["order_id"])

        await log_info(f"Delivery with id={delivery_id} moved to {new_state}")
        row["delivery_state"] = new_state.value
        return self._map_db_to_dto(row)

    def _map_db_to_dto(self, data: dict) -> DeliveryDTO:
        from_address = AddressDTO(**{f: data.get(f"from_{f}") for f in ADDRESS_FIELDS})
        to_address = AddressDTO(**{f: data.get(f"to_{f}") for f in ADDRESS_FIELDS})

        return DeliveryDTO(
            delivery_id=data["id"],
            from_address=from_address,
            to_address=to_address,
            order_id=data["order_id"],
            delivery_state=data.get("delivery_state", DeliveryState.CREATED.value),
        )
