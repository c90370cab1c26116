from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from uuid import UUID, uuid4

from asyncpg import Connection

from src.common.constants import DeliveryState
from src.infra.database import DatabaseManager
from src.shared.models.delivery_dto import DeliveryDTO

ADDRESS_FIELDS = ("country", "city", "street", "house", "flat")


class DeliveryRepository:
    """
    Доступ к delivery_schema.deliveries.
    Методы принимают conn, чтобы работать внутри транзакции сервиса;
    без conn соединение берётся из пула на один запрос.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    @asynccontextmanager
    async def _connection(self, conn: Optional[Connection]) -> AsyncGenerator[Connection, None]:
        if conn is not None:
            yield conn
            return
        async with self.db.acquire() as acquired:
            yield acquired

    async def create_delivery(
        self,
        delivery: DeliveryDTO,
        state: DeliveryState = DeliveryState.CREATED,
        conn: Optional[Connection] = None,
    ) -> dict:
        """
        Создаёт доставку и возвращает сохранённую строку.
        Идентификатор всегда новый: deliveryId из запроса игнорируется.
        """
        insert_data = {
            "id": uuid4(),
            "order_id": delivery.order_id,
            "delivery_state": state.value,
        }
        for prefix, address in (("from", delivery.from_address), ("to", delivery.to_address)):
            for field in ADDRESS_FIELDS:
                insert_data[f"{prefix}_{field}"] = getattr(address, field)

        cols = ", ".join(insert_data.keys())
        placeholders = ", ".join(f"${i + 1}" for i in range(len(insert_data)))
        query = f"""
            INSERT INTO delivery_schema.deliveries ({cols})
            VALUES ({placeholders})
            RETURNING *;
        """
        async with self._connection(conn) as connection:
            row = await connection.fetchrow(query, *insert_data.values())
            return dict(row)

    async def get_delivery_by_id(
        self,
        delivery_id: UUID,
        conn: Optional[Connection] = None,
        for_update: bool = False,
    ) -> Optional[dict]:
        """Возвращает доставку по ID; for_update блокирует строку до конца транзакции."""
        query = "SELECT * FROM delivery_schema.deliveries WHERE id = $1"
        if for_update:
            query += " FOR UPDATE"
        async with self._connection(conn) as connection:
            row = await connection.fetchrow(query, delivery_id)
            return dict(row) if row else None

    async def update_delivery_state(
        self,
        delivery_id: UUID,
        state: DeliveryState,
        conn: Optional[Connection] = None,
    ) -> None:
        """Обновляет статус доставки."""
        query = """
            UPDATE delivery_schema.deliveries
            SET delivery_state = $1, updated_at = NOW()
            WHERE id = $2
        """
        async with self._connection(conn) as connection:
            await connection.execute(query, state.value, delivery_id)
