from typing import Iterable, List, Optional
from uuid import UUID

from src.infra.database import DatabaseManager
from src.shared.models.warehouse_dto import NewProductInWarehouseRequest


class WarehouseRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create_product(self, product: NewProductInWarehouseRequest) -> bool:
        """Регистрирует товар с нулевым остатком. False, если товар уже есть."""
        query = """
            INSERT INTO warehouse_schema.products (product_id, fragile, width, height, depth, weight, quantity)
            VALUES ($1, $2, $3, $4, $5, $6, 0)
            ON CONFLICT (product_id) DO NOTHING
            RETURNING product_id;
        """
        async with self.db.acquire() as connection:
            inserted = await connection.fetchval(
                query,
                product.product_id,
                product.fragile,
                product.dimension.width,
                product.dimension.height,
                product.dimension.depth,
                product.weight,
            )
            return inserted is not None

    async def add_quantity(self, product_id: UUID, quantity: int) -> Optional[int]:
        """Увеличивает остаток. Возвращает новый остаток или None, если товара нет."""
        query = """
            UPDATE warehouse_schema.products
            SET quantity = quantity + $1
            WHERE product_id = $2
            RETURNING quantity;
        """
        async with self.db.acquire() as connection:
            return await connection.fetchval(query, quantity, product_id)

    async def get_products(self, product_ids: Iterable[UUID]) -> List[dict]:
        """Возвращает товары по списку ID."""
        query = "SELECT * FROM warehouse_schema.products WHERE product_id = ANY($1::uuid[])"
        async with self.db.acquire() as connection:
            rows = await connection.fetch(query, list(product_ids))
            return [dict(row) for row in rows]
