# src/infra/api_clients.py
"""
HTTP-клиенты соседних микросервисов.
Ошибочные ответы (не 2xx) поднимают httpx.HTTPStatusError.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

import httpx

from src.config import settings
from src.shared.models.address_dto import AddressDTO


class BaseClient:
    def __init__(self, base_url: str, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url
        self.timeout = timeout if timeout is not None else settings.deployment.HTTP_CLIENT_TIMEOUT
        self.client = httpx.AsyncClient(base_url=base_url, timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        await self.client.aclose()

    @staticmethod
    def _json_or_none(response: httpx.Response) -> Any:
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        response = await self.client.get(path, params=params)
        return self._json_or_none(response)

    async def _post(self, path: str, json: Any = None) -> Any:
        response = await self.client.post(path, json=json)
        return self._json_or_none(response)


class OrderClient(BaseClient):
    """Уведомления order service о ходе доставки."""

    def __init__(self, base_url: str | None = None, **kwargs: Any):
        if base_url is None:
            base_url = (
                f"http://{settings.deployment.ORDER_SERVICE_HOST}:"
                f"{settings.deployment.ORDER_SERVICE_PORT}/api/v1/order"
            )
        super().__init__(base_url, **kwargs)

    async def assembly(self, order_id: UUID) -> Any:
        return await self._post("/assembly", json=str(order_id))

    async def completed(self, order_id: UUID) -> Any:
        return await self._post("/completed", json=str(order_id))

    async def delivery_failed(self, order_id: UUID) -> Any:
        return await self._post("/delivery/failed", json=str(order_id))


class WarehouseClient(BaseClient):
    def __init__(self, base_url: str | None = None, **kwargs: Any):
        if base_url is None:
            base_url = (
                f"http://{settings.deployment.WAREHOUSE_SERVICE_HOST}:"
                f"{settings.deployment.WAREHOUSE_SERVICE_PORT}/api/v1/warehouse"
            )
        super().__init__(base_url, **kwargs)

    async def get_warehouse_address(self) -> AddressDTO:
        data = await self._get("/address")
        return AddressDTO.model_validate(data)
