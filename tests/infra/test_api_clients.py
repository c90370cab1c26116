# tests/infra/test_api_clients.py
"""
Тесты HTTP-клиентов order service и warehouse service.
"""

from __future__ import annotations

import json
from uuid import uuid4

import httpx
import pytest

from src.infra.api_clients import OrderClient, WarehouseClient


def _recording_transport(requests: list[httpx.Request], response: httpx.Response) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return response

    return httpx.MockTransport(handler)


class TestOrderClient:
    """Тесты для OrderClient."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path",
        [
            ("assembly", "/api/v1/order/assembly"),
            ("completed", "/api/v1/order/completed"),
            ("delivery_failed", "/api/v1/order/delivery/failed"),
        ],
    )
    async def test_notification_endpoints(self, method: str, path: str) -> None:
        """Каждое уведомление уходит POST-запросом с orderId в теле."""
        requests: list[httpx.Request] = []
        client = OrderClient(
            base_url="http://orders/api/v1/order",
            transport=_recording_transport(requests, httpx.Response(200)),
        )
        order_id = uuid4()

        await getattr(client, method)(order_id)
        await client.close()

        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert requests[0].url.path == path
        assert json.loads(requests[0].content) == str(order_id)

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        """Ответ 5xx поднимает httpx.HTTPStatusError."""
        client = OrderClient(
            base_url="http://orders/api/v1/order",
            transport=_recording_transport([], httpx.Response(503)),
        )

        with pytest.raises(httpx.HTTPStatusError):
            await client.completed(uuid4())
        await client.close()

    def test_default_base_url_from_settings(self) -> None:
        client = OrderClient()
        assert client.base_url.endswith("/api/v1/order")


class TestWarehouseClient:
    """Тесты для WarehouseClient."""

    @pytest.mark.asyncio
    async def test_get_warehouse_address(self) -> None:
        requests: list[httpx.Request] = []
        body = {"country": "ADDRESS_2", "city": "ADDRESS_2", "street": "ADDRESS_2", "house": "ADDRESS_2", "flat": "ADDRESS_2"}
        client = WarehouseClient(
            base_url="http://warehouse/api/v1/warehouse",
            transport=_recording_transport(requests, httpx.Response(200, json=body)),
        )

        address = await client.get_warehouse_address()
        await client.close()

        assert requests[0].method == "GET"
        assert requests[0].url.path == "/api/v1/warehouse/address"
        assert address.city == "ADDRESS_2"
        assert address.street == "ADDRESS_2"
