# tests/services/test_http_routes.py
"""
HTTP-контракты delivery service и warehouse service (TestClient, без lifespan).
"""

from decimal import Decimal
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from src.common.constants import DeliveryState
from src.common.exceptions import NoDeliveryFoundError, ProductAlreadyInWarehouseError
from src.services.delivery_service.app import app as delivery_app
from src.services.delivery_service.dependencies import get_delivery_service
from src.services.warehouse_service.app import app as warehouse_app
from src.services.warehouse_service.dependencies import get_warehouse_service
from src.services.warehouse_service.service import choose_warehouse_address
from src.shared.models.address_dto import AddressDTO
from src.shared.models.delivery_dto import DeliveryDTO


@pytest.fixture
def delivery_service():
    service = AsyncMock()
    delivery_app.dependency_overrides[get_delivery_service] = lambda: service
    yield service
    delivery_app.dependency_overrides.clear()


@pytest.fixture
def warehouse_service():
    service = AsyncMock()
    service.get_warehouse_address = MagicMock(return_value=choose_warehouse_address(["ADDRESS_2"]))
    warehouse_app.dependency_overrides[get_warehouse_service] = lambda: service
    yield service
    warehouse_app.dependency_overrides.clear()


class TestDeliveryRoutes:
    """Тесты роутов /api/v1/delivery."""

    def test_picked(self, delivery_service):
        delivery_id = uuid4()
        delivery_service.picked_delivery.return_value = DeliveryDTO(
            delivery_id=delivery_id,
            from_address=AddressDTO(city="ADDRESS_1"),
            to_address=AddressDTO(city="Moscow"),
            order_id=uuid4(),
            delivery_state=DeliveryState.IN_PROGRESS,
        )

        response = TestClient(delivery_app).post("/api/v1/delivery/picked", json=str(delivery_id))

        assert response.status_code == 200
        assert response.json()["deliveryState"] == "IN_PROGRESS"
        delivery_service.picked_delivery.assert_awaited_once_with(delivery_id)

    def test_unknown_delivery_is_404(self, delivery_service):
        delivery_id = uuid4()
        delivery_service.successful_delivery.side_effect = NoDeliveryFoundError(delivery_id)

        response = TestClient(delivery_app).post("/api/v1/delivery/successful", json=str(delivery_id))

        assert response.status_code == 404
        assert str(delivery_id) in response.json()["detail"]

    def test_order_service_failure_is_502(self, delivery_service):
        delivery_service.failed_delivery.side_effect = httpx.ConnectError("down")

        response = TestClient(delivery_app).post("/api/v1/delivery/failed", json=str(uuid4()))

        assert response.status_code == 502

    def test_cost(self, delivery_service, sample_order_data):
        delivery_service.get_delivery_cost.return_value = Decimal("12.96")

        response = TestClient(delivery_app).post("/api/v1/delivery/cost", json=sample_order_data)

        assert response.status_code == 200
        assert response.json() == 12.96


class TestWarehouseRoutes:
    """Тесты роутов /api/v1/warehouse."""

    def test_address(self, warehouse_service):
        response = TestClient(warehouse_app).get("/api/v1/warehouse/address")

        assert response.status_code == 200
        assert response.json()["city"] == "ADDRESS_2"
        assert response.json()["street"] == "ADDRESS_2"

    def test_duplicate_product_is_400(self, warehouse_service):
        product_id = uuid4()
        warehouse_service.new_product.side_effect = ProductAlreadyInWarehouseError(product_id)
        body = {
            "productId": str(product_id),
            "fragile": False,
            "dimension": {"width": 1, "height": 1, "depth": 1},
            "weight": 1,
        }

        response = TestClient(warehouse_app).put("/api/v1/warehouse/", json=body)

        assert response.status_code == 400
