import random
from typing import Sequence

from src.common.exceptions import (
    InsufficientProductQuantityError,
    ProductAlreadyInWarehouseError,
    ProductNotFoundInWarehouseError,
)
from src.common.logger import log_info
from src.services.warehouse_service.repository import WarehouseRepository
from src.shared.models.address_dto import AddressDTO
from src.shared.models.warehouse_dto import (
    AddProductToWarehouseRequest,
    BookedProductsDTO,
    NewProductInWarehouseRequest,
    ShoppingCartDTO,
)


def choose_warehouse_address(addresses: Sequence[str], rng: random.Random | None = None) -> AddressDTO:
    """Выбирает адрес склада: все поля адреса заполняются выбранным маркером."""
    if not addresses:
        raise ValueError("Список адресов склада пуст")
    marker = (rng or random).choice(list(addresses))
    return AddressDTO(country=marker, city=marker, street=marker, house=marker, flat=marker)


class WarehouseService:
    def __init__(self, repository: WarehouseRepository, address: AddressDTO):
        self.repository = repository
        self.address = address

    def get_warehouse_address(self) -> AddressDTO:
        return self.address

    async def new_product(self, request: NewProductInWarehouseRequest) -> None:
        created = await self.repository.create_product(request)
        if not created:
            raise ProductAlreadyInWarehouseError(request.product_id)
        await log_info(f"Product {request.product_id} registered in the warehouse")

    async def add_product_quantity(self, request: AddProductToWarehouseRequest) -> int:
        quantity = await self.repository.add_quantity(request.product_id, request.quantity)
        if quantity is None:
            raise ProductNotFoundInWarehouseError(request.product_id)
        await log_info(f"Product {request.product_id}: +{request.quantity}, stock {quantity}")
        return quantity

    async def check_product_quantity(self, cart: ShoppingCartDTO) -> BookedProductsDTO:
        """
        Проверяет, что товары корзины есть на складе в нужном количестве,
        и считает параметры доставки: суммарный вес, объём и хрупкость.
        """
        products = {
            row["product_id"]: row
            for row in await self.repository.get_products(cart.products.keys())
        }

        booked = BookedProductsDTO()
        for product_id, requested in cart.products.items():
            product = products.get(product_id)
            if product is None:
                raise ProductNotFoundInWarehouseError(product_id)
            if product["quantity"] < requested:
                raise InsufficientProductQuantityError(product_id, requested, product["quantity"])

            booked.delivery_weight += product["weight"] * requested
            booked.delivery_volume += product["width"] * product["height"] * product["depth"] * requested
            booked.fragile = booked.fragile or product["fragile"]

        await log_info(
            f"Shopping cart {cart.shopping_cart_id} checked: weight={booked.delivery_weight}, "
            f"volume={booked.delivery_volume}, fragile={booked.fragile}"
        )
        return booked
