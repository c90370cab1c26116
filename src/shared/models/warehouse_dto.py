from uuid import UUID
from pydantic import Field
from src.shared.models.address_dto import CamelModel


class DimensionDTO(CamelModel):
    width: float = Field(ge=1)
    height: float = Field(ge=1)
    depth: float = Field(ge=1)


class NewProductInWarehouseRequest(CamelModel):
    product_id: UUID
    fragile: bool = False
    dimension: DimensionDTO
    weight: float = Field(ge=1)


class AddProductToWarehouseRequest(CamelModel):
    product_id: UUID
    quantity: int = Field(ge=1)


class ShoppingCartDTO(CamelModel):
    shopping_cart_id: UUID
    products: dict[UUID, int] = Field(default_factory=dict)


class BookedProductsDTO(CamelModel):
    delivery_weight: float = 0.0
    delivery_volume: float = 0.0
    fragile: bool = False
