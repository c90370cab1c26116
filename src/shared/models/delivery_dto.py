from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import Field
from src.common.constants import DeliveryState
from src.shared.models.address_dto import AddressDTO, CamelModel


class DeliveryDTO(CamelModel):
    delivery_id: Optional[UUID] = None
    from_address: AddressDTO
    to_address: AddressDTO
    order_id: UUID
    delivery_state: DeliveryState = DeliveryState.CREATED


class OrderDTO(CamelModel):
    """Заказ в том виде, в котором его присылает order service."""
    order_id: UUID
    shopping_cart_id: Optional[UUID] = None
    products: dict[UUID, int] = Field(default_factory=dict)
    payment_id: Optional[UUID] = None
    delivery_id: UUID
    state: Optional[str] = None
    delivery_weight: float = Field(default=0.0, ge=0)
    delivery_volume: float = Field(default=0.0, ge=0)
    fragile: bool = False
    total_price: Optional[Decimal] = None
    delivery_price: Optional[Decimal] = None
    product_price: Optional[Decimal] = None
