from decimal import Decimal, ROUND_UP
from typing import Optional
from uuid import UUID

from src.common.logger import get_logger
from src.config import settings
from src.config.loader import DeliveryPricingSettings
from src.shared.models.address_dto import AddressDTO
from src.shared.models.delivery_dto import OrderDTO

logger = get_logger("delivery_pricing")

CENTS = Decimal("0.01")


def _dec(value: float) -> Decimal:
    # str() даёт кратчайшее десятичное представление float: 0.3 -> Decimal("0.3")
    return Decimal(str(value))


def compute_delivery_cost(
    order: OrderDTO,
    warehouse_address: AddressDTO,
    delivery_address: AddressDTO,
    coefficients: Optional[DeliveryPricingSettings] = None,
) -> Decimal:
    """
    Расчет стоимости доставки.

    Логика (коэффициенты из settings.delivery_pricing):
    - База: BASE_COST
    - Город склада содержит ADDRESS_1: x2; содержит ADDRESS_2: x3 (проверки независимы)
    - Хрупкий заказ: x1.2
    - Вес: + weight * 0.3
    - Объем: + volume * 0.2
    - Улица склада отличается от улицы доставки: x1.2
    - Округление вверх до 2 знаков

    Чистая функция: без обращений к БД и сети.
    """
    c = coefficients or settings.delivery_pricing
    order_id: UUID = order.order_id
    city = warehouse_address.city or ""

    cost = _dec(c.BASE_COST)

    if c.ADDRESS_1_MARKER in city:
        cost *= _dec(c.ADDRESS_1_COEFFICIENT)
        logger.debug("If contains %s, cost: %s, coefficient: %s, orderId: %s",
                     c.ADDRESS_1_MARKER, cost, c.ADDRESS_1_COEFFICIENT, order_id)
    if c.ADDRESS_2_MARKER in city:
        cost *= _dec(c.ADDRESS_2_COEFFICIENT)
        logger.debug("If contains %s, cost: %s, coefficient: %s, orderId: %s",
                     c.ADDRESS_2_MARKER, cost, c.ADDRESS_2_COEFFICIENT, order_id)
    if order.fragile:
        cost *= _dec(c.FRAGILE_COEFFICIENT)
        logger.debug("Order is fragile, cost: %s, coefficient: %s, orderId: %s",
                     cost, c.FRAGILE_COEFFICIENT, order_id)

    cost += _dec(order.delivery_weight) * _dec(c.WEIGHT_COEFFICIENT)
    logger.debug("Calculated with weight: %s, cost: %s, coefficient: %s, orderId: %s",
                 order.delivery_weight, cost, c.WEIGHT_COEFFICIENT, order_id)

    cost += _dec(order.delivery_volume) * _dec(c.VOLUME_COEFFICIENT)
    logger.debug("Calculated with volume: %s, cost: %s, coefficient: %s, orderId: %s",
                 order.delivery_volume, cost, c.VOLUME_COEFFICIENT, order_id)

    if warehouse_address.street != delivery_address.street:
        cost *= _dec(c.DISTANT_STREET_COEFFICIENT)
        logger.debug("Delivery street differs from warehouse street, cost: %s, coefficient: %s, orderId: %s",
                     cost, c.DISTANT_STREET_COEFFICIENT, order_id)

    return cost.quantize(CENTS, rounding=ROUND_UP)
