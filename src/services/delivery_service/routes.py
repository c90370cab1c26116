from uuid import UUID

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, status

from src.common.exceptions import NoDeliveryFoundError
from src.services.delivery_service.dependencies import get_delivery_service
from src.services.delivery_service.service import DeliveryService
from src.shared.models.delivery_dto import DeliveryDTO, OrderDTO

router = APIRouter(prefix="/delivery", tags=["delivery"])


def _not_found(e: NoDeliveryFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _bad_gateway(e: httpx.HTTPError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Upstream service error: {e}")


@router.put("/", response_model=DeliveryDTO)
async def plan_delivery(
    delivery: DeliveryDTO,
    service: DeliveryService = Depends(get_delivery_service)
):
    return await service.add_delivery(delivery)


@router.get("/{delivery_id}", response_model=DeliveryDTO)
async def get_delivery(
    delivery_id: UUID,
    service: DeliveryService = Depends(get_delivery_service)
):
    try:
        return await service.get_delivery(delivery_id)
    except NoDeliveryFoundError as e:
        raise _not_found(e)


@router.post("/successful", response_model=DeliveryDTO)
async def delivery_successful(
    delivery_id: UUID = Body(...),
    service: DeliveryService = Depends(get_delivery_service)
):
    try:
        return await service.successful_delivery(delivery_id)
    except NoDeliveryFoundError as e:
        raise _not_found(e)
    except httpx.HTTPError as e:
        raise _bad_gateway(e)


@router.post("/picked", response_model=DeliveryDTO)
async def delivery_picked(
    delivery_id: UUID = Body(...),
    service: DeliveryService = Depends(get_delivery_service)
):
    try:
        return await service.picked_delivery(delivery_id)
    except NoDeliveryFoundError as e:
        raise _not_found(e)
    except httpx.HTTPError as e:
        raise _bad_gateway(e)


@router.post("/failed", response_model=DeliveryDTO)
async def delivery_failed(
    delivery_id: UUID = Body(...),
    service: DeliveryService = Depends(get_delivery_service)
):
    try:
        return await service.failed_delivery(delivery_id)
    except NoDeliveryFoundError as e:
        raise _not_found(e)
    except httpx.HTTPError as e:
        raise _bad_gateway(e)


@router.post("/cost", response_model=float)
async def delivery_cost(
    order: OrderDTO,
    service: DeliveryService = Depends(get_delivery_service)
):
    try:
        return await service.get_delivery_cost(order)
    except NoDeliveryFoundError as e:
        raise _not_found(e)
    except httpx.HTTPError as e:
        raise _bad_gateway(e)
