from fastapi import APIRouter, Depends, HTTPException, status
from src.common.exceptions import (
    InsufficientProductQuantityError,
    ProductAlreadyInWarehouseError,
    ProductNotFoundInWarehouseError,
)
from src.services.warehouse_service.dependencies import get_warehouse_service
from src.services.warehouse_service.service import WarehouseService
from src.shared.models.address_dto import AddressDTO
from src.shared.models.warehouse_dto import (
    AddProductToWarehouseRequest,
    BookedProductsDTO,
    NewProductInWarehouseRequest,
    ShoppingCartDTO,
)

router = APIRouter(prefix="/warehouse", tags=["warehouse"])


@router.get("/address", response_model=AddressDTO)
async def get_warehouse_address(
    service: WarehouseService = Depends(get_warehouse_service)
):
    return service.get_warehouse_address()


@router.put("/", status_code=status.HTTP_200_OK)
async def new_product_in_warehouse(
    request: NewProductInWarehouseRequest,
    service: WarehouseService = Depends(get_warehouse_service)
):
    try:
        await service.new_product(request)
    except ProductAlreadyInWarehouseError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/add")
async def add_product_to_warehouse(
    request: AddProductToWarehouseRequest,
    service: WarehouseService = Depends(get_warehouse_service)
):
    try:
        await service.add_product_quantity(request)
    except ProductNotFoundInWarehouseError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/check", response_model=BookedProductsDTO)
async def check_product_quantity(
    cart: ShoppingCartDTO,
    service: WarehouseService = Depends(get_warehouse_service)
):
    try:
        return await service.check_product_quantity(cart)
    except (ProductNotFoundInWarehouseError, InsufficientProductQuantityError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
