from fastapi import APIRouter, Depends, status

from wacdo.api.deps import AuthenticatedRoute, EntityId, product_service
from wacdo.schemas import (
    ErrorResponse,
    MessageResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    StockUpdate,
)
from wacdo.services.catalog import ProductService

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    route_class=AuthenticatedRoute,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=list[ProductResponse])
async def list_products(service: ProductService = Depends(product_service)):
    return await service.list_all()


@router.get("/category/{category_id}", response_model=list[ProductResponse])
async def list_products_by_category(
    category_id: EntityId,
    service: ProductService = Depends(product_service),
):
    return await service.list_by_category(category_id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: EntityId, service: ProductService = Depends(product_service)):
    return await service.get_or_404(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductCreate, service: ProductService = Depends(product_service)):
    return await service.create(payload)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: EntityId,
    payload: ProductUpdate,
    service: ProductService = Depends(product_service),
):
    return await service.update(product_id, payload)


@router.patch("/{product_id}/availability", response_model=ProductResponse)
async def toggle_product_availability(
    product_id: EntityId,
    service: ProductService = Depends(product_service),
):
    """Flip ``is_available``."""
    return await service.toggle_availability(product_id)


@router.patch("/{product_id}/stock", response_model=ProductResponse)
async def update_product_stock(
    product_id: EntityId,
    payload: StockUpdate,
    service: ProductService = Depends(product_service),
):
    return await service.update_stock(product_id, payload.stock_quantity)


@router.delete("/{product_id}", response_model=MessageResponse, responses={409: {"model": ErrorResponse}})
async def delete_product(product_id: EntityId, service: ProductService = Depends(product_service)):
    await service.delete(product_id)
    return MessageResponse(message="Product deleted")
