from fastapi import APIRouter, Depends, status

from wacdo.api.deps import AuthenticatedRoute, EntityId, menu_product_service, menu_service
from wacdo.schemas import (
    ErrorResponse,
    MenuCreate,
    MenuProductCreate,
    MenuProductResponse,
    MenuResponse,
    MenuUpdate,
    MessageResponse,
)
from wacdo.services.catalog import MenuProductService, MenuService

router = APIRouter(
    prefix="/menus",
    tags=["Menus"],
    route_class=AuthenticatedRoute,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=list[MenuResponse])
async def list_menus(service: MenuService = Depends(menu_service)):
    return await service.list_all()


# Registered before /{menu_id} so "products" is not parsed as an id
@router.delete("/products/{entry_id}", response_model=MessageResponse)
async def remove_menu_product(entry_id: EntityId, service: MenuProductService = Depends(menu_product_service)):
    await service.delete(entry_id)
    return MessageResponse(message="Menu product deleted")


@router.get("/{menu_id}", response_model=MenuResponse)
async def get_menu(menu_id: EntityId, service: MenuService = Depends(menu_service)):
    return await service.get_or_404(menu_id)


@router.post("", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
async def create_menu(payload: MenuCreate, service: MenuService = Depends(menu_service)):
    return await service.create(payload)


@router.put("/{menu_id}", response_model=MenuResponse)
async def update_menu(
    menu_id: EntityId,
    payload: MenuUpdate,
    service: MenuService = Depends(menu_service),
):
    return await service.update(menu_id, payload)


@router.patch("/{menu_id}/availability", response_model=MenuResponse)
async def toggle_menu_availability(menu_id: EntityId, service: MenuService = Depends(menu_service)):
    return await service.toggle_availability(menu_id)


@router.delete("/{menu_id}", response_model=MessageResponse)
async def delete_menu(menu_id: EntityId, service: MenuService = Depends(menu_service)):
    """Delete a menu and its entries; the products themselves are kept."""
    await service.delete(menu_id)
    return MessageResponse(message="Menu deleted")


@router.post(
    "/{menu_id}/products",
    response_model=MenuProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def add_menu_product(
    menu_id: EntityId,
    payload: MenuProductCreate,
    service: MenuService = Depends(menu_service),
):
    return await service.add_product(menu_id, payload)


@router.get("/{menu_id}/products", response_model=list[MenuProductResponse])
async def list_menu_products(menu_id: EntityId, service: MenuService = Depends(menu_service)):
    return await service.list_products(menu_id)
