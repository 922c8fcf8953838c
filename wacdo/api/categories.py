from fastapi import APIRouter, Depends, status

from wacdo.api.deps import AuthenticatedRoute, EntityId, category_service
from wacdo.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ErrorResponse,
    MessageResponse,
)
from wacdo.services.catalog import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    route_class=AuthenticatedRoute,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(service: CategoryService = Depends(category_service)):
    return await service.list_all()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: EntityId, service: CategoryService = Depends(category_service)):
    return await service.get_or_404(category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, service: CategoryService = Depends(category_service)):
    return await service.create(payload)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: EntityId,
    payload: CategoryUpdate,
    service: CategoryService = Depends(category_service),
):
    return await service.update(category_id, payload)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: EntityId, service: CategoryService = Depends(category_service)):
    await service.delete(category_id)
    return MessageResponse(message="Category deleted")
