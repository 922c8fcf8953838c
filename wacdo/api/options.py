"""
Product Option Routes

Value routes live under ``/options/values/{id}`` and
``/options/{id}/values``; the literal ``values`` segment is matched before
``/{option_id}`` because those routes are registered first.
"""

from fastapi import APIRouter, Depends, status

from wacdo.api.deps import AuthenticatedRoute, EntityId, option_service, option_value_service
from wacdo.schemas import (
    ErrorResponse,
    MessageResponse,
    OptionCreate,
    OptionResponse,
    OptionUpdate,
    OptionValueCreate,
    OptionValueResponse,
    OptionValueUpdate,
)
from wacdo.services.catalog import OptionService, OptionValueService

router = APIRouter(
    prefix="/options",
    tags=["Options"],
    route_class=AuthenticatedRoute,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


# =============================================================================
# OPTION VALUES
# =============================================================================

@router.get("/values/{value_id}", response_model=OptionValueResponse)
async def get_option_value(value_id: EntityId, service: OptionValueService = Depends(option_value_service)):
    return await service.get_or_404(value_id)


@router.put("/values/{value_id}", response_model=OptionValueResponse)
async def update_option_value(
    value_id: EntityId,
    payload: OptionValueUpdate,
    service: OptionValueService = Depends(option_value_service),
):
    return await service.update(value_id, payload)


@router.delete("/values/{value_id}", response_model=MessageResponse)
async def delete_option_value(value_id: EntityId, service: OptionValueService = Depends(option_value_service)):
    await service.delete(value_id)
    return MessageResponse(message="Option value deleted")


@router.post(
    "/{option_id}/values",
    response_model=list[OptionValueResponse],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_option_values(
    option_id: EntityId,
    payload: list[OptionValueCreate],
    service: OptionValueService = Depends(option_value_service),
):
    """Add several values at once; either all are stored or none."""
    return await service.create_many(option_id, payload)


@router.get("/{option_id}/values", response_model=list[OptionValueResponse])
async def list_option_values(option_id: EntityId, service: OptionValueService = Depends(option_value_service)):
    return await service.list_by_option(option_id)


# =============================================================================
# OPTIONS
# =============================================================================

@router.get("", response_model=list[OptionResponse])
async def list_options(service: OptionService = Depends(option_service)):
    return await service.list_all()


@router.get("/product/{product_id}", response_model=list[OptionResponse])
async def list_options_by_product(product_id: EntityId, service: OptionService = Depends(option_service)):
    return await service.list_by_product(product_id)


@router.get("/{option_id}", response_model=OptionResponse)
async def get_option(option_id: EntityId, service: OptionService = Depends(option_service)):
    return await service.get_or_404(option_id)


@router.post("", response_model=OptionResponse, status_code=status.HTTP_201_CREATED)
async def create_option(payload: OptionCreate, service: OptionService = Depends(option_service)):
    return await service.create(payload)


@router.put("/{option_id}", response_model=OptionResponse)
async def update_option(
    option_id: EntityId,
    payload: OptionUpdate,
    service: OptionService = Depends(option_service),
):
    return await service.update(option_id, payload)


@router.delete("/{option_id}", response_model=MessageResponse)
async def delete_option(option_id: EntityId, service: OptionService = Depends(option_service)):
    await service.delete(option_id)
    return MessageResponse(message="Option deleted")
