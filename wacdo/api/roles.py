from fastapi import APIRouter, Depends, status

from wacdo.api.deps import AuthenticatedRoute, EntityId, role_service
from wacdo.schemas import ErrorResponse, MessageResponse, RoleCreate, RoleResponse, RoleUpdate
from wacdo.services.catalog import RoleService

router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
    route_class=AuthenticatedRoute,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=list[RoleResponse])
async def list_roles(service: RoleService = Depends(role_service)):
    return await service.list_all()


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(role_id: EntityId, service: RoleService = Depends(role_service)):
    return await service.get_or_404(role_id)


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(payload: RoleCreate, service: RoleService = Depends(role_service)):
    return await service.create(payload)


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: EntityId,
    payload: RoleUpdate,
    service: RoleService = Depends(role_service),
):
    return await service.update(role_id, payload)


@router.delete("/{role_id}", response_model=MessageResponse)
async def delete_role(role_id: EntityId, service: RoleService = Depends(role_service)):
    await service.delete(role_id)
    return MessageResponse(message="Role deleted")
