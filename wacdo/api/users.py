"""
User Routes

Registration and login are public; everything else requires a bearer token.
"""

from fastapi import APIRouter, Depends, status

from wacdo.api.deps import AuthenticatedRoute, EntityId, get_token_service, user_service
from wacdo.schemas import (
    ErrorResponse,
    MessageResponse,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from wacdo.services.catalog import UserService
from wacdo.services.tokens import TokenService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)

protected_router = APIRouter(
    prefix="/users",
    tags=["Users"],
    route_class=AuthenticatedRoute,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Register a user",
)
async def create_user(payload: UserCreate, service: UserService = Depends(user_service)):
    return await service.register(payload)


@router.post("/login", response_model=TokenResponse, summary="Exchange credentials for a token")
async def login(
    payload: UserLogin,
    service: UserService = Depends(user_service),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    user = await service.authenticate(payload.email, payload.password)
    return TokenResponse(
        access_token=tokens.issue(user.id),
        expires_in=tokens.lifetime_seconds,
    )


@protected_router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(user_service)):
    return await service.list_all()


@protected_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: EntityId, service: UserService = Depends(user_service)):
    return await service.get_or_404(user_id)


@protected_router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: EntityId,
    payload: UserUpdate,
    service: UserService = Depends(user_service),
):
    return await service.update(user_id, payload)


@protected_router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: EntityId, service: UserService = Depends(user_service)):
    await service.delete(user_id)
    return MessageResponse(message="User deleted")
