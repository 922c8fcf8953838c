"""
Shared Route Dependencies

Protected routers use ``AuthenticatedRoute``, which runs ``require_auth``
ahead of request parsing; the ``*_service`` providers hand each handler a
service bound to the request's database session.
"""

import logging
from typing import Annotated, Any, Callable, Coroutine

from fastapi import Depends, Path, Request, Response
from fastapi.routing import APIRoute
from sqlalchemy.ext.asyncio import AsyncSession

from wacdo.core.exceptions import AuthError
from wacdo.database import get_db
from wacdo.services.catalog import (
    CategoryService,
    MenuProductService,
    MenuService,
    OptionService,
    OptionValueService,
    ProductService,
    RoleService,
    UserService,
)
from wacdo.services.tokens import TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# Path identifiers; anything that is not a positive integer is answered
# with 400 "Invalid ID" by the validation handler
EntityId = Annotated[int, Path(gt=0)]


# =============================================================================
# AUTHORIZATION
# =============================================================================

class AuthorizationGate:
    """
    Admits only requests carrying a valid bearer token.

    On success the authenticated user id is stored on
    ``request.state.user_id`` and returned.
    """

    async def __call__(self, request: Request) -> int:
        header = request.headers.get("Authorization")
        if not header or not header.startswith(BEARER_PREFIX):
            raise AuthError("Unauthorized Access")

        token_service: TokenService = request.app.state.token_service
        token = header[len(BEARER_PREFIX):].strip()
        try:
            user_id = token_service.verify(token)
        except AuthError as e:
            logger.debug(f"Rejected token on {request.url.path}: {e.message}")
            raise AuthError("Token Invalid or Expired")

        request.state.user_id = user_id
        return user_id


require_auth = AuthorizationGate()


class AuthenticatedRoute(APIRoute):
    """
    Route class for protected routers.

    The gate runs before FastAPI reads the body or path parameters, so an
    unauthenticated request is answered with 401 whatever its payload.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            await require_auth(request)
            return await handler(request)

        return authenticated_handler


# =============================================================================
# SERVICES
# =============================================================================

def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def role_service(db: AsyncSession = Depends(get_db)) -> RoleService:
    return RoleService(db)


def user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def product_service(db: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(db)


def option_service(db: AsyncSession = Depends(get_db)) -> OptionService:
    return OptionService(db)


def option_value_service(db: AsyncSession = Depends(get_db)) -> OptionValueService:
    return OptionValueService(db)


def menu_service(db: AsyncSession = Depends(get_db)) -> MenuService:
    return MenuService(db)


def menu_product_service(db: AsyncSession = Depends(get_db)) -> MenuProductService:
    return MenuProductService(db)
