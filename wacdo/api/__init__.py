"""HTTP routers."""

from wacdo.api import categories, menus, options, products, roles, users

routers = [
    users.router,
    users.protected_router,
    roles.router,
    categories.router,
    products.router,
    options.router,
    menus.router,
]

__all__ = ["routers"]
